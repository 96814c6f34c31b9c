"""Pydantic models for form input, generated emails and sequences."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def _new_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty and whitespace-only strings."""
    return not value or not value.strip()


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    CASUAL = "casual"
    URGENT = "urgent"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return TONE_DESCRIPTIONS[self]


TONE_DESCRIPTIONS = {
    Tone.PROFESSIONAL: "Formal and business-focused",
    Tone.FRIENDLY: "Warm and approachable",
    Tone.CASUAL: "Relaxed and conversational",
    Tone.URGENT: "Time-sensitive and direct",
}


class SequenceStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"


class FormFields(BaseModel):
    """Raw values from the generator form. Every field is optional."""
    recipient_name: str = ""
    recipient_company: str = ""
    recipient_role: str = ""
    sender_name: str = ""
    sender_company: str = ""
    purpose: str = ""
    tone: Tone = Tone.PROFESSIONAL
    industry: str = ""
    pain_point: str = ""
    value_proposition: str = ""

    def can_generate(self) -> bool:
        """Generation needs both a recipient and a sender name."""
        return not is_blank(self.recipient_name) and not is_blank(self.sender_name)


class RecipientInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    company: str = ""
    role: str = ""


class SenderInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    company: str = ""


class EmailMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    industry: str = ""
    purpose: str = ""
    pain_point: str = ""
    value_proposition: str = ""


class GeneratedEmail(BaseModel):
    """A templated email. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    subject: str
    body: str
    tone: Tone = Tone.PROFESSIONAL
    recipient_info: RecipientInfo = Field(default_factory=RecipientInfo)
    sender_info: SenderInfo = Field(default_factory=SenderInfo)
    metadata: EmailMetadata = Field(default_factory=EmailMetadata)
    template: str = ""
    created_at: datetime = Field(default_factory=_utc_now)


class SequenceEmail(GeneratedEmail):
    """A copy of a generated email placed at a position in a sequence."""
    sequence_position: int = Field(ge=1)
    delay_days: int = Field(ge=0)


class Sequence(BaseModel):
    """An ordered set of emails with send offsets."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    name: str = Field(min_length=1)
    description: str = ""
    emails: tuple[SequenceEmail, ...] = ()
    status: SequenceStatus = SequenceStatus.DRAFT
    total_emails: int = 0
    created_at: datetime = Field(default_factory=_utc_now)

    @property
    def total_days(self) -> int:
        """Offset of the last email, i.e. how long the sequence runs."""
        if not self.emails:
            return 0
        return self.emails[-1].delay_days
