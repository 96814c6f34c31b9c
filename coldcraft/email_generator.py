"""
Email Generation Module
Builds a cold outreach email from the generator form by filling one of two
fixed templates. Empty optional fields fall back to template-specific phrasing.
The template is picked with an injectable random source.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, TypeVar

from coldcraft.models import (
    EmailMetadata,
    FormFields,
    GeneratedEmail,
    RecipientInfo,
    SenderInfo,
    is_blank,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything with a random.Random-style choice()."""

    def choice(self, seq: Sequence[T]) -> T: ...


def _or(value: str, fallback: str) -> str:
    return fallback if is_blank(value) else value


@dataclass(frozen=True)
class EmailTemplate:
    """A subject/body pattern plus how to fill its placeholders."""
    name: str
    subject: str
    body: str
    values: Callable[[FormFields], dict]

    def render(self, fields: FormFields) -> tuple[str, str]:
        values = self.values(fields)
        return self.subject.format(**values), self.body.format(**values)


GROWTH_STRATEGY_SUBJECT = "Quick question about {recipient_company}'s {pain_point}"

GROWTH_STRATEGY_BODY = """Hi {recipient_name},

I noticed {recipient_company} has been expanding rapidly in the {industry} space. Impressive work on your recent initiatives!

I'm {sender_name} from {sender_company}. We've helped similar companies like yours {value_proposition}.

{pain_point_clause}

Would you be open to a brief 15-minute call this week to discuss how we've helped companies like {recipient_company} overcome similar challenges?

Best regards,
{sender_name}
{sender_company}"""


def _growth_strategy_values(fields: FormFields) -> dict:
    if is_blank(fields.pain_point):
        clause = (
            "I imagine scaling operations while maintaining quality "
            "might be challenging at your current growth rate."
        )
    else:
        clause = f"I imagine dealing with {fields.pain_point} might be challenging at your scale."
    return {
        "recipient_name": fields.recipient_name,
        "recipient_company": fields.recipient_company,
        "sender_name": fields.sender_name,
        "sender_company": fields.sender_company,
        "pain_point": _or(fields.pain_point, "growth strategy"),
        "industry": _or(fields.industry, "tech"),
        "value_proposition": _or(
            fields.value_proposition,
            "streamline their operations and increase efficiency by 40%",
        ),
        "pain_point_clause": clause,
    }


RECENT_WORK_SUBJECT = "{recipient_name}, loved your recent work at {recipient_company}"

RECENT_WORK_BODY = """Hi {recipient_name},

I came across {recipient_company}'s recent {industry} and was genuinely impressed by the innovation you're bringing to the market.

I'm {sender_name}, and I work with {recipient_role} at companies like yours to {value_proposition}.

{pain_point_clause} We've developed a unique approach that's helped companies achieve remarkable results.

Would you be interested in a quick conversation about how this might apply to {recipient_company}?

Looking forward to connecting,
{sender_name}"""


def _recent_work_values(fields: FormFields) -> dict:
    if is_blank(fields.pain_point):
        clause = "Many leaders I speak with are looking for ways to scale more efficiently."
    else:
        clause = f"Many leaders I speak with mention {fields.pain_point} as a key challenge."
    return {
        "recipient_name": fields.recipient_name,
        "recipient_company": fields.recipient_company,
        "sender_name": fields.sender_name,
        "industry": _or(fields.industry, "product launch"),
        "recipient_role": _or(fields.recipient_role, "executives"),
        "value_proposition": _or(fields.value_proposition, "optimize their growth strategies"),
        "pain_point_clause": clause,
    }


TEMPLATES = (
    EmailTemplate(
        name="growth_strategy",
        subject=GROWTH_STRATEGY_SUBJECT,
        body=GROWTH_STRATEGY_BODY,
        values=_growth_strategy_values,
    ),
    EmailTemplate(
        name="recent_work",
        subject=RECENT_WORK_SUBJECT,
        body=RECENT_WORK_BODY,
        values=_recent_work_values,
    ),
)

_default_rng = random.Random()


def generate_email(fields: FormFields, rng: Optional[RandomSource] = None) -> GeneratedEmail:
    """
    Fill a randomly chosen template with the form values.

    Args:
        fields: Values from the generator form. Callers are expected to check
            fields.can_generate() first; empty names are substituted as-is.
        rng: Anything with a random.Random-style choice(). Defaults to a
            module-level random.Random.

    Returns:
        GeneratedEmail with a fresh id and timestamp.
    """
    template = (rng or _default_rng).choice(TEMPLATES)
    subject, body = template.render(fields)

    email = GeneratedEmail(
        subject=subject,
        body=body,
        tone=fields.tone,
        recipient_info=RecipientInfo(
            name=fields.recipient_name,
            company=fields.recipient_company,
            role=fields.recipient_role,
        ),
        sender_info=SenderInfo(
            name=fields.sender_name,
            company=fields.sender_company,
        ),
        metadata=EmailMetadata(
            industry=fields.industry,
            purpose=fields.purpose,
            pain_point=fields.pain_point,
            value_proposition=fields.value_proposition,
        ),
        template=template.name,
    )

    logger.info(f"Generated email {email.id} from template '{template.name}' (tone: {fields.tone.value})")
    return email


class EmailGenerator:
    """Holds the random source so the session can be wired once."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or _default_rng

    def generate(self, fields: FormFields) -> GeneratedEmail:
        return generate_email(fields, rng=self.rng)
