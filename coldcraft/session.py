"""
Outreach Session
In-memory state for one user: the generated email log, the sequence log,
the email picked for preview and the pending-generation guard.
Nothing is persisted; a new session starts empty.
"""

import asyncio
import logging
from typing import Optional

from coldcraft.config import AppConfig
from coldcraft.email_generator import EmailGenerator
from coldcraft.errors import GenerationInProgressError, MissingRequiredFieldsError
from coldcraft.models import FormFields, GeneratedEmail, Sequence
from coldcraft.sequence_builder import build_sequence

logger = logging.getLogger(__name__)


class OutreachSession:
    """
    Append-only logs of generated emails and sequences.

    list_emails() and list_sequences() return newest first. Records are
    never edited or removed.
    """

    def __init__(self, generator: Optional[EmailGenerator] = None, config: Optional[AppConfig] = None):
        self.generator = generator or EmailGenerator()
        self.config = config or AppConfig()
        self._emails: list[GeneratedEmail] = []
        self._sequences: list[Sequence] = []
        self._selected_id: Optional[str] = None
        self._generating = False

    # --- Generated emails ---

    def add_email(self, email: GeneratedEmail) -> GeneratedEmail:
        self._emails.append(email)
        return email

    def list_emails(self) -> list[GeneratedEmail]:
        return list(reversed(self._emails))

    def get_email(self, email_id: str) -> GeneratedEmail:
        """Raises KeyError if no email has this id."""
        for email in self._emails:
            if email.id == email_id:
                return email
        raise KeyError(email_id)

    def email_pool(self) -> dict[str, GeneratedEmail]:
        return {email.id: email for email in self._emails}

    # --- Sequences ---

    def add_sequence(self, sequence: Sequence) -> Sequence:
        self._sequences.append(sequence)
        return sequence

    def list_sequences(self) -> list[Sequence]:
        return list(reversed(self._sequences))

    def create_sequence(self, name: str, description: str, selected_ids: list[str]) -> Sequence:
        """Build a sequence against the current pool and record it."""
        sequence = build_sequence(name, description, selected_ids, self.email_pool())
        return self.add_sequence(sequence)

    # --- Preview selection ---

    def select_email(self, email_id: str) -> GeneratedEmail:
        email = self.get_email(email_id)
        self._selected_id = email_id
        return email

    def selected_email(self) -> Optional[GeneratedEmail]:
        """The picked email, else the newest one, else None."""
        if self._selected_id is not None:
            return self.get_email(self._selected_id)
        if self._emails:
            return self._emails[-1]
        return None

    # --- Generation ---

    @property
    def is_generating(self) -> bool:
        return self._generating

    async def generate(self, fields: FormFields) -> GeneratedEmail:
        """
        Generate an email after the simulated service latency and record it.

        Raises:
            GenerationInProgressError: If a generation is already pending.
            MissingRequiredFieldsError: If recipient or sender name is blank.
        """
        if self._generating:
            raise GenerationInProgressError("An email is already being generated")
        if not fields.can_generate():
            raise MissingRequiredFieldsError("Recipient name and sender name are required")

        self._generating = True
        try:
            logger.info(f"Generating email for {fields.recipient_name} at {fields.recipient_company or 'unknown company'}...")
            await asyncio.sleep(self.config.generation_delay_seconds)
            email = self.generator.generate(fields)
            return self.add_email(email)
        finally:
            self._generating = False

    def generate_sync(self, fields: FormFields) -> GeneratedEmail:
        """Blocking wrapper for callers without an event loop (the Streamlit script)."""
        return asyncio.run(self.generate(fields))
