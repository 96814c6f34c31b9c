"""
Sequence Builder Module
Turns a click-ordered selection of generated emails into a follow-up
sequence with a fixed 3-day cadence.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Union

from coldcraft.errors import SequenceValidationError
from coldcraft.models import GeneratedEmail, Sequence, SequenceEmail, SequenceStatus, is_blank

logger = logging.getLogger(__name__)

DELAY_INTERVAL_DAYS = 3

EmailPool = Union[Mapping[str, GeneratedEmail], Iterable[GeneratedEmail]]


def delay_days_for(index: int) -> int:
    """Offset in days from the first send for the email at a 0-based index."""
    return 0 if index == 0 else index * DELAY_INTERVAL_DAYS


def toggle_selection(selected: list[str], email_id: str) -> list[str]:
    """Remove email_id if selected, otherwise append it. Returns a new list."""
    if email_id in selected:
        return [i for i in selected if i != email_id]
    return [*selected, email_id]


def _index_pool(pool: EmailPool) -> Mapping[str, GeneratedEmail]:
    if isinstance(pool, Mapping):
        return pool
    return {email.id: email for email in pool}


def build_sequence(
    name: str,
    description: str,
    selected_ids: list[str],
    pool: EmailPool,
) -> Sequence:
    """
    Assemble a draft sequence from selected emails.

    Args:
        name: Sequence name (required, non-blank).
        description: Free-text description.
        selected_ids: Email ids in selection order. This order is kept.
        pool: Generated emails, as an id -> email mapping or any iterable.

    Returns:
        A new Sequence in draft status holding copies of the selected emails.

    Raises:
        SequenceValidationError: empty name, empty selection or unknown id.
    """
    if is_blank(name):
        raise SequenceValidationError("empty name")
    if not selected_ids:
        raise SequenceValidationError("no emails selected")

    by_id = _index_pool(pool)
    emails = []
    for index, email_id in enumerate(selected_ids):
        source = by_id.get(email_id)
        if source is None:
            logger.warning(f"Sequence '{name}' references unknown email id {email_id}")
            raise SequenceValidationError("unknown email id")

        emails.append(SequenceEmail(
            **source.model_dump(),
            sequence_position=index + 1,
            delay_days=delay_days_for(index),
        ))

    sequence = Sequence(
        name=name,
        description=description,
        emails=tuple(emails),
        status=SequenceStatus.DRAFT,
        total_emails=len(emails),
    )

    logger.info(f"Built sequence '{name}' with {sequence.total_emails} emails over {sequence.total_days} days")
    return sequence


class SequenceAssembler:
    """Thin object wrapper so callers can pass the builder around."""

    def build(self, name: str, description: str, selected_ids: list[str], pool: EmailPool) -> Sequence:
        return build_sequence(name, description, selected_ids, pool)
