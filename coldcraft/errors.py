"""Exceptions raised by the generator, sequence builder and session."""


class ColdCraftError(Exception):
    """Base class for recoverable errors surfaced to the user."""


class SequenceValidationError(ColdCraftError, ValueError):
    """Sequence input was rejected (empty name, no emails, unknown id...)."""


class MissingRequiredFieldsError(ColdCraftError, ValueError):
    """Recipient name and sender name are both required to generate."""


class GenerationInProgressError(ColdCraftError):
    """A generation is already pending for this session."""
