"""Errors raised by the bracket core."""


class RacquetRivalsError(Exception):
    """Base class for errors raised by this package."""


class RecordNotFoundError(RacquetRivalsError, LookupError):
    """A referenced draw, slot, prediction or user does not exist."""

    def __init__(self, model_name: str, record_id: object) -> None:
        super().__init__(f"{model_name} with id {record_id!r} not found")
        self.model_name = model_name
        self.record_id = record_id


class StoreWriteError(RacquetRivalsError):
    """Persisting a record failed."""


class FilterSyntaxError(RacquetRivalsError, ValueError):
    """A filter or sort expression could not be compiled."""


class ConfigurationError(RacquetRivalsError):
    """Settings are missing or malformed."""


class MailDeliveryError(RacquetRivalsError):
    """A message could not be handed to the mail server."""
