"""Domain exceptions raised by services and translated by the routers."""

from typing import Optional


class LinkStashError(Exception):
    """Base class for all service-level errors."""


class InvalidUrlError(LinkStashError):
    """The submitted URL is missing, malformed, or not http(s)."""


class FetchError(LinkStashError):
    """Every request profile failed or the shared deadline expired.

    ``last_error`` carries the most recent underlying exception, or ``None``
    when no attempt ever ran (for example an immediate timeout).
    """

    def __init__(self, message: str, last_error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.last_error = last_error


class ClassifierNotConfiguredError(LinkStashError):
    """No LLM API key is configured."""


class StorageNotConfiguredError(LinkStashError):
    """Supabase credentials are missing."""


class RecordNotFoundError(LinkStashError):
    """A stored record does not exist for the current user."""
