"""
Exceptions raised by the remote client, the submission flow and the form builder.
"""

from __future__ import annotations

from typing import Sequence

DUPLICATE_MARKER = "DUPLICATE_ENTRY"


class DashboardError(Exception):
    """Base class for every error this package raises on purpose."""


class RemoteError(DashboardError):
    pass


class RemoteFormatError(RemoteError):
    """The endpoint answered, but the payload is malformed or incomplete."""


class RemoteServiceError(RemoteError):
    """The endpoint or the transport reported a failure."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SubmissionError(DashboardError):
    """A record was rejected by the endpoint or never reached it."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def display_message(self) -> str:
        return str(self)


class SubmissionDuplicateError(SubmissionError):
    """The endpoint already holds a record for this indicator and date."""

    @property
    def display_message(self) -> str:
        return strip_duplicate_marker(str(self))


class FormValidationError(DashboardError):
    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = tuple(missing)
        super().__init__("Preencha os indicadores obrigatórios: " + ", ".join(self.missing))


def is_duplicate_message(message: object) -> bool:
    return isinstance(message, str) and DUPLICATE_MARKER in message


def strip_duplicate_marker(message: str) -> str:
    return message.replace(f"{DUPLICATE_MARKER}:", "").replace(DUPLICATE_MARKER, "").strip()
