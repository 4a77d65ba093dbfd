from typing import Optional


class TrainingClientError(Exception):
    """Base class for errors raised by the training client."""


class EncodingError(TrainingClientError):
    """A field value has no wire representation."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Cannot encode field '{field}': {reason}")


class TrainingSubmissionError(TrainingClientError):
    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)
