import asyncio
from collections.abc import Sequence
from typing import Any

from fastapi import HTTPException, status


class ResumeExtractionError(Exception):
    """Base class for failures of a single extraction call."""

    cause = "extraction_error"


class InvalidInput(ResumeExtractionError):
    """Raised when a payload is rejected before the engine is contacted."""

    cause = "invalid_input"


class ExtractionFailed(ResumeExtractionError):
    """The engine did not produce a conformant result."""

    cause = "extraction_failed"


class EngineUnavailable(ExtractionFailed):
    """The engine could not be reached or failed at the service level."""

    cause = "engine_unavailable"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NoOutput(ExtractionFailed):
    """The engine answered but returned no structured content."""

    cause = "no_output"


class DocumentRejected(NoOutput):
    """The engine refused the document itself. Resending it will not help."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SchemaMismatch(ExtractionFailed):
    """The engine response does not satisfy the output contract."""

    cause = "schema_mismatch"

    def __init__(self, errors: Sequence[dict[str, Any]]) -> None:
        self.errors = list(errors)
        self.field_paths = [err["path"] for err in self.errors]
        details = "; ".join(f"{err['path']}: {err['message']}" for err in self.errors)
        super().__init__(f"Response does not match the extraction schema ({details})")


class Cancelled(asyncio.CancelledError):
    """The extraction was cancelled or timed out by the caller."""


class DocumentValidationError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
        )


class PayloadTooLargeError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=detail,
        )


class ExtractionHTTPError(HTTPException):
    """An extraction failure with its cause in the response body."""

    status_code_for_error: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, error: ResumeExtractionError, **extra: Any) -> None:
        super().__init__(
            status_code=self.status_code_for_error,
            detail={"message": str(error), "cause": error.cause, **extra},
        )


class InvalidDocumentError(ExtractionHTTPError):
    status_code_for_error = status.HTTP_422_UNPROCESSABLE_ENTITY


class UnparsableDocumentError(ExtractionHTTPError):
    status_code_for_error = status.HTTP_422_UNPROCESSABLE_ENTITY


class AIServiceError(ExtractionHTTPError):
    status_code_for_error = status.HTTP_503_SERVICE_UNAVAILABLE


class AIResponseError(ExtractionHTTPError):
    status_code_for_error = status.HTTP_502_BAD_GATEWAY

    def __init__(self, error: SchemaMismatch) -> None:
        super().__init__(error, field_paths=error.field_paths)
