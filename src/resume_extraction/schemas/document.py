import base64
from collections.abc import Mapping
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from resume_extraction.core.exceptions import InvalidInput


class DocumentPayload(BaseModel):
    """An encoded document handed to the extraction engine verbatim."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    document: str = Field(
        min_length=1,
        validation_alias=AliasChoices("document", "pdfDataUri"),
        description="The document bytes as a self-describing string, e.g. a base64 data URI.",
    )

    @field_validator("document")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("document must not be blank")
        return value


def validate_input(payload: DocumentPayload | Mapping[str, Any]) -> DocumentPayload:
    """Check that the payload carries a non-empty document field."""
    if isinstance(payload, DocumentPayload):
        return payload

    try:
        return DocumentPayload.model_validate(payload)
    except ValidationError as exc:
        reasons = ", ".join(err["msg"] for err in exc.errors())
        raise InvalidInput(f"Invalid document payload: {reasons}") from exc


def encode_data_uri(content: bytes, mime_type: str) -> str:
    """Encode raw document bytes as a base64 data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
