from collections.abc import Sequence
from typing import Any

from pydantic import (
    AliasChoices,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from resume_extraction.core.exceptions import SchemaMismatch

PRESENT = "Present"
_ONGOING_MARKERS = {"present", "current", "now"}

_url_adapter = TypeAdapter(AnyUrl)


class _ResumeSection(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
        extra="ignore",
    )


class PersonalDetails(_ResumeSection):
    full_name: str | None = Field(default=None, description="The full name of the candidate.")
    email: str | None = Field(default=None, description="The email address of the candidate.")
    phone_number: str | None = Field(
        default=None, description="The phone number of the candidate."
    )
    address: str | None = Field(
        default=None, description="The physical address of the candidate."
    )
    linkedin_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("linkedinUrl", "linkedin_url", "linkedin"),
        serialization_alias="linkedinUrl",
        description="The URL of the LinkedIn profile.",
    )


class ExperienceEntry(_ResumeSection):
    job_title: str | None = Field(default=None, description="The job title.")
    company: str | None = Field(default=None, description="The company name.")
    start_date: str | None = Field(default=None, description="The start date in 'YYYY-MM-DD' format.")
    end_date: str | None = Field(
        default=None, description="The end date in 'YYYY-MM-DD' format, or 'Present'."
    )
    description: str | None = Field(
        default=None, description="A description of the role and responsibilities."
    )

    @field_validator("end_date")
    @classmethod
    def _normalize_ongoing(cls, value: str | None) -> str | None:
        if value is not None and value.lower() in _ONGOING_MARKERS:
            return PRESENT
        return value


class EducationEntry(_ResumeSection):
    institution: str | None = Field(
        default=None, description="The name of the educational institution."
    )
    degree: str | None = Field(default=None, description="The degree or certificate obtained.")
    graduation_date: str | None = Field(
        default=None, description="The graduation date in 'YYYY-MM' format."
    )


class ProjectEntry(_ResumeSection):
    name: str | None = Field(default=None, description="The name of the project.")
    description: str | None = Field(
        default=None, description="A brief description of the project."
    )
    url: str | None = Field(default=None, description="A valid URL for the project.")

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        # Validated as a URL but stored exactly as given.
        if value is not None:
            try:
                _url_adapter.validate_python(value)
            except ValidationError:
                raise ValueError(f"'{value}' is not a valid URL") from None
        return value


class ExtractionResult(_ResumeSection):
    """Structured resume data returned by a successful extraction."""

    personal_details: PersonalDetails | None = None
    summary: str | None = Field(
        default=None, description="The professional summary or objective."
    )
    experience: list[ExperienceEntry] | None = Field(
        default=None, description="A list of work experiences."
    )
    education: list[EducationEntry] | None = Field(
        default=None, description="A list of educational qualifications."
    )
    projects: list[ProjectEntry] | None = Field(default=None, description="A list of projects.")
    skills: str | None = Field(default=None, description="A comma-separated list of skills.")


def format_field_path(loc: Sequence[str | int]) -> str:
    """Render a pydantic error location as ``projects[1].url``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "<root>"


def validate_output(raw: Any) -> ExtractionResult:
    """Validate an engine response against the extraction contract.

    Unknown keys are dropped. Any type or format violation, including a single
    malformed project URL, rejects the whole response.
    """
    try:
        return ExtractionResult.model_validate(raw)
    except ValidationError as exc:
        errors = [
            {
                "path": format_field_path(err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        raise SchemaMismatch(errors) from exc
