import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from resume_extraction.core.exceptions import Cancelled, NoOutput, SchemaMismatch
from resume_extraction.schemas.document import DocumentPayload, validate_input
from resume_extraction.schemas.extraction import ExtractionResult, validate_output
from resume_extraction.services.engine import ExtractionEngine

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = (
    "You are an expert resume parser. Analyze the attached resume document "
    "and extract its information into the structured JSON format provided.\n"
    "Be as accurate as possible. Extract all sections: personal details "
    "(full name, email, phone number, address, LinkedIn URL), professional "
    "summary, work experience, education, projects and skills.\n"
    "Format every work experience start and end date as 'YYYY-MM-DD'. "
    "If a role is ongoing, set its end date to the exact word 'Present'.\n"
    "Format graduation dates as 'YYYY-MM'.\n"
    "Only include a project URL if it is a complete, valid URL.\n"
    "List skills as a single comma-separated string.\n"
    "If a field is not found in the document, leave it out."
)


async def extract_resume(
    engine: ExtractionEngine,
    payload: DocumentPayload | Mapping[str, Any],
    *,
    instruction: str = EXTRACTION_PROMPT,
) -> ExtractionResult:
    """Run one extraction round-trip and return a schema-conformant result.

    Raises InvalidInput before contacting the engine, EngineUnavailable,
    NoOutput or SchemaMismatch for engine-side failures, and Cancelled when
    the calling task is cancelled or times out while waiting on the engine.
    """
    document = validate_input(payload)

    try:
        raw = await engine.submit_extraction_request(
            document.document, instruction, ExtractionResult
        )
    except asyncio.CancelledError as e:
        logger.info("Resume extraction cancelled while waiting on the engine")
        raise Cancelled("Resume extraction was cancelled") from e

    if raw is None or raw in ({}, [], ""):
        logger.warning("Extraction engine returned no structured output")
        raise NoOutput("The extraction engine returned no structured output")

    try:
        return validate_output(raw)
    except SchemaMismatch as e:
        logger.warning("Extraction output rejected at %s", ", ".join(e.field_paths))
        raise
