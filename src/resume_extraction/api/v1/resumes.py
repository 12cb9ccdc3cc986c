import logging
import mimetypes
from pathlib import Path

from fastapi import APIRouter, Depends, UploadFile

from resume_extraction.api.deps import get_extraction_engine
from resume_extraction.core.config import get_settings
from resume_extraction.core.exceptions import (
    AIResponseError,
    AIServiceError,
    DocumentValidationError,
    EngineUnavailable,
    InvalidDocumentError,
    InvalidInput,
    NoOutput,
    PayloadTooLargeError,
    SchemaMismatch,
    UnparsableDocumentError,
)
from resume_extraction.schemas.document import DocumentPayload, encode_data_uri
from resume_extraction.schemas.extraction import ExtractionResult
from resume_extraction.services.engine import ExtractionEngine
from resume_extraction.services.resume_extractor import extract_resume

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["resumes"])


def _validate_upload(file: UploadFile) -> None:
    settings = get_settings()
    if not file.filename:
        raise DocumentValidationError("Filename is required")

    ext = Path(file.filename).suffix.lower()
    if ext not in settings.allowed_extensions:
        raise DocumentValidationError(
            f"File type '{ext}' not allowed. Allowed: {', '.join(sorted(settings.allowed_extensions))}"
        )


def _media_type(file: UploadFile) -> str:
    if file.content_type and file.content_type != "application/octet-stream":
        return file.content_type
    guessed, _ = mimetypes.guess_type(file.filename or "")
    return guessed or get_settings().default_document_mime_type


async def _run_extraction(engine: ExtractionEngine, payload: DocumentPayload) -> ExtractionResult:
    try:
        return await extract_resume(engine, payload)
    except InvalidInput as e:
        raise InvalidDocumentError(e) from e
    except EngineUnavailable as e:
        raise AIServiceError(e) from e
    except NoOutput as e:
        raise UnparsableDocumentError(e) from e
    except SchemaMismatch as e:
        raise AIResponseError(e) from e


@router.post(
    "/extract",
    response_model=ExtractionResult,
    response_model_exclude_none=True,
)
async def extract_from_payload(
    payload: DocumentPayload,
    engine: ExtractionEngine = Depends(get_extraction_engine),
) -> ExtractionResult:
    """Extract structured resume data from an encoded document."""
    return await _run_extraction(engine, payload)


@router.post(
    "/extract/upload",
    response_model=ExtractionResult,
    response_model_exclude_none=True,
)
async def extract_from_upload(
    file: UploadFile,
    engine: ExtractionEngine = Depends(get_extraction_engine),
) -> ExtractionResult:
    """Encode an uploaded resume file and extract structured data from it."""
    _validate_upload(file)

    settings = get_settings()
    content = await file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise PayloadTooLargeError(f"File size exceeds maximum of {settings.max_upload_size_mb}MB")
    if not content:
        raise DocumentValidationError("Uploaded file is empty")

    media_type = _media_type(file)
    logger.info("Extracting uploaded resume %s (%s, %d bytes)", file.filename, media_type, len(content))
    payload = DocumentPayload(document=encode_data_uri(content, media_type))
    return await _run_extraction(engine, payload)
