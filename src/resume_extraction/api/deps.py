from fastapi import Depends
from google import genai

from resume_extraction.core.config import get_settings
from resume_extraction.services.engine import ExtractionEngine
from resume_extraction.services.gemini_engine import GeminiExtractionEngine

__all__ = ["get_extraction_engine", "get_llm_client"]


def get_llm_client() -> genai.Client:
    """Gemini client built from the configured API key."""
    return genai.Client(api_key=get_settings().google_ai_api_key)


def get_extraction_engine(
    llm_client: genai.Client = Depends(get_llm_client),
) -> ExtractionEngine:
    settings = get_settings()
    return GeminiExtractionEngine(
        llm_client,
        settings.gemini_model,
        temperature=settings.gemini_temperature,
        default_mime_type=settings.default_document_mime_type,
    )
