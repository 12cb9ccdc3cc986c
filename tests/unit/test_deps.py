"""Unit tests for API dependency wiring."""

from unittest.mock import MagicMock

import pytest
from google import genai

from resume_extraction.api.deps import get_extraction_engine, get_llm_client
from resume_extraction.services.gemini_engine import GeminiExtractionEngine

pytestmark = pytest.mark.unit


def test_llm_client_uses_configured_key(monkeypatch, clear_settings_cache) -> None:
    monkeypatch.setenv("GOOGLE_AI_API_KEY", "test-key")

    client = get_llm_client()

    assert isinstance(client, genai.Client)


def test_extraction_engine_uses_settings(monkeypatch, clear_settings_cache) -> None:
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")
    monkeypatch.setenv("GEMINI_TEMPERATURE", "0.3")
    monkeypatch.setenv("DEFAULT_DOCUMENT_MIME_TYPE", "image/png")
    llm_client = MagicMock()

    engine = get_extraction_engine(llm_client)

    assert isinstance(engine, GeminiExtractionEngine)
    assert engine.client is llm_client
    assert engine.model == "gemini-2.5-flash"
    assert engine.temperature == 0.3
    assert engine.default_mime_type == "image/png"
