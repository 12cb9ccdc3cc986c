"""Gemini-backed extraction engine."""

import base64
import binascii
import json
import logging
from typing import Any
from urllib.parse import unquote_to_bytes

import httpx
from google import genai
from google.genai import errors, types
from pydantic import BaseModel

from resume_extraction.core.exceptions import DocumentRejected, EngineUnavailable, InvalidInput

logger = logging.getLogger(__name__)


def document_to_part(document: str, default_mime_type: str) -> types.Part:
    """Turn a data URI into inline bytes, anything else into a file reference."""
    if not document.startswith("data:"):
        return types.Part.from_uri(file_uri=document, mime_type=default_mime_type)

    header, sep, data = document[len("data:") :].partition(",")
    if not sep:
        raise InvalidInput("Malformed data URI: missing ',' separator")

    media_type, *params = header.split(";")
    mime_type = media_type or default_mime_type
    if "base64" in params:
        try:
            content = base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise InvalidInput(f"Malformed data URI: {e}") from e
    else:
        content = unquote_to_bytes(data)

    if not content:
        raise InvalidInput("Data URI carries no document content")
    return types.Part.from_bytes(data=content, mime_type=mime_type)


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def _part_kind(part: types.Part) -> str:
    if part.inline_data is not None:
        return f"inline {part.inline_data.mime_type}"
    return "file reference"


class GeminiExtractionEngine:
    def __init__(
        self,
        client: genai.Client,
        model: str,
        *,
        temperature: float = 0.1,
        default_mime_type: str = "application/pdf",
    ) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature
        self.default_mime_type = default_mime_type

    async def submit_extraction_request(
        self,
        document: str,
        instruction: str,
        output_schema: type[BaseModel],
    ) -> Any | None:
        """Send the document and instruction to Gemini and return the decoded JSON."""
        part = document_to_part(document, self.default_mime_type)
        logger.info("Requesting extraction from %s (%s)", self.model, _part_kind(part))

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=[part, instruction],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=output_schema,
                    temperature=self.temperature,
                ),
            )
        except errors.APIError as e:
            # INVALID_ARGUMENT: the document or reference itself was refused
            if isinstance(e, errors.ClientError) and e.code == 400:
                logger.warning("Gemini rejected the document: %s", e.message)
                raise DocumentRejected(
                    f"Gemini rejected the document: {e.message}", status_code=e.code
                ) from e
            logger.warning("Gemini API error %s: %s", e.code, e.message)
            raise EngineUnavailable(f"Gemini API error: {e.message}", status_code=e.code) from e
        except httpx.HTTPError as e:
            logger.warning("Gemini transport error: %s", e)
            raise EngineUnavailable(f"Gemini transport error: {e}") from e

        raw = response.text
        if not raw:
            return None

        try:
            return json.loads(_strip_code_fence(raw))
        except json.JSONDecodeError as e:
            logger.warning("Gemini returned non-JSON output: %s", e)
            return None
