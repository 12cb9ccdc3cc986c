import base64
import json
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from resume_extraction.api.deps import get_llm_client
from resume_extraction.core.config import get_settings
from resume_extraction.main import create_app

# Minimal single-page PDF; the engine is mocked so the content is never parsed.
SAMPLE_PDF_BYTES = (
    b"%PDF-1.4\n"
    b"1 0 obj<</Type/Catalog/Pages 2 0 R>>endobj\n"
    b"2 0 obj<</Type/Pages/Kids[3 0 R]/Count 1>>endobj\n"
    b"3 0 obj<</Type/Page/MediaBox[0 0 612 792]/Parent 2 0 R>>endobj\n"
    b"trailer<</Size 4/Root 1 0 R>>\n"
    b"%%EOF"
)
SAMPLE_DATA_URI = "data:application/pdf;base64," + base64.b64encode(SAMPLE_PDF_BYTES).decode()


def make_extraction_data(**overrides) -> dict:
    """Helper to create a conformant engine response for the Jane Doe resume."""
    data = {
        "personalDetails": {
            "fullName": "Jane Doe",
            "email": "jane@example.com",
            "phoneNumber": "+1 555 0100",
            "address": "1 Main St, Springfield",
            "linkedinUrl": "https://www.linkedin.com/in/janedoe",
        },
        "summary": "Backend engineer focused on distributed systems.",
        "experience": [
            {
                "jobTitle": "Software Engineer",
                "company": "Acme",
                "startDate": "2019-01-01",
                "endDate": "Present",
                "description": "Builds and operates payment APIs.",
            }
        ],
        "education": [
            {
                "institution": "State University",
                "degree": "BSc Computer Science",
                "graduationDate": "2018-06",
            }
        ],
        "projects": [
            {
                "name": "ledger",
                "description": "Double-entry bookkeeping library.",
                "url": "https://github.com/janedoe/ledger",
            }
        ],
        "skills": "Python, FastAPI, PostgreSQL",
    }
    data.update(overrides)
    return data


def make_gemini_response(data: dict | list | None = None, text: str | None = None) -> MagicMock:
    """Create a mock Gemini generate_content response."""
    response = MagicMock()
    if text is not None:
        response.text = text
    elif data is not None:
        response.text = json.dumps(data)
    else:
        response.text = None
    return response


@pytest.fixture
def mock_gemini_client() -> MagicMock:
    """Return a mocked google.genai.Client."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=make_gemini_response(make_extraction_data())
    )
    return client


@pytest.fixture
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def client(mock_gemini_client: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    app = create_app()
    app.dependency_overrides[get_llm_client] = lambda: mock_gemini_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
