from typing import Any, Protocol

from pydantic import BaseModel


class ExtractionEngine(Protocol):
    """A generative service that turns a document into structured data.

    Implementations return the raw structured response, or ``None`` when the
    engine answered without usable output. Transport and service failures
    must be raised as ``EngineUnavailable``.
    """

    async def submit_extraction_request(
        self,
        document: str,
        instruction: str,
        output_schema: type[BaseModel],
    ) -> Any | None: ...
