from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    model: str
    version: str


class StatusResponse(BaseModel):
    status: str
