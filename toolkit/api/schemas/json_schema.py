# toolkit/api/schemas/json_schema.py
from pydantic import BaseModel, Field


class EchoTag(BaseModel):
    name: str


class EchoRequest(BaseModel):
    action: str = Field(min_length=1, max_length=100)
    message: str | None = None
    tags: list[EchoTag] = Field(default_factory=list)
