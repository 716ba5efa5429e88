import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """API payloads speak camelCase while the tables stay snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Everything except the idea comes from the model and is untrusted.
class GenerationCreate(CamelModel):
    idea_input: str = Field(min_length=1)
    startup_name: str | None = None
    tagline: str | None = None
    description: str | None = None
    target_audience: str | None = None
    key_features: list[Any] = Field(default_factory=list)
    color_scheme: dict[str, Any] = Field(default_factory=dict)
    landing_page_html: str | None = None


class GenerationPublic(GenerationCreate):
    id: uuid.UUID
    owner_id: uuid.UUID
    created_at: datetime | None = None


class GenerateRequest(BaseModel):
    idea: str | None = None


class PitchExportRequest(CamelModel):
    generation_id: uuid.UUID | None = None


class DeleteResult(BaseModel):
    success: bool = True
