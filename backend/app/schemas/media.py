from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ImageSearchResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    query: str
    images: list[dict[str, Any]] = []
    total: int = 0
    is_end: bool = True
    message: str | None = None


class UploadResponse(BaseModel):
    success: bool = True
    url: str
    filename: str
