from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Document(BaseModel):
    # camelCase on the wire and in the document store; store system fields are dropped
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Comment(_Document):
    id: str
    name: str = "Anonymous"
    comment: str
    rating: int | float = 0
    created_at: str


class Photo(_Document):
    id: str
    blob_name: str
    image_url: str
    title: str = ""
    caption: str = ""
    location: str = ""
    people: list[str] = Field(default_factory=list)
    created_at: str
    comments: list[Comment] = Field(default_factory=list)
    avg_rating: float = 0
    rating_count: int = 0

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


class CommentCreate(BaseModel):
    name: str | None = None
    comment: Any = None
    # free-form: non-numeric input is treated as 0 rather than rejected
    rating: Any = None
