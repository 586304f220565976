# wishlist/models.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_AUTHOR = "Unknown Author"


class BookRecord(BaseModel):
    """One book card extracted from a wishlist page. Immutable once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="page:<n>:index:<i>:slug:<slug>")
    title: str = Field(..., min_length=1)
    author: str = UNKNOWN_AUTHOR
    cover_image: Optional[str] = Field(None, alias="coverImage")
    price: Optional[str] = None
    availability: Optional[str] = None
    url: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("author", mode="before")
    @classmethod
    def _default_author(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return UNKNOWN_AUTHOR
        return v.strip()

    @field_validator("cover_image", "price", "availability", "url", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        # optional fields are either meaningful or absent
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    def to_dict(self):
        """Serialize with the public field names, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
