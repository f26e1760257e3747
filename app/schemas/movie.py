from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator
from typing import Any, Optional, List


def _cast_text(value: Any) -> Any:
    """Booleans become "true"/"false" like the legacy service; numbers are cast by config"""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


# ==================== MOVIE SCHEMAS ====================

class MovieBase(BaseModel):
    """
    Public movie fields. Every field is optional; unknown fields are ignored.

    Scalars are cast the way the legacy store did: 1999 -> "1999",
    "Pop" -> ["Pop"]. Objects and arrays where text is expected are
    rejected with 422.
    """
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: Optional[str] = Field(None, description="Movie title, also the lookup key")
    actors: Optional[str] = Field(None, description="Cast, free text")
    image: Optional[str] = Field(None, description="Stored file name returned by POST /uploads")
    synopsis: Optional[str] = Field(
        None,
        # Older clients send the misspelled field name
        validation_alias=AliasChoices("synopsis", "synopshis"),
        description="Plot summary",
    )
    categories: Optional[List[str]] = Field(None, description="Ordered category labels")

    @field_validator("title", "actors", "image", "synopsis", mode="before")
    @classmethod
    def cast_text(cls, v):
        return _cast_text(v)

    @field_validator("categories", mode="before")
    @classmethod
    def wrap_single_category(cls, v):
        if v is None:
            return v
        if not isinstance(v, list):
            v = [v]
        return [_cast_text(item) for item in v]


class MovieCreate(MovieBase):
    """Schema for creating a movie"""


class MovieUpdate(MovieBase):
    """
    Schema for replacing a movie.
    Full replace: any field left out is stored as null.
    """


class MovieResponse(MovieBase):
    """Schema for movie response"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Identifier assigned by the store")


class MessageResponse(BaseModel):
    message: str


# ==================== UPLOAD SCHEMAS ====================

class UploadResponse(BaseModel):
    """Schema for a stored upload"""
    filename: str = Field(..., description="Name the file is stored and served under")
    original_filename: str
    url: str
