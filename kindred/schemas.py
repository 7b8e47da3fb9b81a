"""Wire shapes for the three archive record types.

Each entity has three explicit models:

* ``<Entity>Create``: the insert shape, every field except the generated ones,
  with defaults applied on validation.
* ``<Entity>Patch``: a partial update; every field is optional and only the
  fields present in the payload are validated and applied.
* ``<Entity>``: the stored record as returned by the API.

JSON field names are camelCase; snake_case names are accepted as well.
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

AudioCategory = Literal["finance", "gardening", "stories"]
AUDIO_CATEGORIES = ("finance", "gardening", "stories")


class ArchiveModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_fields(self) -> dict:
        """Column values for the fields that were actually supplied or defaulted."""
        return self.model_dump()


class PatchModel(ArchiveModel):
    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


def _not_null(v, info):
    if v is None:
        raise ValueError(f"{info.field_name} may not be null")
    return v


def _not_blank(v):
    if v is not None and not v.strip():
        raise ValueError("must not be blank")
    return v


# --- Recipe ---

class RecipeCreate(ArchiveModel):
    title: str = Field(..., min_length=1, json_schema_extra={"example": "Sunday Curry"})
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    ingredients: List[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["2 onions", "1 tbsp garam masala"]},
    )
    instructions: List[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["Fry the onions", "Add spices", "Simmer"]},
    )
    category: str = Field(default="veg", min_length=1)
    cook_time: Optional[str] = None
    servings: Optional[str] = None

    @field_validator("title")
    @classmethod
    def not_blank(cls, v):
        return _not_blank(v)


class RecipePatch(PatchModel):
    title: Optional[str] = Field(None, min_length=1)
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    category: Optional[str] = Field(None, min_length=1)
    cook_time: Optional[str] = None
    servings: Optional[str] = None

    @field_validator("title", "ingredients", "instructions", "category")
    @classmethod
    def not_null(cls, v, info):
        return _not_null(v, info)

    @field_validator("title")
    @classmethod
    def not_blank(cls, v):
        return _not_blank(v)


class Recipe(RecipeCreate):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# --- LegacyAudio ---

class LegacyAudioCreate(ArchiveModel):
    title: str = Field(..., min_length=1)
    audio_url: Optional[str] = None
    duration: Optional[str] = None
    category: AudioCategory = "stories"
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def not_blank(cls, v):
        return _not_blank(v)


class LegacyAudioPatch(PatchModel):
    title: Optional[str] = Field(None, min_length=1)
    audio_url: Optional[str] = None
    duration: Optional[str] = None
    category: Optional[AudioCategory] = None
    description: Optional[str] = None

    @field_validator("title", "category")
    @classmethod
    def not_null(cls, v, info):
        return _not_null(v, info)

    @field_validator("title")
    @classmethod
    def not_blank(cls, v):
        return _not_blank(v)


class LegacyAudio(LegacyAudioCreate):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# --- TimelineNote ---

class TimelineNoteCreate(ArchiveModel):
    year: StrictInt
    content: str = Field(..., min_length=1)
    image_url: Optional[str] = None

    @field_validator("content")
    @classmethod
    def not_blank(cls, v):
        return _not_blank(v)


class TimelineNotePatch(PatchModel):
    year: Optional[StrictInt] = None
    content: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = None

    @field_validator("year", "content")
    @classmethod
    def not_null(cls, v, info):
        return _not_null(v, info)

    @field_validator("content")
    @classmethod
    def not_blank(cls, v):
        return _not_blank(v)


class TimelineNote(TimelineNoteCreate):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# --- User ---

class UserCreate(ArchiveModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class User(UserCreate):
    id: str

    model_config = ConfigDict(from_attributes=True)


def error_list(errors) -> List[dict]:
    """Reduce pydantic error dicts to JSON-safe ``loc``/``msg``/``type`` entries."""
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in errors
    ]
