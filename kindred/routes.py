"""JSON API for the archive.

Every record type gets the same five endpoints, built by :func:`build_router`
from a :class:`Resource` description.
"""
import re
import secrets
from dataclasses import dataclass
from typing import List, Optional, Type

from fastapi import APIRouter, Depends, Header, HTTPException, Response
from loguru import logger
from sqlalchemy.orm import Session

from . import crud, schemas
from .config import Settings, get_settings
from .db import get_db

ID_RE = re.compile(r"-?\d+")


@dataclass(frozen=True)
class Resource:
    path: str  # URL segment under /api
    label: str  # used in error messages, e.g. "recipe"
    accessor: crud.Accessor
    schema: Type[schemas.ArchiveModel]
    create_schema: Type[schemas.ArchiveModel]
    patch_schema: Type[schemas.PatchModel]
    pin_case_sensitive: bool = True


def pin_matches(supplied: Optional[str], expected: str, case_sensitive: bool = True) -> bool:
    if supplied is None:
        return False
    if not case_sensitive:
        supplied, expected = supplied.casefold(), expected.casefold()
    return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def parse_id(raw: str, label: str) -> int:
    """Parse a path id, answering 400 for anything but a plain integer."""
    if not ID_RE.fullmatch(raw):
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID")
    return int(raw)


def build_router(resource: Resource) -> APIRouter:
    router = APIRouter(prefix=f"/{resource.path}")
    Schema = resource.schema
    CreateSchema = resource.create_schema
    PatchSchema = resource.patch_schema
    not_found = f"{resource.label.capitalize()} not found"

    @router.get("", response_model=List[Schema])
    def list_items(db: Session = Depends(get_db)):
        return resource.accessor.list(db)

    @router.get("/{item_id}", response_model=Schema)
    def get_item(item_id: str, db: Session = Depends(get_db)):
        obj = resource.accessor.get(db, parse_id(item_id, resource.label))
        if not obj:
            raise HTTPException(status_code=404, detail=not_found)
        return obj

    @router.post("", response_model=Schema, status_code=201)
    def create_item(payload: CreateSchema, db: Session = Depends(get_db)):
        obj = resource.accessor.create(db, payload)
        logger.info(f"Created {resource.label} {obj.id}")
        return obj

    @router.patch("/{item_id}", response_model=Schema)
    def update_item(item_id: str, payload: PatchSchema, db: Session = Depends(get_db)):
        obj = resource.accessor.update(db, parse_id(item_id, resource.label), payload)
        if not obj:
            logger.debug(f"Update of missing {resource.label} {item_id}")
            raise HTTPException(status_code=404, detail=not_found)
        logger.info(f"Updated {resource.label} {obj.id}: {sorted(payload.to_fields())}")
        return obj

    @router.delete("/{item_id}", status_code=204)
    def delete_item(
        item_id: str,
        x_pin: Optional[str] = Header(None),
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_settings),
    ):
        if not pin_matches(x_pin, settings.delete_pin, resource.pin_case_sensitive):
            logger.warning(f"Rejected delete of {resource.label} {item_id}: bad PIN")
            raise HTTPException(status_code=403, detail="Invalid PIN")
        if not resource.accessor.delete(db, parse_id(item_id, resource.label)):
            raise HTTPException(status_code=404, detail=not_found)
        logger.info(f"Deleted {resource.label} {item_id}")
        return Response(status_code=204)

    return router


RECIPES = Resource(
    path="recipes",
    label="recipe",
    accessor=crud.recipes,
    schema=schemas.Recipe,
    create_schema=schemas.RecipeCreate,
    patch_schema=schemas.RecipePatch,
)

# PIN comparison ignores case for legacy audio only.
LEGACY_AUDIO = Resource(
    path="legacy-audio",
    label="audio",
    accessor=crud.legacy_audio,
    schema=schemas.LegacyAudio,
    create_schema=schemas.LegacyAudioCreate,
    patch_schema=schemas.LegacyAudioPatch,
    pin_case_sensitive=False,
)

TIMELINE_NOTES = Resource(
    path="timeline-notes",
    label="note",
    accessor=crud.timeline_notes,
    schema=schemas.TimelineNote,
    create_schema=schemas.TimelineNoteCreate,
    patch_schema=schemas.TimelineNotePatch,
)

RESOURCES = (RECIPES, LEGACY_AUDIO, TIMELINE_NOTES)

router = APIRouter(prefix="/api")
for _resource in RESOURCES:
    router.include_router(build_router(_resource), tags=[_resource.path])
