"""Server-rendered Hearth and Study pages.

Listings are filtered and ordered with :mod:`kindred.filters`, the same way
the HTTP client does it. Create forms take one list entry per line. Deletes
are issued from the browser against the JSON API.
"""
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.orm import Session

from . import crud, filters, schemas
from .db import get_db

router = APIRouter(include_in_schema=False)
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def _lines(text: str) -> List[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def _optional(text: str) -> Optional[str]:
    return (text or "").strip() or None


def _form_errors(exc: ValidationError) -> List[str]:
    out = []
    for e in schemas.error_list(exc.errors()):
        field = ".".join(str(p) for p in e["loc"]) or "form"
        out.append(f"{field}: {e['msg']}")
    return out


@router.get("/", response_class=HTMLResponse)
def home(request: Request, db: Session = Depends(get_db)):
    recipes = filters.newest_first(crud.recipes.list(db))
    audio = filters.newest_first(crud.legacy_audio.list(db))
    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "recipe_count": len(recipes),
            "audio_count": len(audio),
            "latest_recipe": recipes[0] if recipes else None,
            "latest_audio": audio[0] if audio else None,
        },
    )


def _render_hearth(request, db, q=None, category=None, errors=None, status_code=200):
    all_recipes = filters.newest_first(crud.recipes.list(db))
    categories = sorted({r.category for r in all_recipes})
    return templates.TemplateResponse(
        request,
        "hearth.html",
        {
            "recipes": filters.search(all_recipes, q, category),
            "categories": categories,
            "q": q or "",
            "category": category or "all",
            "errors": errors or [],
        },
        status_code=status_code,
    )


@router.get("/hearth", response_class=HTMLResponse)
def hearth(
    request: Request,
    q: Optional[str] = None,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return _render_hearth(request, db, q, category)


@router.post("/hearth/recipes", response_class=HTMLResponse)
def add_recipe_form(
    request: Request,
    title: str = Form(""),
    ingredients: str = Form(""),
    instructions: str = Form(""),
    category: str = Form("veg"),
    cook_time: str = Form(""),
    servings: str = Form(""),
    thumbnail_url: str = Form(""),
    video_url: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        data = schemas.RecipeCreate(
            title=title,
            ingredients=_lines(ingredients),
            instructions=_lines(instructions),
            category=category or "veg",
            cook_time=_optional(cook_time),
            servings=_optional(servings),
            thumbnail_url=_optional(thumbnail_url),
            video_url=_optional(video_url),
        )
    except ValidationError as e:
        return _render_hearth(request, db, errors=_form_errors(e), status_code=400)
    recipe = crud.recipes.create(db, data)
    logger.info(f"Created recipe {recipe.id} from form")
    return RedirectResponse(url="/hearth", status_code=303)


def _render_study(request, db, q=None, category=None, errors=None, status_code=200):
    audio = filters.newest_first(crud.legacy_audio.list(db))
    return templates.TemplateResponse(
        request,
        "study.html",
        {
            "audio": filters.search(audio, q, category),
            "notes": filters.timeline_order(crud.timeline_notes.list(db)),
            "categories": schemas.AUDIO_CATEGORIES,
            "q": q or "",
            "category": category or "all",
            "errors": errors or [],
        },
        status_code=status_code,
    )


@router.get("/study", response_class=HTMLResponse)
def study(
    request: Request,
    q: Optional[str] = None,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return _render_study(request, db, q, category)


@router.post("/study/audio", response_class=HTMLResponse)
def add_audio_form(
    request: Request,
    title: str = Form(""),
    audio_url: str = Form(""),
    duration: str = Form(""),
    category: str = Form("stories"),
    description: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        data = schemas.LegacyAudioCreate(
            title=title,
            audio_url=_optional(audio_url),
            duration=_optional(duration),
            category=category or "stories",
            description=_optional(description),
        )
    except ValidationError as e:
        return _render_study(request, db, errors=_form_errors(e), status_code=400)
    audio = crud.legacy_audio.create(db, data)
    logger.info(f"Created audio {audio.id} from form")
    return RedirectResponse(url="/study", status_code=303)


@router.post("/study/timeline", response_class=HTMLResponse)
def add_note_form(
    request: Request,
    year: str = Form(""),
    content: str = Form(""),
    image_url: str = Form(""),
    db: Session = Depends(get_db),
):
    # form fields arrive as text; anything int() rejects goes to the schema as-is
    try:
        year_value = int(year)
    except ValueError:
        year_value = year
    try:
        data = schemas.TimelineNoteCreate(
            year=year_value,
            content=content,
            image_url=_optional(image_url),
        )
    except ValidationError as e:
        return _render_study(request, db, errors=_form_errors(e), status_code=400)
    note = crud.timeline_notes.create(db, data)
    logger.info(f"Created timeline note {note.id} from form")
    return RedirectResponse(url="/study", status_code=303)
