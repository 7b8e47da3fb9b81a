import sys
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from kindred import crud, schemas
from kindred.db import SessionLocal, init_db
from kindred.seed import load_seed


def import_seed(db, seed):
    """Insert seed entries, skipping invalid ones and recipes already present.

    Returns a dict of inserted counts per section.
    """
    added = {"recipes": 0, "legacyAudio": 0, "timelineNotes": 0}
    plan = (
        ("recipes", schemas.RecipeCreate, crud.recipes),
        ("legacyAudio", schemas.LegacyAudioCreate, crud.legacy_audio),
        ("timelineNotes", schemas.TimelineNoteCreate, crud.timeline_notes),
    )
    for section, schema, accessor in plan:
        for raw in seed.get(section, []):
            try:
                data = schema.model_validate(raw)
            except ValidationError as e:
                logger.warning(f"Skipping invalid {section} entry {raw!r}: {e.error_count()} error(s)")
                continue
            if section == "recipes" and crud.get_recipe_by_title(db, data.title):
                continue
            accessor.create(db, data)
            added[section] += 1
    return added


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    default = Path(__file__).resolve().parents[1] / "data" / "archive.json"
    p = Path(argv[0]) if argv else default
    if not p.exists():
        logger.error(f"{p} not found")
        return 1
    init_db()
    db = SessionLocal()
    try:
        added = import_seed(db, load_seed(p))
    finally:
        db.close()
    logger.info(
        f"Imported {added['recipes']} recipes, {added['legacyAudio']} recordings, "
        f"{added['timelineNotes']} timeline notes"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
