import json
from pathlib import Path

SECTIONS = ("recipes", "legacyAudio", "timelineNotes")


def load_seed(path):
    """Load archive entries from a JSON seed file.

    Args:
        path (str or Path): Path to the JSON file. It holds an object with
            optional ``recipes``, ``legacyAudio`` and ``timelineNotes`` arrays.

    Returns:
        dict: one list per section; empty lists when the file is missing.
    """
    p = Path(path)
    if not p.exists():
        return {name: [] for name in SECTIONS}
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        return {name: [] for name in SECTIONS}
    return {name: list(data.get(name) or []) for name in SECTIONS}
