"""
Persistent storage for the user's course selection.

This module manages the file:

    data/selected_courses.json

The order of the stored codes is the order of the course slots handed to the
schedule generator, so it is kept as entered (duplicates removed).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable


def _default_selected_path() -> Path:
    """
    Return the default path of selected_courses.json inside the package.

    A function instead of a constant so tests can pass their own path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "selected_courses.json"


def normalize_code(code: object) -> str:
    return "".join(str(code).split()).upper()


def load_selected_codes(path: str | Path | None = None) -> list[str]:
    """
    Load selected course codes from selected_courses.json.

    Returns an empty list if the file does not exist or is invalid.
    """
    selected_path = Path(path) if path is not None else _default_selected_path()

    if not selected_path.exists():
        return []

    try:
        data = json.loads(selected_path.read_text(encoding="utf-8"))
        codes = data.get("selected_course_codes", [])
        if not isinstance(codes, list):
            return []
        out: list[str] = []
        for x in codes:
            if isinstance(x, str):
                code = normalize_code(x)
                if code and code not in out:
                    out.append(code)
        return out
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        return []


def save_selected_codes(codes: Iterable[str], path: str | Path | None = None) -> None:
    """
    Save selected course codes to selected_courses.json, creating parent directories.
    """
    selected_path = Path(path) if path is not None else _default_selected_path()
    selected_path.parent.mkdir(parents=True, exist_ok=True)

    norm: list[str] = []
    for x in codes:
        code = normalize_code(x)
        if code and code not in norm:
            norm.append(code)
    payload = {"selected_course_codes": norm}

    selected_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
