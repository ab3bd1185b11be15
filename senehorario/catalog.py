from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

import requests

from senehorario.model import Course, Section
from senehorario.parse import parse_courses
from senehorario.storage import normalize_code


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Paths & URLs
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
RAW_DIR = PACKAGE_DIR / "data" / "raw"

DEFAULT_API_URL = "https://ofertadecursos.uniandes.edu.co/api/courses"
REQUEST_TIMEOUT = 30


def api_base_url() -> str:
    """
    Catalog endpoint, overridable with SENEHORARIO_API_URL.
    """
    return os.environ.get("SENEHORARIO_API_URL", "").strip() or DEFAULT_API_URL


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def _cache_path(name_input: str, raw_dir: Path) -> Path:
    safe = "".join(ch if ch.isalnum() else "_" for ch in name_input.upper())
    return raw_dir / f"{safe or 'ALL'}.json"


def _read_cache(path: Path) -> List[Dict[str, Any]] | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Ignoring broken cache file %s", path)
        return None
    return data if isinstance(data, list) else None


def fetch_raw_sections(
    name_input: str,
    base_url: str | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> List[Dict[str, Any]]:
    """
    Query the catalog search endpoint, exactly like the website search bar.

    Returns:
        List of raw section records (one dict per section).
    """
    params = {
        "term": "",
        "ptrm": "",
        "prefix": "",
        "attr": "",
        "nameInput": name_input.strip().upper(),
    }
    url = base_url or api_base_url()

    logger.info("FETCH %s nameInput=%s", url, params["nameInput"])
    resp = requests.get(url, params=params, timeout=timeout)
    resp.raise_for_status()

    data = resp.json()
    if not isinstance(data, list):
        raise ValueError(f"Unexpected catalog response for {name_input!r}: expected a list")
    return data


def load_raw_sections(
    name_input: str,
    raw_dir: Path = RAW_DIR,
    refresh: bool = False,
    offline: bool = False,
    base_url: str | None = None,
) -> List[Dict[str, Any]]:
    """
    Return raw records for one query, cached as JSON in raw_dir.

    offline=True never touches the network (missing cache -> []).
    """
    path = _cache_path(name_input, raw_dir)

    if not refresh:
        cached = _read_cache(path)
        if cached is not None:
            logger.info("SKIP  %s (cached)", name_input)
            return cached

    if offline:
        logger.info("No cached data for %s (offline)", name_input)
        return []

    records = fetch_raw_sections(name_input, base_url=base_url)

    raw_dir.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
    return records


def get_courses(name_input: str, **kwargs: Any) -> List[Course]:
    """
    Load and group all sections matching name_input into Course objects.
    """
    return parse_courses(load_raw_sections(name_input, **kwargs))


def find_sections_by_course_code(code: str, **kwargs: Any) -> List[Section]:
    """
    Sections of the course whose code matches exactly ([] if none found).

    A name search can return several courses (e.g. a prefix match); without
    an exact code match the first course returned is used.
    """
    courses = get_courses(code, **kwargs)
    if not courses:
        return []
    wanted = normalize_code(code)
    for course in courses:
        if normalize_code(course.code) == wanted:
            return list(course.sections)
    return list(courses[0].sections)


# ---------------------------------------------------------------------------
# CLI entry
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="senehorario.catalog", description="Fetch catalog sections (cache JSON)")
    p.add_argument("queries", nargs="+", help="Course codes or names (e.g. ISIS1204)")
    p.add_argument("--refresh", action="store_true", help="Re-fetch and overwrite existing JSON files")
    p.add_argument("--raw-dir", type=Path, default=RAW_DIR)
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    for query in args.queries:
        records = load_raw_sections(query, raw_dir=args.raw_dir, refresh=args.refresh)
        print(f"{query.upper()}: {len(records)} sections")


if __name__ == "__main__":
    main()
