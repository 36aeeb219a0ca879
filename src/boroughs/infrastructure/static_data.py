"""Loads the JSON catalogs under the data directory.

A missing or malformed file never stops the game: the loader logs a warning
and the matching catalog comes back empty.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from boroughs.domain.models.catalog import Catalogs, EventDefinition
from boroughs.domain.models.item import Item


logger = logging.getLogger(__name__)

ITEMS_FILE = "items.json"
PHRASES_FILE = "phrases.json"
EVENTS_FILE = "events.json"
NPCS_FILE = "npcs.json"


def _read_json(path: Path, *, expected: type) -> Any:
    fallback = expected()
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        logger.warning("%s not found at %s, using an empty catalog", path.name, path)
        return fallback
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Failed to load %s: %s, using an empty catalog", path.name, exc)
        return fallback
    if not isinstance(data, expected):
        logger.warning("%s should hold a %s, got %s", path.name, expected.__name__, type(data).__name__)
        return fallback
    return data


def load_items(data_dir: Path) -> List[Item]:
    items: List[Item] = []
    for index, row in enumerate(_read_json(data_dir / ITEMS_FILE, expected=list)):
        if not isinstance(row, dict) or not row.get("id"):
            logger.warning("Skipping malformed item #%s in %s", index, ITEMS_FILE)
            continue
        try:
            items.append(Item.from_dict(row))
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping item %s: %s", row.get("id"), exc)
    return items


def load_phrases(data_dir: Path) -> Dict[str, List[str]]:
    raw = _read_json(data_dir / PHRASES_FILE, expected=dict)
    phrases: Dict[str, List[str]] = {}
    for key, lines in raw.items():
        if isinstance(lines, list):
            phrases[str(key)] = [str(line) for line in lines]
        elif isinstance(lines, str):
            phrases[str(key)] = [lines]
    return phrases


def load_events(data_dir: Path) -> List[EventDefinition]:
    events: List[EventDefinition] = []
    for index, row in enumerate(_read_json(data_dir / EVENTS_FILE, expected=list)):
        if not isinstance(row, dict):
            logger.warning("Skipping malformed event #%s in %s", index, EVENTS_FILE)
            continue
        try:
            events.append(EventDefinition.from_dict(row, index))
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping event #%s: %s", index, exc)
    return events


def load_npcs(data_dir: Path) -> List[Dict[str, Any]]:
    return [row for row in _read_json(data_dir / NPCS_FILE, expected=list) if isinstance(row, dict)]


def load_catalogs(data_dir: Path | str) -> Catalogs:
    root = Path(data_dir)
    catalogs = Catalogs(
        items=load_items(root),
        phrases=load_phrases(root),
        events=load_events(root),
        npcs=load_npcs(root),
    )
    logger.debug(
        "Loaded catalogs from %s: %s items, %s phrase pools, %s events, %s npcs",
        root,
        len(catalogs.items),
        len(catalogs.phrases),
        len(catalogs.events),
        len(catalogs.npcs),
    )
    return catalogs
