"""
Catalog Loader - Build the item index from the uniques and sets lists.

Uniques list: one item per line, comma-separated aliases, first alias is the
display name ("Harlequin Crest,Shako").
Sets list: one item name per line, used as its own alias.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from .config import MatchSettings
from .index import ItemIndex
from .models import Item

logger = logging.getLogger(__name__)


class CatalogReadError(OSError):
    """A catalog source could not be opened or read."""


def load_uniques(
    lines: Iterable[str],
    index: ItemIndex,
    settings: Optional[MatchSettings] = None,
) -> int:
    """
    Register unique items and all their aliases.

    Args:
        lines: Uniques list lines
        index: Index to populate
        settings: Controls how blank lines are treated

    Returns:
        Number of items registered
    """
    settings = settings or MatchSettings()
    count = 0

    for line_num, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        aliases = [a.strip() for a in line.split(",") if a.strip()]

        if not aliases:
            if settings.stop_on_empty_catalog_line:
                logger.debug(f"Blank uniques line {line_num}, stopping load")
                break
            logger.debug(f"Skipping blank uniques line {line_num}")
            continue

        # All aliases share this one item
        item = Item(display_name=aliases[0])
        keys = [key for key in (index.register(alias, item) for alias in aliases) if key]
        if not keys:
            logger.debug(f"Uniques line {line_num} has no usable names: {line!r}")
            continue
        count += 1

    return count


def load_sets(lines: Iterable[str], index: ItemIndex) -> int:
    """
    Register set items, one per line.

    Returns:
        Number of items registered
    """
    count = 0

    for line_num, line in enumerate(lines, start=1):
        name = line.strip()
        if not name:
            logger.debug(f"Skipping blank sets line {line_num}")
            continue

        if index.register(name, Item(display_name=name)) is None:
            logger.debug(f"Sets line {line_num} has no usable name: {line!r}")
            continue
        count += 1

    return count


def load_catalog(
    uniques_path: str | Path,
    sets_path: str | Path,
    settings: Optional[MatchSettings] = None,
) -> ItemIndex:
    """
    Load both catalog files into a fresh index.

    Uniques are loaded before sets, so a set name that collides with a
    unique alias wins.

    Raises:
        CatalogReadError: if either file cannot be opened or read
    """
    index = ItemIndex()

    path = Path(uniques_path)
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            uniques = load_uniques(f, index, settings)
    except OSError as e:
        raise CatalogReadError(f"error loading uniques from {path}: {e}") from e

    path = Path(sets_path)
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            sets = load_sets(f, index)
    except OSError as e:
        raise CatalogReadError(f"error loading sets from {path}: {e}") from e

    logger.info(f"Loaded {uniques} uniques and {sets} sets ({index.alias_count} names)")
    return index
