"""
Configuration for the rune price checker.

Holds the rune vocabulary and the trade-text marker words.
Config is declarative JSON - edit the file, not the code.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path

from .runes import DEFAULT_RUNES, RuneTable


DEFAULT_CONFIG_PATH = Path(__file__).parent / "price_config.json"

# wts/wtb/wtt are additions beyond the original o/offer/n/need vocabulary,
# so that "wts shako ist" style listings resolve
DEFAULT_PREFIX_MARKERS = ("o", "offer", "n", "need", "wts", "wtb", "wtt")
DEFAULT_SUFFIX_MARKERS = ("obo",)


@dataclass
class MatchSettings:
    """Settings for catalog loading and line matching."""
    prefix_markers: frozenset[str] = frozenset(DEFAULT_PREFIX_MARKERS)
    suffix_markers: frozenset[str] = frozenset(DEFAULT_SUFFIX_MARKERS)
    # True restores the old behavior of abandoning a uniques file at its first blank line
    stop_on_empty_catalog_line: bool = False


@dataclass
class Config:
    """Full configuration for a price check run."""
    runes: list[str] = field(default_factory=lambda: list(DEFAULT_RUNES))
    settings: MatchSettings = field(default_factory=MatchSettings)

    # Built on load from runes
    rune_table: RuneTable = field(init=False, repr=False)

    def __post_init__(self):
        """Build the rune lookup table."""
        self.rune_table = RuneTable(self.runes)


def _marker_set(values, key: str) -> frozenset[str]:
    """Normalize a marker list from config into a lowercase set."""
    if not isinstance(values, list):
        raise ValueError(f"settings.{key} must be a list of words")
    return frozenset(str(v).strip().lower() for v in values if str(v).strip())


def default_config() -> Config:
    """Config with the compiled-in rune list and markers."""
    return Config()


def load_config(config_path: str | Path) -> Config:
    """
    Load configuration from JSON file.

    Args:
        config_path: Path to price_config.json

    Returns:
        Config with rune table and match settings. Keys missing from the
        file fall back to the defaults.
    """
    path = Path(config_path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be an object: {path}")

    runes = data.get("runes", list(DEFAULT_RUNES))
    if not isinstance(runes, list) or not runes:
        raise ValueError(f"'runes' must be a non-empty list in {path}")

    settings_data = data.get("settings", {})
    if not isinstance(settings_data, dict):
        raise ValueError(f"'settings' must be an object in {path}")

    stop_on_empty = settings_data.get("stop_on_empty_catalog_line", False)
    if not isinstance(stop_on_empty, bool):
        raise ValueError(f"settings.stop_on_empty_catalog_line must be true or false in {path}")

    settings = MatchSettings(
        prefix_markers=_marker_set(
            settings_data.get("prefix_markers", list(DEFAULT_PREFIX_MARKERS)), "prefix_markers"
        ),
        suffix_markers=_marker_set(
            settings_data.get("suffix_markers", list(DEFAULT_SUFFIX_MARKERS)), "suffix_markers"
        ),
        stop_on_empty_catalog_line=stop_on_empty,
    )

    return Config(runes=[str(r) for r in runes], settings=settings)
