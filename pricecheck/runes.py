"""
Rune Table - the closed vocabulary of price units.

Runes are numbered 1..N in ascending trade value, which is the order they are
listed in. The table is built once and never mutated.
"""

from typing import Iterable, Optional


DEFAULT_RUNES = (
    "el", "eld", "tir", "nef", "eth", "ith", "tal", "ral", "ort", "thul",
    "amn", "sol", "shael", "dol", "hel", "io", "lum", "ko", "fal", "lem",
    "pul", "um", "mal", "ist", "gul", "vex", "ohm", "lo", "sur", "ber",
    "jah", "cham", "zod",
)


class RuneTable:
    """
    Bidirectional rune name <-> ordinal mapping.

    Names are stored lowercase. Lookups by name are case-insensitive.
    """

    def __init__(self, names: Iterable[str]):
        self._by_name: dict[str, int] = {}
        self._by_ordinal: dict[int, str] = {}

        for ordinal, raw_name in enumerate(names, start=1):
            name = str(raw_name).strip().lower()
            if not name:
                raise ValueError(f"Empty rune name at position {ordinal}")
            if name in self._by_name:
                raise ValueError(f"Duplicate rune name: {name}")
            self._by_name[name] = ordinal
            self._by_ordinal[ordinal] = name

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._by_ordinal[i] for i in sorted(self._by_ordinal))

    def ordinal_of(self, name: str) -> Optional[int]:
        """Ordinal for a rune name, or None if it is not a rune."""
        return self._by_name.get(name.lower())

    def name_of(self, ordinal: int) -> str:
        """Rune name for an ordinal. Raises KeyError for unknown ordinals."""
        return self._by_ordinal[ordinal]

    def display_name_of(self, ordinal: int) -> str:
        """Capitalised rune name as written in reports (e.g. "Ist")."""
        return self.name_of(ordinal).capitalize()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"RuneTable({len(self)} runes)"


def build_rune_table(names: Optional[Iterable[str]] = None) -> RuneTable:
    """Build a rune table, defaulting to the standard 33 runes."""
    if names is None:
        names = DEFAULT_RUNES
    return RuneTable(names)
