"""
Item Index - normalized name lookup for catalog items.

Catalog names are collapsed to a single fused key so that multi-word trade
text can be matched by joining words without separators:
- "Harlequin Crest" -> "harlequincrest"
- "Tal Rasha's Guardianship" -> "talrashasguardianship"
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .models import Item


_NON_ALPHA = re.compile(r"[^a-z]+")


def normalize_name(name: str) -> str:
    """Lowercase and delete every character outside a-z."""
    return _NON_ALPHA.sub("", name.lower())


@dataclass
class ItemIndex:
    """
    Normalized name -> Item lookup.

    Attributes:
        by_name: Dict mapping normalized alias -> Item (last write wins)
    """
    by_name: dict[str, Item] = field(default_factory=dict)

    def register(self, alias: str, item: Item) -> Optional[str]:
        """
        Map an alias to an item.

        Returns the normalized key, or None if the alias has no letters.
        """
        key = normalize_name(alias)
        if not key:
            return None
        self.by_name[key] = item
        return key

    def lookup(self, key: str) -> Optional[Item]:
        """Look up an item by an already-normalized key."""
        return self.by_name.get(key)

    def lookup_name(self, name: str) -> Optional[Item]:
        """Look up an item by a raw name, normalizing it first."""
        return self.by_name.get(normalize_name(name))

    def items(self) -> Iterator[Item]:
        """Each distinct item once, in the order it was first registered."""
        seen: set[int] = set()
        for item in self.by_name.values():
            if id(item) in seen:
                continue
            seen.add(id(item))
            yield item

    @property
    def alias_count(self) -> int:
        return len(self.by_name)

    @property
    def item_count(self) -> int:
        return sum(1 for _ in self.items())

    def __contains__(self, key: object) -> bool:
        return key in self.by_name

    def __len__(self) -> int:
        return len(self.by_name)
