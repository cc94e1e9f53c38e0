"""
Data models for the rune price checker.

Items are shared by reference: every alias in the catalog index points at the
same Item instance, so counting a trade through one alias is visible through
all of them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SkipReason(Enum):
    """
    Outcome of parsing a single trade line.

    Only MATCHED feeds the price distribution. The other values exist for
    run summaries and the debug trace.
    """
    MATCHED = "MATCHED"
    TOO_FEW_WORDS = "TOO_FEW_WORDS"    # Nothing left for both an item and a price
    UNKNOWN_PRICE = "UNKNOWN_PRICE"    # Last word is not a rune name
    UNKNOWN_ITEM = "UNKNOWN_ITEM"      # No prefix of the remaining words is in the catalog


@dataclass(eq=False)
class Item:
    """
    A single tradeable item from the uniques or sets catalog.

    price_distribution maps rune ordinal -> number of trades seen at that
    rune. Compared by identity, since many index keys share one instance.
    """
    display_name: str
    price_distribution: dict[int, int] = field(default_factory=dict)

    def record_price(self, ordinal: int) -> None:
        """Count one observed trade at the given rune ordinal."""
        self.price_distribution[ordinal] = self.price_distribution.get(ordinal, 0) + 1

    @property
    def total_observations(self) -> int:
        return sum(self.price_distribution.values())

    def __str__(self) -> str:
        return self.display_name


@dataclass
class ParseResult:
    """
    Output of the line parser for one trade line.

    item and price are only set when the line matched.
    """
    line: str
    reason: SkipReason
    item: Optional[Item] = None
    price: Optional[str] = None  # Rune name, lowercase

    @property
    def matched(self) -> bool:
        return self.reason is SkipReason.MATCHED
