"""
Trade Matcher - Core line parsing engine.

Turns a free-text trade line into an (item, rune) pair:

    "offer harlequin crest, ist obo"
      -> words: offer harlequin crest ist obo
      -> strip markers: harlequin crest ist
      -> price: ist
      -> item: longest word prefix found in the index ("harlequincrest")

Lines that do not yield both a catalog item and a rune price are skipped.
"""

import logging
import re
from typing import Callable, Iterable, Optional

from .config import MatchSettings
from .index import ItemIndex
from .models import Item, ParseResult, SkipReason
from .runes import RuneTable

logger = logging.getLogger(__name__)

# An item and a price
MIN_WORDS = 2

_NON_ALPHA_RUN = re.compile(r"[^a-z]+")

TraceFn = Callable[[ParseResult], None]


def tokenize_line(line: str) -> list[str]:
    """Lowercase, collapse non-letter runs to a space, and split into words."""
    text = _NON_ALPHA_RUN.sub(" ", line.lower()).strip()
    if not text:
        return []
    return text.split(" ")


def strip_markers(words: list[str], settings: MatchSettings) -> Optional[list[str]]:
    """
    Drop one leading offer/need marker and one trailing "obo".

    Only the first and last word are checked. Returns None if stripping
    leaves fewer than MIN_WORDS words.
    """
    if len(words) < MIN_WORDS:
        return None

    if words[0] in settings.prefix_markers:
        words = words[1:]
        if len(words) < MIN_WORDS:
            return None

    if words[-1] in settings.suffix_markers:
        words = words[:-1]
        if len(words) < MIN_WORDS:
            return None

    return words


def find_item(words: list[str], index: ItemIndex) -> Optional[Item]:
    """
    Greedy longest-prefix lookup.

    Tries words[:n] joined without separators for n = len(words) down to 1.
    """
    for n in range(len(words), 0, -1):
        item = index.lookup("".join(words[:n]))
        if item is not None:
            return item
    return None


def parse_line(
    line: str,
    index: ItemIndex,
    runes: RuneTable,
    settings: Optional[MatchSettings] = None,
) -> ParseResult:
    """
    Parse a single trade line.

    Args:
        line: Raw trade text
        index: Catalog index
        runes: Valid price units
        settings: Marker words (defaults if None)

    Returns:
        ParseResult, matched when both an item and a rune price were found
    """
    settings = settings or MatchSettings()

    words = strip_markers(tokenize_line(line), settings)
    if words is None:
        return ParseResult(line=line, reason=SkipReason.TOO_FEW_WORDS)

    price = words[-1]
    if price not in runes:
        return ParseResult(line=line, reason=SkipReason.UNKNOWN_PRICE)

    item = find_item(words[:-1], index)
    if item is None:
        return ParseResult(line=line, reason=SkipReason.UNKNOWN_ITEM)

    return ParseResult(line=line, reason=SkipReason.MATCHED, item=item, price=price)


def log_trace(result: ParseResult) -> None:
    """Default trace observer - writes each line's outcome at DEBUG."""
    logger.debug(f"Processing line: {result.line!r}")
    if result.matched:
        logger.debug(f"\tMatched item = {result.item} with price = {result.price}")
    else:
        logger.debug(f"\tSkipped ({result.reason.value})")


def analyze_trades(
    lines: Iterable[str],
    index: ItemIndex,
    runes: RuneTable,
    settings: Optional[MatchSettings] = None,
    trace: Optional[TraceFn] = log_trace,
) -> dict:
    """
    Parse every trade line and count matched prices on their items.

    Args:
        lines: Trade text, one listing per line
        index: Catalog index; matched items are updated in place
        runes: Valid price units
        settings: Marker words
        trace: Observer called with every ParseResult, or None

    Returns:
        Summary counts (see summarize_results)
    """
    counts = _empty_counts()

    for line in lines:
        result = parse_line(line.rstrip("\r\n"), index, runes, settings)
        if trace is not None:
            trace(result)

        if result.matched:
            result.item.record_price(runes.ordinal_of(result.price))

        _count(counts, result)

    logger.info(f"Matched {counts['matched']} of {counts['total']} trade lines")
    return counts


def _empty_counts() -> dict:
    counts = {"total": 0}
    for reason in SkipReason:
        counts[reason.value.lower()] = 0
    return counts


def _count(counts: dict, result: ParseResult) -> None:
    counts["total"] += 1
    counts[result.reason.value.lower()] += 1


def summarize_results(results: list[ParseResult]) -> dict:
    """
    Count parse results by outcome.

    Keys: total, matched, too_few_words, unknown_price, unknown_item.
    """
    counts = _empty_counts()
    for result in results:
        _count(counts, result)
    return counts
