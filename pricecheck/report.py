"""
Report Generator - Write price distributions.

The report file has one line per item that saw at least one priced trade:

    Harlequin Crest\tIst:3\tVex:1

Console output and XLSX export are for humans; the tab-separated file is the
machine-readable result.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional, TextIO

from openpyxl import Workbook
from openpyxl.styles import Font

from .index import ItemIndex
from .models import Item
from .runes import RuneTable

logger = logging.getLogger(__name__)


def priced_items(index: ItemIndex) -> Iterator[Item]:
    """Distinct items with a non-empty price distribution."""
    for item in index.items():
        if item.price_distribution:
            yield item


def distribution_pairs(item: Item, runes: RuneTable) -> list[tuple[str, int]]:
    """(rune display name, count) pairs in rune order."""
    return [
        (runes.display_name_of(ordinal), count)
        for ordinal, count in sorted(item.price_distribution.items())
    ]


def format_report_line(item: Item, runes: RuneTable) -> str:
    """Format one item as "Name\\tRune:count\\t..." (no line terminator)."""
    parts = [item.display_name]
    parts.extend(f"{name}:{count}" for name, count in distribution_pairs(item, runes))
    return "\t".join(parts)


def write_report(index: ItemIndex, runes: RuneTable, output: TextIO) -> int:
    """
    Write every priced item to output.

    Returns:
        Number of item lines written
    """
    written = 0
    for item in priced_items(index):
        output.write(format_report_line(item, runes) + "\n")
        written += 1
    return written


def format_console(index: ItemIndex, runes: RuneTable, summary: Optional[dict] = None) -> str:
    """
    Format price distributions for console display.

    Items are listed by number of observations, busiest first.

    Args:
        index: Catalog index after analysis
        runes: Rune table for display names
        summary: Optional counts from analyze_trades

    Returns:
        Formatted string for console output
    """
    items = sorted(priced_items(index), key=lambda i: (-i.total_observations, i.display_name))

    lines = ["", "ITEM PRICES", "=" * 70]
    if not items:
        lines.append("No priced trades found.")

    for item in items:
        pairs = "  ".join(f"{name}:{count}" for name, count in distribution_pairs(item, runes))
        lines.append(f"{item.display_name[:30]:<30} {item.total_observations:>5}  {pairs}")

    if summary:
        lines.append("\n" + "=" * 70)
        lines.append("SUMMARY")
        lines.append(f"  Trade lines:    {summary['total']}")
        lines.append(f"  Matched:        {summary['matched']}")
        lines.append(f"  Too short:      {summary['too_few_words']}")
        lines.append(f"  Unknown price:  {summary['unknown_price']}")
        lines.append(f"  Unknown item:   {summary['unknown_item']}")
        lines.append(f"  Priced items:   {len(items)}")
        lines.append("=" * 70)

    return "\n".join(lines)


def export_xlsx(index: ItemIndex, runes: RuneTable, path: str | Path) -> int:
    """
    Export price distributions to a spreadsheet.

    One row per priced item, one column per rune seen anywhere (in rune
    order), plus a Total column.

    Returns:
        Number of item rows written
    """
    items = list(priced_items(index))
    ordinals = sorted({o for item in items for o in item.price_distribution})

    wb = Workbook()
    ws = wb.active
    ws.title = "Prices"

    ws.append(["Item"] + [runes.display_name_of(o) for o in ordinals] + ["Total"])
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for item in items:
        row = [item.display_name]
        row.extend(item.price_distribution.get(o, 0) for o in ordinals)
        row.append(item.total_observations)
        ws.append(row)

    ws.column_dimensions["A"].width = 32
    ws.freeze_panes = "B2"

    wb.save(path)
    logger.info(f"Wrote {len(items)} items to {path}")
    return len(items)
