# Rune price checker
# Tallies item prices (in runes) from free-text trade listings

from .models import Item, ParseResult, SkipReason
from .runes import DEFAULT_RUNES, RuneTable, build_rune_table
from .config import Config, MatchSettings, default_config, load_config
from .index import ItemIndex, normalize_name
from .catalog_loader import CatalogReadError, load_catalog, load_sets, load_uniques
from .matcher import analyze_trades, parse_line, summarize_results
from .report import export_xlsx, format_console, format_report_line, write_report

__version__ = "1.0.0"

__all__ = [
    # Models
    "Item",
    "ParseResult",
    "SkipReason",
    # Runes
    "DEFAULT_RUNES",
    "RuneTable",
    "build_rune_table",
    # Config
    "Config",
    "MatchSettings",
    "default_config",
    "load_config",
    # Catalog
    "ItemIndex",
    "normalize_name",
    "CatalogReadError",
    "load_catalog",
    "load_uniques",
    "load_sets",
    # Matcher
    "analyze_trades",
    "parse_line",
    "summarize_results",
    # Report
    "format_console",
    "format_report_line",
    "write_report",
    "export_xlsx",
]
