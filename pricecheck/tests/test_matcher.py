"""
Tests for the trade line matcher.

Run with: pytest pricecheck/tests/test_matcher.py -v
"""

import logging

import pytest

from pricecheck.catalog_loader import load_sets, load_uniques
from pricecheck.config import MatchSettings
from pricecheck.index import ItemIndex
from pricecheck.matcher import (
    analyze_trades,
    find_item,
    parse_line,
    strip_markers,
    summarize_results,
    tokenize_line,
)
from pricecheck.models import SkipReason
from pricecheck.runes import build_rune_table


@pytest.fixture
def runes():
    return build_rune_table()


@pytest.fixture
def index():
    """Small catalog: a unique with aliases, a short name, and a set."""
    index = ItemIndex()
    load_uniques(
        [
            "Harlequin Crest,Shako",
            "Crest",
            "The Stone of Jordan,SoJ",
        ],
        index,
    )
    load_sets(["Tal Rasha's Guardianship"], index)
    return index


class TestTokenizeLine:
    """Test word splitting."""

    def test_lowercases(self):
        assert tokenize_line("WTS Shako IST") == ["wts", "shako", "ist"]

    def test_non_letter_runs_become_one_separator(self):
        assert tokenize_line("shako,,, -- ist!!") == ["shako", "ist"]
        assert tokenize_line("tal rasha's guardianship") == ["tal", "rasha", "s", "guardianship"]

    def test_digits_are_separators(self):
        assert tokenize_line("2x shako 4ist") == ["x", "shako", "ist"]

    def test_trims_edges(self):
        assert tokenize_line("  ...shako ist...  ") == ["shako", "ist"]

    def test_empty(self):
        assert tokenize_line("") == []
        assert tokenize_line("!!! 123 ???") == []


class TestStripMarkers:
    """Test offer/need/obo stripping."""

    @pytest.fixture
    def settings(self):
        return MatchSettings()

    @pytest.mark.parametrize("marker", ["o", "offer", "n", "need"])
    def test_leading_marker_dropped(self, settings, marker):
        assert strip_markers([marker, "shako", "ist"], settings) == ["shako", "ist"]

    def test_trailing_obo_dropped(self, settings):
        assert strip_markers(["shako", "ist", "obo"], settings) == ["shako", "ist"]

    def test_both_ends(self, settings):
        assert strip_markers(["offer", "shako", "ist", "obo"], settings) == ["shako", "ist"]

    def test_only_one_leading_marker(self, settings):
        assert strip_markers(["need", "offer", "shako", "ist"], settings) == ["offer", "shako", "ist"]

    def test_inner_markers_kept(self, settings):
        assert strip_markers(["shako", "need", "ist"], settings) == ["shako", "need", "ist"]

    def test_too_few_after_strip(self, settings):
        assert strip_markers(["offer", "ist"], settings) is None
        assert strip_markers(["ist", "obo"], settings) is None
        assert strip_markers(["ist"], settings) is None

    def test_custom_markers(self):
        settings = MatchSettings(prefix_markers=frozenset({"ft"}), suffix_markers=frozenset())
        assert strip_markers(["ft", "shako", "ist", "obo"], settings) == ["shako", "ist", "obo"]


class TestFindItem:
    """Test longest-prefix item resolution."""

    def test_full_match(self, index):
        assert find_item(["harlequin", "crest"], index).display_name == "Harlequin Crest"

    def test_trailing_noise_ignored(self, index):
        assert find_item(["shako", "unid", "perfect"], index).display_name == "Harlequin Crest"

    def test_no_match(self, index):
        assert find_item(["windforce"], index) is None
        assert find_item([], index) is None

    def test_prefix_only_never_suffix(self, index):
        # "crest" is in the catalog, but only prefixes starting at the first word are tried
        assert find_item(["nice", "crest"], index) is None


class TestParseLine:
    """Test full line parsing."""

    def test_simple_match(self, index, runes):
        result = parse_line("shako ist", index, runes)

        assert result.matched
        assert result.item.display_name == "Harlequin Crest"
        assert result.price == "ist"

    def test_wts_listing(self, index, runes):
        result = parse_line("wts shako ist", index, runes)

        assert result.matched
        assert result.item is index.lookup("shako")

    def test_offer_need_markers(self, index, runes):
        result = parse_line("offer harlequin crest need ist", index, runes)
        # "need" is an inner word here, so the price "ist" follows it
        assert result.matched
        assert result.item.display_name == "Harlequin Crest"
        assert result.price == "ist"

    def test_longest_prefix_preferred(self, index, runes):
        result = parse_line("o harlequin crest ist obo", index, runes)

        assert result.item is index.lookup("harlequincrest")
        assert result.item is not index.lookup("crest")

    def test_shorter_name_still_matches(self, index, runes):
        result = parse_line("crest io", index, runes)
        assert result.item.display_name == "Crest"

    def test_set_item_with_apostrophe(self, index, runes):
        result = parse_line("Tal Rasha's Guardianship - Lem", index, runes)

        assert result.matched
        assert result.item.display_name == "Tal Rasha's Guardianship"
        assert result.price == "lem"

    def test_doubled_leading_markers(self, index, runes):
        # Only "need" is stripped; "offer" stays in the item-name search space
        result = parse_line("need offer shako ist", index, runes)

        assert not result.matched
        assert result.reason is SkipReason.UNKNOWN_ITEM

    def test_doubled_markers_resolve_if_catalog_has_them(self, index, runes):
        load_sets(["Offer Shako"], index)
        result = parse_line("need offer shako ist", index, runes)

        assert result.matched
        assert result.item.display_name == "Offer Shako"

    def test_unknown_price_word(self, index, runes):
        result = parse_line("shako ungodly rune", index, runes)

        assert not result.matched
        assert result.reason is SkipReason.UNKNOWN_PRICE

    def test_rune_word_is_not_a_price(self, index, runes):
        assert parse_line("shako rune", index, runes).reason is SkipReason.UNKNOWN_PRICE
        assert parse_line("shako ist rune", index, runes).reason is SkipReason.UNKNOWN_PRICE

    def test_price_must_be_last(self, index, runes):
        result = parse_line("shako ist pls", index, runes)
        assert result.reason is SkipReason.UNKNOWN_PRICE

    def test_unknown_item(self, index, runes):
        result = parse_line("windforce ber", index, runes)

        assert result.reason is SkipReason.UNKNOWN_ITEM
        assert result.item is None

    def test_too_few_words(self, index, runes):
        assert parse_line("shako", index, runes).reason is SkipReason.TOO_FEW_WORDS
        assert parse_line("", index, runes).reason is SkipReason.TOO_FEW_WORDS
        assert parse_line("offer ist", index, runes).reason is SkipReason.TOO_FEW_WORDS
        assert parse_line("ist obo", index, runes).reason is SkipReason.TOO_FEW_WORDS

    def test_case_and_punctuation_insensitive(self, index, runes):
        result = parse_line("NEED: SoJ!!! BER", index, runes)

        assert result.matched
        assert result.item.display_name == "The Stone of Jordan"
        assert result.price == "ber"

    def test_keeps_original_line(self, index, runes):
        result = parse_line("Shako - Ist", index, runes)
        assert result.line == "Shako - Ist"


class TestAnalyzeTrades:
    """Test the accumulation loop."""

    def test_counts_accumulate(self, index, runes):
        analyze_trades(["shako ist"] * 5, index, runes)

        item = index.lookup("shako")
        assert item.price_distribution == {runes.ordinal_of("ist"): 5}

    def test_different_units_kept_separate(self, index, runes):
        analyze_trades(["shako ist", "harlequin crest vex", "shako ist"], index, runes)

        item = index.lookup("shako")
        assert item.price_distribution == {
            runes.ordinal_of("ist"): 2,
            runes.ordinal_of("vex"): 1,
        }

    def test_unmatched_lines_leave_no_trace(self, index, runes):
        analyze_trades(["shako", "shako rune", "windforce ber"], index, runes)

        assert all(not item.price_distribution for item in index.items())

    def test_returns_summary(self, index, runes):
        summary = analyze_trades(
            ["shako ist\n", "shako\n", "shako rune\n", "windforce ber\n", "soj ber\n"],
            index,
            runes,
        )

        assert summary == {
            "total": 5,
            "matched": 2,
            "too_few_words": 1,
            "unknown_price": 1,
            "unknown_item": 1,
        }

    def test_empty_input(self, index, runes):
        summary = analyze_trades([], index, runes)

        assert summary["total"] == 0
        assert all(not item.price_distribution for item in index.items())

    def test_trace_observer_sees_every_line(self, index, runes):
        seen = []
        analyze_trades(["shako ist", "nothing here"], index, runes, trace=seen.append)

        assert [r.line for r in seen] == ["shako ist", "nothing here"]
        assert seen[0].matched
        assert not seen[1].matched

    def test_trace_does_not_change_counts(self, index, runes):
        analyze_trades(["shako ist"], index, runes, trace=None)
        analyze_trades(["shako ist"], index, runes, trace=lambda r: None)

        assert index.lookup("shako").price_distribution == {runes.ordinal_of("ist"): 2}

    def test_default_trace_logs_at_debug(self, index, runes, caplog):
        with caplog.at_level(logging.DEBUG, logger="pricecheck.matcher"):
            analyze_trades(["shako ist"], index, runes)

        assert "Processing line" in caplog.text
        assert "Matched item = Harlequin Crest with price = ist" in caplog.text


class TestSummarizeResults:
    """Test result counting."""

    def test_summarize(self, index, runes):
        results = [parse_line(line, index, runes) for line in ["shako ist", "soj ber", "shako"]]
        summary = summarize_results(results)

        assert summary["total"] == 3
        assert summary["matched"] == 2
        assert summary["too_few_words"] == 1
        assert summary["unknown_price"] == 0
        assert summary["unknown_item"] == 0

    def test_summarize_empty(self):
        assert summarize_results([])["total"] == 0
