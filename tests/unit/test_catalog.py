"""
Tests for token catalog normalization.

Covers:
- Record admission rules
- Symbol normalization
- Deduplication by latest date with first-seen tie-break
- Sorting, icon references and idempotence
"""

import math

import pytest

from swapform.core.swap.catalog import (
    find_token_by_symbol,
    icon_ref_for,
    normalize_catalog,
    normalize_symbol,
)
from swapform.core.swap.errors import CatalogParseError
from swapform.core.swap.models import Token

ICONS = "https://icons.test/tokens"


def record(currency, price, date="2023-08-29T07:10:40.000Z"):
    return {"currency": currency, "date": date, "price": price}


# =============================================================================
# Admission
# =============================================================================

class TestRecordAdmission:

    @pytest.mark.parametrize(
        "raw",
        [
            record("", 1.0),
            record("   ", 1.0),
            record(None, 1.0),
            record(42, 1.0),
            {"currency": "ETH", "date": 1693292440, "price": 1.0},
            {"currency": "ETH", "price": 1.0},
            record("ETH", 0),
            record("ETH", -3.5),
            record("ETH", math.inf),
            record("ETH", math.nan),
            record("ETH", "1645.9"),
            record("ETH", True),
            record("ETH/USD", 1.0),
            record("E TH", 1.0),
            "ETH",
            None,
        ],
    )
    def test_malformed_record_dropped(self, raw):
        assert normalize_catalog([raw, record("USDC", 1.0)], icon_base_url=ICONS) == (
            Token("USDC", 1.0, "2023-08-29T07:10:40.000Z", f"{ICONS}/USDC.svg"),
        )

    def test_symbol_is_trimmed_and_uppercased(self):
        tokens = normalize_catalog([record("  bNEO ", 7.2)], icon_base_url=ICONS)
        assert [t.symbol for t in tokens] == ["BNEO"]
        assert tokens[0].icon_ref == f"{ICONS}/BNEO.svg"

    def test_hyphen_and_digits_allowed(self):
        tokens = normalize_catalog([record("usd-1", 1.0), record("stATOM2", 2.0)])
        assert [t.symbol for t in tokens] == ["STATOM2", "USD-1"]

    def test_integer_price_admitted(self):
        tokens = normalize_catalog([record("ETH", 2000)])
        assert tokens[0].price == 2000.0

    @pytest.mark.parametrize("payload", [None, {"currency": "ETH"}, "[]", 5])
    def test_non_list_payload_is_fatal(self, payload):
        with pytest.raises(CatalogParseError):
            normalize_catalog(payload)

    def test_empty_list(self):
        assert normalize_catalog([]) == ()


# =============================================================================
# Deduplication
# =============================================================================

class TestDeduplication:

    def test_latest_date_wins(self):
        tokens = normalize_catalog(
            [
                record("ETH", 1600.0, "2023-08-29T07:10:40.000Z"),
                record("ETH", 1650.0, "2023-08-29T07:10:52.000Z"),
                record("ETH", 1620.0, "2023-08-29T07:10:45.000Z"),
            ]
        )
        assert len(tokens) == 1
        assert tokens[0].price == 1650.0
        assert tokens[0].updated_at == "2023-08-29T07:10:52.000Z"

    def test_later_record_first_in_input(self):
        tokens = normalize_catalog(
            [
                record("ETH", 1650.0, "2023-08-30T00:00:00Z"),
                record("ETH", 1600.0, "2023-08-29T00:00:00Z"),
            ]
        )
        assert tokens[0].price == 1650.0

    def test_equal_dates_keep_first_seen(self):
        tokens = normalize_catalog([record("ETH", 1.0), record("ETH", 2.0)])
        assert tokens[0].price == 1.0

    def test_unparsable_dates_keep_first_seen(self):
        tokens = normalize_catalog(
            [
                record("ETH", 1.0, "yesterday"),
                record("ETH", 2.0, "2023-08-30T00:00:00Z"),
            ]
        )
        assert tokens[0].price == 1.0

    def test_duplicates_merge_across_case(self):
        tokens = normalize_catalog(
            [
                record("eth", 1.0, "2023-08-29T00:00:00Z"),
                record("ETH", 2.0, "2023-08-30T00:00:00Z"),
            ]
        )
        assert len(tokens) == 1
        assert tokens[0].price == 2.0

    def test_naive_and_aware_dates_compare(self):
        tokens = normalize_catalog(
            [
                record("ETH", 1.0, "2023-08-29T00:00:00"),
                record("ETH", 2.0, "2023-08-30T00:00:00+00:00"),
            ]
        )
        assert tokens[0].price == 2.0


# =============================================================================
# Ordering, idempotence, lookups
# =============================================================================

class TestCatalogShape:

    def test_sorted_by_symbol(self):
        tokens = normalize_catalog([record("SWTH", 0.02), record("ATOM", 7.0), record("ETH", 2000.0)])
        assert [t.symbol for t in tokens] == ["ATOM", "ETH", "SWTH"]

    def test_idempotent(self):
        raw = [
            record("swth", 0.02),
            record("ETH", 1600.0, "2023-08-28T00:00:00Z"),
            record("ETH", 2000.0, "2023-08-29T00:00:00Z"),
            record("bad", -1),
        ]
        first = normalize_catalog(raw, icon_base_url=ICONS)
        again = normalize_catalog(
            [{"currency": t.symbol, "date": t.updated_at, "price": t.price} for t in first],
            icon_base_url=ICONS,
        )
        assert again == first

    def test_icon_ref_is_pure(self):
        assert icon_ref_for("ETH", ICONS + "/") == f"{ICONS}/ETH.svg"
        assert icon_ref_for("ETH", ICONS) == icon_ref_for("ETH", ICONS)

    def test_find_token_by_symbol(self):
        tokens = normalize_catalog([record("ETH", 2000.0)])
        assert find_token_by_symbol(tokens, "ETH").price == 2000.0
        assert find_token_by_symbol(tokens, "BTC") is None
        assert find_token_by_symbol(tokens, "") is None

    def test_normalize_symbol(self):
        assert normalize_symbol(" usdc ") == "USDC"
