"""
Tests for record normalization and value helpers — core/records.py
"""
from datetime import date

import pytest

from core import records as rec


class TestNormalizeRecord:
    def test_missing_fields_default_to_empty_string(self):
        out = rec.normalize_record({rec.E_DATE: "15-01-2025"}, rec.EVENTS)
        assert tuple(out.keys()) == rec.EVENT_FIELDS
        assert out[rec.E_DATE] == "15-01-2025"
        assert out[rec.E_PRIORITY] == ""

    def test_unknown_columns_dropped_and_values_trimmed(self):
        out = rec.normalize_record({rec.Q_PROVIDER: "  Acme ", "Extra": "x", rec.Q_BRAND: None}, rec.QUOTATIONS)
        assert "Extra" not in out
        assert out[rec.Q_PROVIDER] == "Acme"
        assert out[rec.Q_BRAND] == ""

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            rec.normalize_records([{}], "invoices")


class TestPlaceholders:
    @pytest.mark.parametrize("value", [None, "", "   ", "No aplica", "No especificado", " No aplica "])
    def test_placeholder_values(self, value):
        assert rec.is_placeholder(value)

    def test_real_value(self):
        assert not rec.is_placeholder("SKF")

    def test_display_value_default(self):
        assert rec.display_value("No aplica") == "No especificado"
        assert rec.display_value("", default="N/A") == "N/A"
        assert rec.display_value(" SKF ") == "SKF"


class TestParseNumber:
    @pytest.mark.parametrize("raw, expected", [("1000", 1000.0), (" 3.5 ", 3.5), ("-20", -20.0), (7, 7.0)])
    def test_parses(self, raw, expected):
        assert rec.parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["NaN", "inf", "-Infinity", "abc", "", None, "1.000.000"])
    def test_unparseable_is_none(self, raw):
        assert rec.parse_number(raw) is None


class TestDates:
    def test_day_month_year(self):
        assert rec.parse_day_month_year("15-01-2025") == date(2025, 1, 15)

    def test_day_month_year_with_time(self):
        assert rec.parse_day_month_year("05-01-2024 10:00") == date(2024, 1, 5)

    @pytest.mark.parametrize("raw", ["2025-01-15", "31-02-2025", "", None, "hoy"])
    def test_invalid_day_month_year(self, raw):
        assert rec.parse_day_month_year(raw) is None

    def test_iso_date(self):
        assert rec.parse_iso_date("2025-01-16") == date(2025, 1, 16)
        assert rec.parse_iso_date("16-01-2025") is None
        assert rec.parse_iso_date(None) is None

    @pytest.mark.parametrize(
        "raw, expected",
        [("05-01-2024 10:00", "2024"), ("15-01-2025", "2025"), ("", ""), ("2024", ""), (None, "")],
    )
    def test_extract_year(self, raw, expected):
        assert rec.extract_year(raw) == expected


class TestPriorityRank:
    def test_known_ranks(self):
        assert [rec.priority_rank(p) for p in ["Baja", "Media", "Alta", "Crítica"]] == [1, 2, 3, 4]

    def test_unknown_rank_is_zero(self):
        assert rec.priority_rank("Urgente") == 0
        assert rec.priority_rank("") == 0


class TestFormatting:
    def test_format_clp(self):
        assert rec.format_clp("150000") == "$150.000"
        assert rec.format_clp(1234.5) == "$1.235"
        assert rec.format_clp("-2500") == "-$2.500"
        assert rec.format_clp("0") == "$0"

    def test_format_clp_unparseable(self):
        assert rec.format_clp("abc") == "N/A"

    def test_format_date(self):
        assert rec.format_date("05-01-2024 10:00") == "05-01-2024"
        assert rec.format_date("") == "N/A"
