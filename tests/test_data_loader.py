"""
Tests for the published-sheet loader and session store — core/data.py

requests.get is patched throughout; no test touches the network.
"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from core import data as data_module
from core.data import DataStore, FetchError, LoadResult, fetch_csv, load, prepare_context
from core.filters import QuotationFilters
from core.records import EVENTS, QUOTATIONS
from core.sample_data import sample_records

EVENTS_CSV = "Fecha,Hora,Estado,Prioridad\n15-01-2025,09:30,Completado,Alta\n16-01-2025,14:15,Pendiente,Baja\n"


def _response(text="", status_code=200, content_type="text/csv"):
    resp = MagicMock()
    resp.ok = 200 <= status_code < 300
    resp.status_code = status_code
    resp.reason = "OK" if resp.ok else "Server Error"
    resp.headers = {"Content-Type": content_type}
    resp.text = text
    resp.encoding = None
    return resp


# ── fetch_csv ─────────────────────────────────────────────────────────────────

class TestFetchCsv:
    def test_returns_body_text(self):
        with patch("core.data.requests.get", return_value=_response(EVENTS_CSV)) as get:
            assert fetch_csv("https://example.test/sheet.csv", timeout=3) == EVENTS_CSV
        get.assert_called_once_with("https://example.test/sheet.csv", timeout=3)

    def test_defaults_to_utf8_without_charset(self):
        resp = _response(EVENTS_CSV)
        with patch("core.data.requests.get", return_value=resp):
            fetch_csv("https://example.test/sheet.csv")
        assert resp.encoding == "utf-8"

    def test_keeps_declared_charset(self):
        resp = _response(EVENTS_CSV, content_type="text/csv; charset=ISO-8859-1")
        resp.encoding = "ISO-8859-1"
        with patch("core.data.requests.get", return_value=resp):
            fetch_csv("https://example.test/sheet.csv")
        assert resp.encoding == "ISO-8859-1"

    def test_http_error_raises_fetch_error(self):
        with patch("core.data.requests.get", return_value=_response(status_code=500)):
            with pytest.raises(FetchError, match="500"):
                fetch_csv("https://example.test/sheet.csv")

    def test_network_error_raises_fetch_error(self):
        with patch("core.data.requests.get", side_effect=requests.ConnectionError("boom")):
            with pytest.raises(FetchError):
                fetch_csv("https://example.test/sheet.csv")

    def test_missing_url_raises_without_request(self):
        with patch("core.data.requests.get") as get:
            with pytest.raises(FetchError):
                fetch_csv("")
        get.assert_not_called()


# ── load ──────────────────────────────────────────────────────────────────────

class TestLoad:
    def test_remote_success(self):
        with patch("core.data.requests.get", return_value=_response(EVENTS_CSV)):
            result = load(EVENTS, url="https://example.test/events.csv")
        assert result.source == "remote"
        assert not result.is_sample
        assert result.error is None
        assert [r["Fecha"] for r in result.records] == ["15-01-2025", "16-01-2025"]
        assert result.records[0]["Responsable"] == ""

    def test_http_failure_falls_back_to_sample(self):
        with patch("core.data.requests.get", return_value=_response(status_code=503)):
            result = load(EVENTS, url="https://example.test/events.csv")
        assert result.is_sample
        assert "503" in result.error
        assert result.records == sample_records(EVENTS)

    @pytest.mark.parametrize("exc", [requests.ConnectionError("down"), requests.Timeout("slow")])
    def test_network_failure_falls_back(self, exc):
        with patch("core.data.requests.get", side_effect=exc):
            result = load(EVENTS, url="https://example.test/events.csv")
        assert result.is_sample
        assert result.records

    @pytest.mark.parametrize("body", ["", "Fecha,Hora\n"])
    def test_unusable_body_falls_back(self, body):
        with patch("core.data.requests.get", return_value=_response(body)):
            result = load(EVENTS, url="https://example.test/events.csv")
        assert result.is_sample

    def test_unconfigured_endpoint_falls_back(self):
        result = load(QUOTATIONS, url="")
        assert result.is_sample
        assert result.records == sample_records(QUOTATIONS)

    def test_passes_timeout(self):
        with patch("core.data.requests.get", return_value=_response(EVENTS_CSV)) as get:
            load(EVENTS, url="https://example.test/events.csv", timeout=2.5)
        assert get.call_args.kwargs["timeout"] == 2.5

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            load("invoices")

    def test_summary(self):
        result = LoadResult(kind=EVENTS, records=[{}], source="sample", error="x")
        summary = result.summary()
        assert summary["is_sample"] is True
        assert summary["count"] == 1
        assert summary["error"] == "x"


# ── DataStore ─────────────────────────────────────────────────────────────────

def _result(kind, tag):
    return LoadResult(kind=kind, records=[{"tag": tag}], source=data_module.SOURCE_REMOTE)


class TestDataStore:
    def test_get_loads_once(self):
        loader = MagicMock(side_effect=lambda kind: _result(kind, "a"))
        store = DataStore(loader=loader)
        first = store.get(EVENTS)
        second = store.get(EVENTS)
        assert first is second
        assert loader.call_count == 1

    def test_refresh_reloads(self):
        tags = iter(["a", "b"])
        store = DataStore(loader=lambda kind: _result(kind, next(tags)))
        store.get(EVENTS)
        assert store.refresh(EVENTS).records == [{"tag": "b"}]
        assert store.get(EVENTS).records == [{"tag": "b"}]

    def test_kinds_held_separately(self):
        store = DataStore(loader=lambda kind: _result(kind, kind))
        assert store.get(EVENTS).records == [{"tag": EVENTS}]
        assert store.get(QUOTATIONS).records == [{"tag": QUOTATIONS}]

    def test_stale_load_is_discarded(self):
        calls = []

        def loader(kind):
            calls.append(kind)
            if len(calls) == 1:
                # A newer refresh starts and finishes while this one is in flight.
                store.refresh(kind)
                return _result(kind, "old")
            return _result(kind, "new")

        store = DataStore(loader=loader)
        returned = store.refresh(EVENTS)
        assert returned.records == [{"tag": "new"}]
        assert store.get(EVENTS).records == [{"tag": "new"}]
        assert len(calls) == 2

    def test_clear(self):
        loader = MagicMock(side_effect=lambda kind: _result(kind, "a"))
        store = DataStore(loader=loader)
        store.get(EVENTS)
        store.clear()
        store.get(EVENTS)
        assert loader.call_count == 2

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            DataStore(loader=MagicMock()).refresh("invoices")

    def test_module_api_uses_store(self, offline_store):
        result = data_module.load_dashboard_data(EVENTS)
        assert result.is_sample
        data_module.refresh_dashboard_data(EVENTS)
        assert offline_store.calls == [EVENTS, EVENTS]


# ── prepare_context ───────────────────────────────────────────────────────────

class TestPrepareContext:
    def test_filters_sorts_and_derives_options(self, quotations):
        result = LoadResult(kind=QUOTATIONS, records=quotations, source="remote")
        ctx = prepare_context(QUOTATIONS, {"proveedor": "Beta"}, None, result)
        assert ctx["filters"] == QuotationFilters(proveedor="Beta")
        assert ctx["sort"].field == "price"
        assert [r["Precio Unitario Neto en CLP"] for r in ctx["filtered"]] == ["50000", "10000"]
        assert ctx["records"] is quotations
        assert "Acme" in ctx["options"]["proveedor"]

    def test_rejects_filters_of_other_kind(self, events):
        result = LoadResult(kind=EVENTS, records=events, source="remote")
        with pytest.raises(ValueError):
            prepare_context(EVENTS, QuotationFilters(), None, result)
