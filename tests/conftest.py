"""
Pytest fixtures for the dashboard pipeline tests.

Provides small, hand-checked quotation and event collections plus an
offline data store so API tests never touch the network.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core import data as data_module  # noqa: E402
from core import records as rec  # noqa: E402
from core.sample_data import sample_records  # noqa: E402


def make_quotation(date, provider, brand, tipo, item, model, diameter, material, price, total, description):
    return rec.normalize_record(
        {
            rec.Q_DATETIME: date,
            rec.Q_PROVIDER: provider,
            rec.Q_BRAND: brand,
            rec.Q_TYPE: tipo,
            rec.Q_ITEM_TYPE: item,
            rec.Q_MODEL: model,
            rec.Q_DIAMETER: diameter,
            rec.Q_MATERIAL: material,
            rec.Q_UNIT_PRICE: price,
            rec.Q_TOTAL_PRICE: total,
            rec.Q_DESCRIPTION: description,
        },
        rec.QUOTATIONS,
    )


@pytest.fixture
def quotations():
    return [
        make_quotation("05-01-2024 10:00", "Acme", "SKF", "Rodamiento", "Componente", "6205", "52 mm", "Acero",
                       "1000", "2000", "Rodamiento SKF"),
        make_quotation("12-06-2025 09:30", "Beta", "Parker", "Manguera", "Componente", "451", "1/2", "Caucho",
                       "50000", "100000", "Manguera hidráulica"),
        make_quotation("20-02-2025 08:00", "Acme", "No especificado", "No aplica", "Servicio", "", "", "",
                       "NaN", "", "Mantención bomba"),
        make_quotation("01-03-2024 12:00", "Gamma", "SKF", "Rodamiento", "Componente", "6306", "72 mm", "Acero",
                       "600000", "600000", "árbol de transmisión"),
        make_quotation("15-07-2025 17:45", "Beta", "SKF", "Válvula", "Componente", "V2", "2 pulgadas", "Bronce",
                       "10000", "30000", "Válvula bola"),
    ]


@pytest.fixture
def events():
    return sample_records(rec.EVENTS)


@pytest.fixture
def offline_store(monkeypatch):
    """Swap the process-wide store for one that always serves sample data."""
    calls = []

    def loader(kind):
        calls.append(kind)
        return data_module.LoadResult(
            kind=kind,
            records=sample_records(kind),
            source=data_module.SOURCE_SAMPLE,
            error="offline",
        )

    store = data_module.DataStore(loader=loader)
    monkeypatch.setattr(data_module, "_STORE", store)
    store.calls = calls
    return store
