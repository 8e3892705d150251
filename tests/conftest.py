# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - make_row          → build a raw reference row from short keys
# - reference_rows    → five raw rows (one with an unparseable target)
# - predictor         → KNNPredictor initialized with reference_rows
# - write_csv         → write rows to a CSV file under tmp_path
#
# ==============================================

import csv

import pytest

from catalyst_knn.config import AppConfig
from catalyst_knn.normalization.records import COLUMN_NAMES, TARGET_COLUMN
from catalyst_knn.predictor import KNNPredictor


def _make_row(target="", **fields) -> dict:
    row = {column: "" for column in COLUMN_NAMES.values()}
    for name, value in fields.items():
        row[COLUMN_NAMES[name]] = "" if value is None else str(value)
    row[TARGET_COLUMN] = target
    return row


@pytest.fixture
def make_row():
    """Return the raw-row builder."""
    return _make_row


@pytest.fixture
def reference_rows() -> list:
    """Raw rows as they come out of the CSV (all strings)."""
    return [
        _make_row(
            target="0.85", metal="Co", mof="ZIF-67", form="SA",
            ligand="2-methylimidazole", atmosphere="Ar",
            pyro_temp=900, bet=800, rpm=1600, scan_rate=10,
        ),
        _make_row(
            target="['0.880', '0.920']", metal="Fe", mof="ZIF-8", form="SA",
            ligand="2-methylimidazole", atmosphere="Ar/H2",
            pyro_temp=1000, bet=1200, rpm=1600, scan_rate=5,
        ),
        _make_row(
            target="0.90", metal="Pt", mof="", form="",
            ligand="", atmosphere="N2",
            pyro_temp=700, bet=300, rpm=1600, scan_rate=10,
        ),
        _make_row(
            target="NAN", metal="Fe", mof="ZIF-8", form="SA",
            ligand="mim", atmosphere="Ar",
            pyro_temp=1000, bet=1000, rpm=1600, scan_rate=5,
        ),
        _make_row(
            target="0.82", metal="Co,Fe", mof="CoZn bimetallic", form="SA and cluster",
            ligand="BDC", atmosphere="NH3",
            pyro_temp=950, bet=600, rpm=1600, scan_rate=10,
        ),
    ]


@pytest.fixture
def exact_query() -> dict:
    """Query identical to the second reference row."""
    return {
        "metal": "Fe",
        "mof": "ZIF-8",
        "form": "SA",
        "ligand": "2-methylimidazole",
        "atmosphere": "Ar/H2",
        "pyro_temp": 1000,
        "bet": 1200,
        "rpm": 1600,
        "scan_rate": 5,
    }


@pytest.fixture
def predictor(reference_rows) -> KNNPredictor:
    """A READY predictor over reference_rows."""
    knn = KNNPredictor(config=AppConfig())
    assert knn.initialize(reference_rows) is None
    return knn


@pytest.fixture
def write_csv(tmp_path):
    """Write a list of row dicts to a CSV file and return its path."""
    def _write(rows, name="reference.csv"):
        path = tmp_path / name
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
        return path
    return _write
