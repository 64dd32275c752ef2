"""Unit tests for project document persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from core.errors import ChronotabProjectError
from core.types import ChartConfig, NumericCell, Table, TextCell
from store.project_io import load_project, save_project, table_from_payload, table_to_payload


def _table() -> Table:
    return Table(
        headers=("Datum", "Wert", "Notiz"),
        rows=(
            {"Datum": TextCell("2024-01-01"), "Wert": NumericCell(3.0)},
            {"Datum": TextCell("2024-01-02"), "Wert": NumericCell(5.25), "Notiz": TextCell("ok")},
        ),
        source_name="werte.csv",
        ingested_at=1704067200000,
        has_time_axis=True,
    )


def test_project_round_trip_is_lossless(tmp_path: Path) -> None:
    """Saving and loading should reproduce table and config exactly."""
    chart_config = ChartConfig(
        axis_header="Datum",
        active_columns=("Wert",),
        show_grid=False,
        smoothing_window=3,
        stroke_width=1,
        filter_start="2024-01-01",
        filter_end="",
    )

    project_path = save_project(tmp_path / "nested" / "projekt.json", _table(), chart_config)
    document = load_project(project_path)

    assert document.data == _table()
    assert document.config == chart_config
    assert document.type == "chronotab-project" and document.saved_at


def test_table_payload_uses_canonical_shape() -> None:
    """The JSON shape should keep plain values and omit absent keys."""
    payload = table_to_payload(_table())

    assert payload["rows"][0] == {"Datum": "2024-01-01", "Wert": 3.0}
    assert payload["sourceName"] == "werte.csv" and payload["hasTimeAxis"] is True


def test_load_project_rejects_foreign_documents(tmp_path: Path) -> None:
    """Documents with another type should be rejected."""
    project_path = tmp_path / "fremd.json"
    project_path.write_text(json.dumps({"type": "other", "data": {}}), encoding="utf-8")

    with pytest.raises(ChronotabProjectError):
        load_project(project_path)


def test_load_project_rejects_invalid_json(tmp_path: Path) -> None:
    """Broken JSON should surface as a project error."""
    project_path = tmp_path / "kaputt.json"
    project_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ChronotabProjectError):
        load_project(project_path)


def test_table_from_payload_rejects_unknown_columns_and_values() -> None:
    """Row keys must be headers and values must be strings or finite numbers."""
    with pytest.raises(ChronotabProjectError):
        table_from_payload({"headers": ["A"], "rows": [{"B": 1}]})
    with pytest.raises(ChronotabProjectError):
        table_from_payload({"headers": ["A"], "rows": [{"A": None}]})
