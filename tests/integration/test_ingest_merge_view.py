"""Integration test for ingest, merge, view, and project round trip."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from openpyxl import Workbook

from chronotab import ChartConfig, ChronotabClient, ChronotabConfig, NumericCell, TextCell


def _write_spreadsheet(path: Path) -> Path:
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Datum", "Umsatz"])
    sheet.append(["05.01.2024", 40])
    sheet.append(["03.01.2024", 20])
    buffer = BytesIO()
    workbook.save(buffer)
    path.write_bytes(buffer.getvalue())
    return path


def test_csv_and_spreadsheet_merge_into_one_sorted_view(tmp_path: Path) -> None:
    """Mixed-format sources should merge, sort, filter, smooth, and persist."""
    csv_path = tmp_path / "kasse.csv"
    csv_path.write_text(
        "Datum,Umsatz,Kunden\n2024-01-04,30,3\n\"2024-01-02\",\"10\",1\n", encoding="utf-8"
    )
    client = ChronotabClient(ChronotabConfig())

    table = client.append(client.load(csv_path), _write_spreadsheet(tmp_path / "filiale.xlsx"))
    chart_config = client.default_chart_config(table)
    view_config = ChartConfig(
        axis_header=chart_config.axis_header,
        active_columns=("Umsatz",),
        smoothing_window=2,
        filter_start="2024-01-03",
    )
    rows = client.display_rows(table, view_config)
    project_path = client.save_project(tmp_path / "projekt.json", table, chart_config)
    document = client.load_project(project_path)

    assert table.headers == ("Datum", "Umsatz", "Kunden")
    assert chart_config.axis_header == "Datum"
    assert chart_config.active_columns == ("Umsatz", "Kunden")
    assert [record["Datum"] for record in table.rows] == [
        TextCell("2024-01-02"),
        TextCell("03.01.2024"),
        TextCell("2024-01-04"),
        TextCell("05.01.2024"),
    ]
    assert [record["Umsatz"] for record in rows] == [
        NumericCell(20.0),
        NumericCell(25.0),
        NumericCell(35.0),
    ]
    assert document.data == table and document.config == chart_config
