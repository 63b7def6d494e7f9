import csv
import io
from datetime import date

from campboard.csv_export import to_csv

COLUMNS = [("Name", "name"), ("Date", "date"), ("Missions", "missions"), ("Note", "note")]


def test_every_field_quoted_and_one_line_per_row():
    rows = [
        {"name": "Lovelace, Ada", "date": date(2025, 7, 1), "missions": ["m1", "m2"], "note": None},
        {"name": "Grace", "date": date(2025, 7, 2), "missions": [], "note": "ok"},
    ]
    out = to_csv(rows, COLUMNS)
    lines = out.strip("\n").split("\n")
    assert len(lines) == len(rows) + 1
    for line in lines:
        for field_text in next(csv.reader([line])):
            assert f'"{field_text}"' in line
    assert lines[1] == '"Lovelace, Ada","2025-07-01","m1; m2",""'


def test_embedded_quotes_are_doubled_and_round_trip():
    rows = [{"name": 'Ada "the first" Lovelace', "date": None, "missions": None, "note": "line\nbreak"}]
    out = to_csv(rows, COLUMNS)
    assert '"Ada ""the first"" Lovelace"' in out
    parsed = list(csv.reader(io.StringIO(out)))
    assert parsed[1][0] == 'Ada "the first" Lovelace'
    assert parsed[1][3] == "line\nbreak"


def test_booleans_and_header_only():
    out = to_csv([{"name": True}], [("Flag", "name")])
    assert out == '"Flag"\n"true"\n'
    assert to_csv([], COLUMNS) == '"Name","Date","Missions","Note"\n'
