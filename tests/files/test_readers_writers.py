import json
from datetime import date

import pandas as pd
import pytest

from record_cleaner.cleaning import InvalidTableError
from record_cleaner.files import cleaned_filename, read_table, sanitize_for_export, write_table


class TestReadTable:
    """Test loading files into rows."""

    def test_csv_cells_stay_strings(self, tmp_path):
        path = tmp_path / "customers.csv"
        path.write_text("id,name,email\n007, John ,\n\n2,Jane,jane@example.com\n", encoding="utf-8")

        rows = read_table(path)

        assert rows == [
            {"id": "007", "name": " John ", "email": ""},
            {"id": "2", "name": "Jane", "email": "jane@example.com"},
        ]

    def test_txt_is_read_as_csv(self, tmp_path):
        path = tmp_path / "customers.TXT"
        path.write_text("id,name\n1,John\n", encoding="utf-8")

        assert read_table(path) == [{"id": "1", "name": "John"}]

    def test_json_array(self, tmp_path):
        path = tmp_path / "customers.json"
        path.write_text(json.dumps([{"id": 1, "email": None}]), encoding="utf-8")

        assert read_table(path) == [{"id": 1, "email": None}]

    def test_json_must_be_an_array_of_objects(self, tmp_path):
        path = tmp_path / "customers.json"
        path.write_text(json.dumps({"id": 1}), encoding="utf-8")
        with pytest.raises(InvalidTableError):
            read_table(path)

        path.write_text(json.dumps([[1, 2]]), encoding="utf-8")
        with pytest.raises(InvalidTableError):
            read_table(path)

    def test_empty_csv_is_rejected(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")

        with pytest.raises(InvalidTableError):
            read_table(path)

    def test_unsupported_suffix_is_rejected(self, tmp_path):
        path = tmp_path / "customers.xlsx"
        path.write_bytes(b"")

        with pytest.raises(InvalidTableError):
            read_table(path)


class TestExport:
    """Test sanitising and writing cleaned tables."""

    def test_formula_like_cells_are_neutralised(self):
        table = [{"a": "=SUM(A1:A3)", "b": "+44 20 7946 0000", "c": "@handle", "d": "-5", "e": 5, "f": None}]

        sanitized = sanitize_for_export(table)

        assert sanitized == [
            {"a": "'=SUM(A1:A3)", "b": "'+44 20 7946 0000", "c": "'@handle", "d": "-5", "e": 5, "f": None}
        ]
        assert table[0]["a"] == "=SUM(A1:A3)"

    def test_csv_export_is_sanitised(self, tmp_path):
        table = [{"id": "1", "note": "=cmd"}, {"id": "2", "extra": "x"}]

        path = write_table(table, tmp_path / "out" / "clean.csv")

        written = pd.read_csv(path, dtype=str, keep_default_na=False)
        assert list(written.columns) == ["id", "note", "extra"]
        assert written.to_dict(orient="records") == [
            {"id": "1", "note": "'=cmd", "extra": ""},
            {"id": "2", "note": "", "extra": "x"},
        ]

    def test_json_export_is_verbatim(self, tmp_path):
        table = [{"id": 1, "note": "=cmd"}]

        path = write_table(table, tmp_path / "clean.json")

        assert json.loads(path.read_text(encoding="utf-8")) == table

    def test_parquet_export_uses_string_columns(self, tmp_path):
        table = [{"id": 1, "name": "John"}, {"id": 2, "name": "@jane"}]

        path = write_table(table, tmp_path / "clean.data", fmt="parquet")

        written = pd.read_parquet(path)
        assert written["id"].tolist() == ["1", "2"]
        assert written["name"].tolist() == ["John", "'@jane"]

    def test_unknown_format_raises(self, tmp_path):
        with pytest.raises(ValueError):
            write_table([{"id": "1"}], tmp_path / "clean.xlsx")


def test_cleaned_filename():
    assert cleaned_filename("customers.CSV", "json", date(2024, 3, 1)) == "customers_cleaned_2024-03-01.json"
    assert cleaned_filename("exports/orders.txt", "csv", date(2024, 3, 1)) == "orders_cleaned_2024-03-01.csv"
    assert cleaned_filename("orders", "parquet", date(2024, 3, 1)) == "orders_cleaned_2024-03-01.parquet"
