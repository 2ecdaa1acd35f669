"""Tests for CSV conversion."""

from __future__ import annotations

import pytest
from openpyxl import load_workbook

from xls_bridge.csv_bridge import (
    DEFAULT_SHEET_NAME,
    csv_to_xlsx,
    read_csv_rows,
    split_line,
    write_csv,
)
from xls_bridge.exceptions import InvalidPathError, WriteFailureError


def sheet_values(path):
    wb = load_workbook(path)
    ws = wb.active
    title = ws.title
    values = [list(row) for row in ws.iter_rows(values_only=True)]
    wb.close()
    return title, values


class TestSplitLine:
    """Tests for split_line."""

    def test_mixed_delimiters(self):
        assert split_line("a;b,c\n") == ["a", "b", "c"]

    def test_unwraps_quoted_fields(self):
        assert split_line('"a";"say ""hi"""') == ["a", 'say "hi"']

    def test_no_quote_awareness(self):
        assert split_line('"1,5";2') == ['"1', '5"', "2"]


class TestReadCsvRows:
    """Tests for read_csv_rows."""

    def test_drops_bom(self, csv_file):
        rows = list(read_csv_rows(csv_file))
        assert rows == [["nome", "idade"], ["Ana", "30"], ["Bia", "41"]]

    def test_missing_path(self):
        with pytest.raises(InvalidPathError):
            list(read_csv_rows(""))


class TestCsvToXlsx:
    """Tests for csv_to_xlsx."""

    def test_converts(self, csv_file, temp_dir):
        output = csv_to_xlsx(csv_file, temp_dir / "dados.xlsx")

        title, values = sheet_values(output)
        assert title == DEFAULT_SHEET_NAME
        assert values == [["nome", "idade"], ["Ana", "30"], ["Bia", "41"]]

    def test_custom_sheet_name(self, csv_file, temp_dir):
        output = csv_to_xlsx(csv_file, temp_dir / "dados.xlsx", sheet_name="Dados")
        title, _ = sheet_values(output)
        assert title == "Dados"

    @pytest.mark.parametrize("csv_path, xlsx_path", [("", "out.xlsx"), ("in.csv", "")])
    def test_missing_paths(self, csv_path, xlsx_path):
        with pytest.raises(InvalidPathError):
            csv_to_xlsx(csv_path, xlsx_path)

    def test_write_failure(self, csv_file, temp_dir):
        with pytest.raises(WriteFailureError) as exc_info:
            csv_to_xlsx(csv_file, temp_dir / "missing" / "dir" / "dados.xlsx")
        assert "dados.xlsx" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None


class TestWriteCsv:
    """Tests for write_csv."""

    def test_format(self, temp_dir):
        path = write_csv(
            temp_dir / "saida.csv",
            ["Nome", "Data de Emissão", "Obs"],
            [{"nome": 'Ana "A"', "Data de Emissão": "15/01/2024", "obs": None}],
        )

        raw = path.read_bytes()
        assert raw.startswith(b"\xef\xbb\xbf")
        text = raw.decode("utf-8-sig")
        assert text == (
            '"Nome";"Data de Emissão";"Obs"\n'
            '"Ana ""A""";"15/01/2024";""\n'
        )

    def test_missing_values_are_empty(self, temp_dir):
        path = write_csv(temp_dir / "vazio.csv", ["a", "b"], [{"a": 1}])
        assert path.read_text(encoding="utf-8-sig") == '"a";"b"\n"1";""\n'

    def test_round_trip(self, temp_dir):
        csv_path = write_csv(temp_dir / "ida.csv", ["a", "b"], [{"a": "1", "b": "2"}])
        xlsx_path = csv_to_xlsx(csv_path, temp_dir / "volta.xlsx")

        _, values = sheet_values(xlsx_path)
        assert values == [["a", "b"], ["1", "2"]]

    def test_missing_path(self):
        with pytest.raises(InvalidPathError):
            write_csv("", ["a"], [])
