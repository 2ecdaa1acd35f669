"""Tests for sheet readers."""

from __future__ import annotations

import pytest
from openpyxl import Workbook, load_workbook

from xls_bridge.exceptions import (
    InvalidDateError,
    InvalidHeaderRowError,
    InvalidStartRowError,
    MissingColumnsError,
    SheetNotFoundError,
)
from xls_bridge.extractors import (
    ColumnMapper,
    RecordExtractor,
    get_header_row,
    get_worksheet,
    verify_required_columns,
)
from xls_bridge.models import ErrorPolicy


class TestGetWorksheet:
    """Tests for get_worksheet."""

    def test_by_index(self, offset_header_workbook):
        wb = load_workbook(offset_header_workbook)
        assert get_worksheet(wb, 1).title == "Resumo"
        assert get_worksheet(wb).title == "Resumo"
        wb.close()

    def test_by_name(self, offset_header_workbook):
        wb = load_workbook(offset_header_workbook)
        assert get_worksheet(wb, "Resumo").title == "Resumo"
        wb.close()

    def test_long_name_is_truncated(self, offset_header_workbook):
        wb = load_workbook(offset_header_workbook)
        ws = get_worksheet(wb, "Relatório de Vendas por Região e Período Fiscal")
        assert ws["A1"].value == "Relatório"
        wb.close()

    @pytest.mark.parametrize("sheet", [0, 3, "Nada", None])
    def test_missing_sheet(self, offset_header_workbook, sheet):
        wb = load_workbook(offset_header_workbook)
        with pytest.raises(SheetNotFoundError):
            get_worksheet(wb, sheet)
        wb.close()


class TestGetHeaderRow:
    """Tests for get_header_row."""

    def test_returns_cells(self, people_workbook):
        wb = load_workbook(people_workbook)
        cells = get_header_row(wb.active, 1)
        assert [c.value for c in cells] == ["Nome", "Idade", "Data de Emissão", "Data Horario"]
        wb.close()

    @pytest.mark.parametrize("row", [0, -1, 99, "1", True])
    def test_invalid_rows(self, people_workbook, row):
        wb = load_workbook(people_workbook)
        with pytest.raises(InvalidHeaderRowError):
            get_header_row(wb.active, row)
        wb.close()


class TestColumnMapper:
    """Tests for ColumnMapper."""

    def test_maps_upper_labels(self, people_workbook):
        wb = load_workbook(people_workbook)
        column_map = ColumnMapper(wb.active).extract()

        assert column_map.columns == {
            "NOME": 1,
            "IDADE": 2,
            "DATA DE EMISSÃO": 3,
            "DATA HORARIO": 4,
        }
        assert column_map.labels[0] == "NOME"
        wb.close()

    def test_required_columns_case_insensitive(self, people_workbook):
        wb = load_workbook(people_workbook)
        column_map = ColumnMapper(wb.active, required_columns=["nome", "Idade"]).extract()
        assert "NOME" in column_map.columns
        wb.close()

    def test_missing_required_columns(self, people_workbook):
        wb = load_workbook(people_workbook)
        with pytest.raises(MissingColumnsError) as exc_info:
            ColumnMapper(wb.active, required_columns=["Nome", "cpf", "Email"]).extract()

        assert exc_info.value.missing == ["CPF", "EMAIL"]
        assert '"CPF, EMAIL"' in str(exc_info.value)
        wb.close()

    def test_verify_names_exactly_missing(self):
        with pytest.raises(MissingColumnsError) as exc_info:
            verify_required_columns({"NOME": 1}, ["NOME", "IDADE"])
        assert exc_info.value.missing == ["IDADE"]

    def test_skips_non_text_headers(self):
        wb = Workbook()
        ws = wb.active
        ws.append(["Nome", None, True, "Ano", 2024])
        column_map = ColumnMapper(ws).extract()
        assert column_map.columns == {"NOME": 1, "ANO": 4, "2024": 5}
        wb.close()


class TestRecordExtractor:
    """Tests for RecordExtractor."""

    def test_raw_records(self, people_workbook):
        wb = load_workbook(people_workbook)
        ws = wb.active
        extractor = RecordExtractor(ws, get_header_row(ws, 1))
        records = extractor.extract()

        assert len(records) == 3
        assert records[0]["nome"] == "  Ana  "
        assert records[0]["idade"] == 30
        assert set(records[0]) == {"nome", "idade", "data_de_emissao", "data_horario"}
        assert records[2] == {"nome": "Caio"}
        wb.close()

    def test_formatted_records(self, people_workbook):
        wb = load_workbook(people_workbook)
        ws = wb.active
        records, errors = RecordExtractor(ws, get_header_row(ws, 1)).extract_formatted()

        assert errors == []
        assert records[0] == {
            "nome": "Ana",
            "idade": "30",
            "data_de_emissao": "15/01/2024",
            "data_horario": "14:30",
        }
        assert records[1]["idade"] == "41"
        assert records[1]["data_horario"] == "08:05"
        wb.close()

    def test_duplicate_headers(self, duplicate_header_workbook):
        wb = load_workbook(duplicate_header_workbook)
        ws = wb.active
        records = RecordExtractor(ws, get_header_row(ws, 1)).extract()
        assert records == [{"nome": "Ana", "nome_2": "Bia", "cidade": "Recife"}]
        wb.close()

    def test_hidden_columns_excluded(self, hidden_column_workbook):
        wb = load_workbook(hidden_column_workbook)
        ws = wb.active
        records = RecordExtractor(ws, get_header_row(ws, 1)).extract()
        assert records == [{"nome": "Ana", "cidade": "Recife"}]
        wb.close()

    def test_hidden_columns_in_memory(self):
        wb = Workbook()
        ws = wb.active
        ws.append(["A", "B", "C"])
        ws.append([1, 2, 3])
        ws.column_dimensions["C"].hidden = True
        records = RecordExtractor(ws, get_header_row(ws, 1)).extract()
        assert records == [{"a": 1, "b": 2}]
        wb.close()

    def test_cells_under_empty_header_skipped(self):
        wb = Workbook()
        ws = wb.active
        ws.append(["Nome", None, 2024])
        ws.append(["Ana", "solto", "numero"])
        records = RecordExtractor(ws, get_header_row(ws, 1)).extract()
        assert records == [{"nome": "Ana"}]
        wb.close()

    def test_start_row_offset(self, offset_header_workbook):
        wb = load_workbook(offset_header_workbook)
        ws = wb.worksheets[1]
        records, _ = RecordExtractor(ws, get_header_row(ws, 3), start_row=4).extract_formatted()
        assert records == [
            {"regiao": "Norte", "total": "1500.5"},
            {"regiao": "Sul", "total": "900"},
        ]
        wb.close()

    @pytest.mark.parametrize("start_row", [0, -2, "2"])
    def test_invalid_start_row(self, people_workbook, start_row):
        wb = load_workbook(people_workbook)
        ws = wb.active
        with pytest.raises(InvalidStartRowError):
            RecordExtractor(ws, get_header_row(ws, 1), start_row=start_row)
        wb.close()

    def test_collects_row_failures(self, people_workbook, monkeypatch):
        from xls_bridge.extractors import records as records_module

        original = records_module.format_record

        def failing_format(record):
            if record.get("nome") == "Bia":
                raise InvalidDateError("05/13/2023")
            return original(record)

        monkeypatch.setattr(records_module, "format_record", failing_format)

        wb = load_workbook(people_workbook)
        ws = wb.active
        records, errors = RecordExtractor(ws, get_header_row(ws, 1)).extract_formatted()

        assert [r["nome"] for r in records] == ["Ana", "Caio"]
        assert len(errors) == 1
        assert errors[0].row == 3
        assert "05/13/2023" in errors[0].message
        wb.close()

    def test_raise_policy(self, people_workbook, monkeypatch):
        from xls_bridge.extractors import records as records_module

        def failing_format(record):
            raise InvalidDateError("x")

        monkeypatch.setattr(records_module, "format_record", failing_format)

        wb = load_workbook(people_workbook)
        ws = wb.active
        extractor = RecordExtractor(ws, get_header_row(ws, 1))
        with pytest.raises(InvalidDateError):
            extractor.extract_formatted(ErrorPolicy.RAISE)
        wb.close()
