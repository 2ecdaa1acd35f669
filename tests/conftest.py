"""Pytest fixtures for xls-bridge tests."""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from openpyxl import Workbook


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


@pytest.fixture
def people_workbook(temp_dir) -> Path:
    """Create a workbook with a header row and a few people."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Pessoas"

    ws.append(["Nome", "Idade", "Data de Emissão", "Data Horario"])
    ws.append(["  Ana  ", 30, datetime(2024, 1, 15), datetime(2024, 1, 15, 14, 30)])
    ws.append(["Bia", 41.0, datetime(2023, 3, 5), datetime(2023, 3, 5, 8, 5)])
    ws.append([None, None, None, None])  # empty row
    ws.append(["Caio", None, None, None])

    path = temp_dir / "pessoas.xlsx"
    wb.save(path)
    wb.close()
    return path


@pytest.fixture
def duplicate_header_workbook(temp_dir) -> Path:
    """Create a workbook whose header repeats a label."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Duplicados"

    ws.append(["Nome", "Nome", "Cidade"])
    ws.append(["Ana", "Bia", "Recife"])

    path = temp_dir / "duplicados.xlsx"
    wb.save(path)
    wb.close()
    return path


@pytest.fixture
def hidden_column_workbook(temp_dir) -> Path:
    """Create a workbook with a hidden middle column."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Oculta"

    ws.append(["Nome", "Senha", "Cidade"])
    ws.append(["Ana", "segredo", "Recife"])
    ws.column_dimensions["B"].hidden = True

    path = temp_dir / "oculta.xlsx"
    wb.save(path)
    wb.close()
    return path


@pytest.fixture
def offset_header_workbook(temp_dir) -> Path:
    """Create a workbook with a title above the header and a second sheet."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Resumo"
    ws["A1"] = "Resumo anual"

    # Excel keeps only the first 31 characters of a title
    ws = wb.create_sheet("Relatório de Vendas por Região e Período Fiscal"[:31])
    ws["A1"] = "Relatório"
    ws.append([])
    ws.append(["Região", "Total"])
    ws.append(["Norte", 1500.5])
    ws.append(["Sul", 900])

    path = temp_dir / "vendas.xlsx"
    wb.save(path)
    wb.close()
    return path


@pytest.fixture
def csv_file(temp_dir) -> Path:
    """Create a small CSV file with mixed delimiters and a BOM."""
    path = temp_dir / "dados.csv"
    path.write_text("\ufeffnome;idade\n\"Ana\",30\nBia;41\n", encoding="utf-8")
    return path
