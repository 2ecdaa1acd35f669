"""Tests for path resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from xls_bridge.exceptions import InvalidPathError
from xls_bridge.paths import project_folder, resolve_path


class TestProjectFolder:
    """Tests for project_folder."""

    def test_relative_folder_under_home(self):
        assert project_folder("Downloads") == Path.home() / "Downloads"

    def test_absolute_folder_kept(self, temp_dir):
        assert project_folder(temp_dir) == temp_dir

    def test_no_folder(self):
        assert project_folder(None) is None
        assert project_folder("") is None


class TestResolvePath:
    """Tests for resolve_path."""

    def test_relative_path_joined_and_parents_created(self, temp_dir):
        path = resolve_path("relatorios/2024/vendas.xlsx", temp_dir)

        assert path == temp_dir / "relatorios" / "2024" / "vendas.xlsx"
        assert path.parent.is_dir()

    def test_absolute_path_kept(self, temp_dir):
        target = temp_dir / "a.xlsx"
        assert resolve_path(target, "/elsewhere") == target

    def test_missing_path_in_read_mode(self, temp_dir):
        with pytest.raises(InvalidPathError):
            resolve_path(None, temp_dir)
        with pytest.raises(InvalidPathError):
            resolve_path("   ", temp_dir)

    def test_missing_path_in_write_mode(self, temp_dir):
        path = resolve_path(None, temp_dir, reading=False)

        assert path.parent == temp_dir
        assert path.name.startswith("temp_")
        assert path.suffix == ".xlsx"
        assert path.stem[len("temp_"):].isdigit()

    def test_write_mode_suffix(self, temp_dir):
        assert resolve_path("", temp_dir, reading=False, suffix=".csv").suffix == ".csv"

    def test_defaults_to_working_directory(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        assert resolve_path("a.xlsx") == Path.cwd() / "a.xlsx"
