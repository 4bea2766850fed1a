"""Tests for data directory resolution."""

from pathlib import Path

import pytest

from jdfind import config


def test_env_override_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(config.DATA_DIR_ENV, str(tmp_path / "custom"))
    assert config.resolve_data_directory() == tmp_path / "custom"


def test_first_existing_candidate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(config.DATA_DIR_ENV, raising=False)
    missing, existing = tmp_path / "a", tmp_path / "b"
    existing.mkdir()
    monkeypatch.setattr(config, "DATA_DIRECTORIES", [missing, existing])
    assert config.resolve_data_directory() == existing


def test_falls_back_to_first_candidate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(config.DATA_DIR_ENV, raising=False)
    monkeypatch.setattr(config, "DATA_DIRECTORIES", [tmp_path / "a", tmp_path / "b"])
    assert config.resolve_data_directory() == tmp_path / "a"
