# Tests for config.py
# Created: 2026-10-19

from pathlib import Path

import pytest
from pydantic import ValidationError

from coaclient.config import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("COACLIENT_STORAGE_DIR", raising=False)
        s = Settings(_env_file=None)
        assert s.storage_dir == Path.home() / ".coursera"
        assert s.config_path.name == "coaclient.csv"
        assert s.token_path("work").name == "work_aout2.csv"
        assert s.separator == ","

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("COACLIENT_STORAGE_DIR", str(tmp_path))
        monkeypatch.setenv("COACLIENT_TOKEN_FILE_SUFFIX", "_tokens.csv")
        s = Settings(_env_file=None)
        assert s.storage_dir == tmp_path
        assert s.token_path("work") == tmp_path / "work_tokens.csv"

    def test_tilde_expanded(self):
        s = Settings(storage_dir="~/somewhere", _env_file=None)
        assert s.storage_dir == Path.home() / "somewhere"

    @pytest.mark.parametrize("sep", ["+", "a", "=", "::", "\n"])
    def test_invalid_separator(self, sep):
        with pytest.raises(ValidationError):
            Settings(separator=sep, _env_file=None)

    @pytest.mark.parametrize("name", ["../victim", "a/b", "a\\b", "nul\0", ""])
    def test_token_path_rejects_path_like_names(self, tmp_path, name):
        s = Settings(storage_dir=tmp_path, _env_file=None)
        with pytest.raises(ValueError, match="Invalid client name"):
            s.token_path(name)

    def test_token_path_stays_in_storage_dir(self, tmp_path):
        s = Settings(storage_dir=tmp_path, _env_file=None)
        assert s.token_path("..work").parent == tmp_path

    def test_semicolon_separator(self):
        assert Settings(separator=";", _env_file=None).separator == ";"


class TestGetSettings:
    def test_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()
