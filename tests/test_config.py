"""Tests for finddupes.config — configuration loading and merging."""

from __future__ import annotations

from finddupes.config import CONFIG_FILENAME
from finddupes.config import load_config
from finddupes.config import merge_config_into_args

import argparse
import logging
import pathlib


class TestLoadConfig:
    """Test loading config.toml."""

    def test_returns_empty_dict_when_no_file(self, tmp_path):
        assert load_config(tmp_path) == {}

    def test_loads_valid_toml(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(
            'mode = "md5"\ndisplay = 5\nshow_progress = true\n'
        )
        cfg = load_config(tmp_path)
        assert cfg == {"mode": "md5", "display": 5, "show_progress": True}

    def test_list_values(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(
            'paths = ["/data"]\nexclude = ["/data/.git", "/data/backup"]\n'
        )
        cfg = load_config(tmp_path)
        assert cfg["exclude"] == ["/data/.git", "/data/backup"]

    def test_returns_empty_dict_on_parse_error(self, tmp_path, caplog):
        (tmp_path / CONFIG_FILENAME).write_text("this is not valid toml [[[")
        with caplog.at_level(logging.WARNING, logger="finddupes"):
            assert load_config(tmp_path) == {}
        assert "Ignoring unreadable config" in caplog.text

    def test_returns_empty_dict_on_invalid_utf8(self, tmp_path, caplog):
        (tmp_path / CONFIG_FILENAME).write_bytes(b'mode = "\xff\xfe"\n')
        with caplog.at_level(logging.WARNING, logger="finddupes"):
            assert load_config(tmp_path) == {}
        assert "Ignoring unreadable config" in caplog.text

    def test_uses_default_config_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        config_dir = tmp_path / "finddupes"
        config_dir.mkdir()
        (config_dir / CONFIG_FILENAME).write_text('mode = "nands"\n')
        assert load_config()["mode"] == "nands"

    def test_default_config_dir_not_created(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert load_config() == {}
        assert not (tmp_path / "finddupes").exists()


class TestMergeConfigIntoArgs:
    """Test merging config into argparse Namespace."""

    def _make_args(self, **kwargs):
        defaults = dict(
            paths=None, mode=None, export=None, exclude=None,
            display=None, show_progress=None, workers=None,
        )
        defaults.update(kwargs)
        return argparse.Namespace(**defaults)

    def test_hardcoded_defaults(self):
        args = self._make_args()
        merge_config_into_args(args, {})
        assert args.mode == "sha256"
        assert args.display == 10
        assert args.show_progress is False
        assert args.workers is None
        assert args.paths == []
        assert args.exclude == []

    def test_config_fills_unset(self):
        args = self._make_args()
        merge_config_into_args(args, {"mode": "sha1", "display": 3, "show_progress": True, "workers": 2})
        assert args.mode == "sha1"
        assert args.display == 3
        assert args.show_progress is True
        assert args.workers == 2

    def test_cli_overrides_config(self):
        args = self._make_args(mode="md5", display=7, show_progress=True)
        merge_config_into_args(args, {"mode": "sha1", "display": 3, "show_progress": False})
        assert args.mode == "md5"
        assert args.display == 7
        assert args.show_progress is True

    def test_lists_merged_cli_first(self):
        args = self._make_args(exclude=[pathlib.Path("/a"), pathlib.Path("/b")])
        merge_config_into_args(args, {"exclude": ["/b", "/c"]})
        assert args.exclude == [pathlib.Path("/a"), pathlib.Path("/b"), pathlib.Path("/c")]

    def test_paths_from_config_expand_user(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        args = self._make_args()
        merge_config_into_args(args, {"paths": ["~/Documents"]})
        assert args.paths == [tmp_path / "Documents"]

    def test_non_list_value_ignored(self, caplog):
        args = self._make_args(paths=[pathlib.Path("/cli")])
        with caplog.at_level(logging.WARNING, logger="finddupes"):
            merge_config_into_args(args, {"paths": "/data", "exclude": "/data/.git"})
        assert args.paths == [pathlib.Path("/cli")]
        assert args.exclude == []
        assert "expected a list" in caplog.text
