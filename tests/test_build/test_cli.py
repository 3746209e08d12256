"""Tests for the findit-build command line."""

from __future__ import annotations

from pathlib import Path

from findit.build.cli import config_from_args, main, parse_args


def test_flags_override_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("FI_BUILD_LOCALES", "en,fr")
    args = parse_args([
        "--cache-dir", str(tmp_path),
        "--output", str(tmp_path / "db.json"),
        "--locales", "en, vi",
        "--offline",
    ])
    config = config_from_args(args)
    assert config.cache_dir == tmp_path
    assert config.output_path == tmp_path / "db.json"
    assert config.locales == ("en", "vi")
    assert config.offline is True


def test_environment_used_without_flags(monkeypatch):
    monkeypatch.setenv("FI_BUILD_LOCALES", "en,fr")
    monkeypatch.setenv("FI_BUILD_SEMANTIC_THRESHOLD", "0.6")
    config = config_from_args(parse_args([]))
    assert config.locales == ("en", "fr")
    assert config.semantic_threshold == 0.6
    assert config.spacy_model == "en_core_web_md"


def test_missing_sources_fail_without_writing(tmp_path):
    output = tmp_path / "symbols.json"
    code = main([
        "--cache-dir", str(tmp_path / "empty-cache"),
        "--output", str(output),
        "--offline",
    ])
    assert code == 1
    assert not Path(output).exists()
