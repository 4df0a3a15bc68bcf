from pathlib import Path

import pytest
from pydantic import ValidationError

from settings import Settings


def test_settings_defaults():
    s = Settings()
    assert s.logo_path == Path("./SKYETRAIN_MERCH_-_SKYETRAIN_LOGO.png")
    assert s.preset == "wide"
    assert s.content_path is None
    assert s.tokens_path is None
    assert s.log_level == "INFO"


def test_default_output_path_per_preset():
    assert Settings().resolved_output_path == Path("output.docx")
    assert Settings(preset="narrow").resolved_output_path == Path("output_mobile.docx")


def test_explicit_output_path_wins():
    s = Settings(preset="narrow", output_path=Path("/tmp/article.docx"))
    assert s.resolved_output_path == Path("/tmp/article.docx")


def test_unknown_preset_rejected():
    with pytest.raises(ValidationError):
        Settings(preset="letter")


def test_log_level_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_settings_env_prefix(monkeypatch):
    monkeypatch.setenv("SKT_PRESET", "narrow")
    monkeypatch.setenv("SKT_LOGO_PATH", "/assets/logo.png")
    s = Settings()
    assert s.preset == "narrow"
    assert s.logo_path == Path("/assets/logo.png")
