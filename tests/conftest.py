"""Shared fixtures for code128_font tests."""

import pytest

from code128_font.config import EncoderSettings, get_settings
from code128_font.core import encoder as encoder_module
from code128_font.core.encoder import Code128Encoder


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """Give every test fresh settings and a fresh global encoder."""
    for name in (
        "CODE128_DEFAULT_SYMBOLOGY",
        "CODE128_ALLOW_EXTENDED_CHARSET",
        "CODE128_FONT_SPACE_CHAR",
        "CODE128_GS1_MAX_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    monkeypatch.setattr(encoder_module, "_encoder", None)
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> EncoderSettings:
    return EncoderSettings(_env_file=None)


@pytest.fixture
def encoder(settings) -> Code128Encoder:
    return Code128Encoder(settings=settings)
