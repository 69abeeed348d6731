# tests/test_config/test_app_settings.py
import os
import pytest
from pydantic import ValidationError
from subst.config.settings import App, DEFAULT_PATTERN
from subst.models.dataModel import DEFAULT_TOKENS


def setup_function():
    for k in list(os.environ):
        if k.upper().startswith("SUBST_"):
            del os.environ[k]


def teardown_function():
    for k in list(os.environ):
        if k.upper().startswith("SUBST_"):
            del os.environ[k]


def test_app_default_settings():
    app = App()
    assert app.beQuiet is False
    assert app.noComplain is False
    assert app.tokens == DEFAULT_TOKENS == "{}[]|="
    assert app.throws is False
    assert app.pattern == DEFAULT_PATTERN == "**/*.tmpl"


def test_app_env_override():
    os.environ["SUBST_BEQUIET"] = "true"
    os.environ["SUBST_NOCOMPLAIN"] = "true"
    os.environ["SUBST_TOKENS"] = "«»‹›|="
    os.environ["SUBST_THROWS"] = "true"
    os.environ["SUBST_PATTERN"] = "*.txt"

    app = App()
    assert app.beQuiet is True
    assert app.noComplain is True
    assert app.tokens == "«»‹›|="
    assert app.throws is True
    assert app.pattern == "*.txt"


def test_app_config_case_insensitive():
    os.environ["subst_bequiet"] = "true"
    app = App()
    assert app.beQuiet is True


def test_app_invalid_boolean():
    os.environ["SUBST_THROWS"] = "sometimes"
    with pytest.raises(ValidationError):
        App()
