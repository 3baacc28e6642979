# ==============================================
# Tests for Configuration
# ==============================================

import pytest

import template_infer.config as config_module
from template_infer.config import DEFAULT_LAYOUT_SECTIONS, get_config


ENV_VARS = (
    "LONG_TEXT_MIN_LENGTH",
    "API_PREFIX",
    "EXCLUDE_LAYOUT_SECTIONS",
    "LAYOUT_SECTIONS",
    "TEMPLATE_MULTILANGUAGE",
    "TEMPLATE_IS_CONTENT",
    "TEMPLATE_IS_MULTIPLE",
    "OUTPUT_DIR",
    "HTTP_TIMEOUT_SECONDS",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Empty environment, no cached config and no .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_config_instance", None)
    monkeypatch.setattr(config_module, "load_dotenv", lambda dotenv_path=None: False)
    return monkeypatch


def test_defaults(clean_env):
    config = get_config(reload=True)
    assert config.inference.long_text_min_length == 120
    assert config.inference.api_prefix == "/api/v1/"
    assert config.inference.exclude_layout_sections is True
    assert config.inference.layout_sections == DEFAULT_LAYOUT_SECTIONS
    assert config.template.multilanguage is True
    assert config.template.is_content is False
    assert config.output_dir == "output/"
    assert config.http_timeout_seconds == 10.0


def test_environment_overrides(clean_env):
    clean_env.setenv("LONG_TEXT_MIN_LENGTH", "80")
    clean_env.setenv("API_PREFIX", "/api/v2/")
    clean_env.setenv("EXCLUDE_LAYOUT_SECTIONS", "false")
    clean_env.setenv("LAYOUT_SECTIONS", "Header, Sidebar")
    clean_env.setenv("TEMPLATE_MULTILANGUAGE", "no")
    clean_env.setenv("TEMPLATE_IS_CONTENT", "1")
    clean_env.setenv("OUTPUT_DIR", "build/templates")

    config = get_config(reload=True)
    assert config.inference.long_text_min_length == 80
    assert config.inference.api_prefix == "/api/v2/"
    assert config.inference.exclude_layout_sections is False
    assert config.inference.layout_sections == ("header", "sidebar")
    assert config.template.multilanguage is False
    assert config.template.is_content is True
    assert config.output_dir == "build/templates"


def test_singleton(clean_env):
    first = get_config()
    clean_env.setenv("API_PREFIX", "/changed/")
    assert get_config() is first
    assert get_config(reload=True).inference.api_prefix == "/changed/"
