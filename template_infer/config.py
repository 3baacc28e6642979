# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - InferenceConfig (dataclass)
#     long_text_min_length: int     (default 120)
#     api_prefix: str               (default "/api/v1/")
#     exclude_layout_sections: bool (default True)
#     layout_sections: tuple        (default navigation/navbar/nav/header/footer)
#
# - TemplateConfig (dataclass)
#     multilanguage: bool   (default True)
#     is_content: bool      (default False)
#     is_multiple: bool     (default False)
#
# - AppConfig (dataclass)
#     inference: InferenceConfig
#     template: TemplateConfig
#     output_dir: str               (default "output/")
#     http_timeout_seconds: float   (default 10.0)
#
# FUNCTION:
# ---------
# - get_config(reload: bool = False) -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from template_infer.config import get_config
#   config = get_config()
#   print(config.inference.api_prefix)
#   print(config.template.multilanguage)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_LAYOUT_SECTIONS = ("navigation", "navbar", "nav", "header", "footer")


@dataclass
class InferenceConfig:
    """Knobs for the heuristic inference stages."""
    long_text_min_length: int = 120
    api_prefix: str = "/api/v1/"
    exclude_layout_sections: bool = True
    layout_sections: Tuple[str, ...] = field(default=DEFAULT_LAYOUT_SECTIONS)


@dataclass
class TemplateConfig:
    """Template-level defaults written into assembled documents."""
    multilanguage: bool = True
    is_content: bool = False
    is_multiple: bool = False


@dataclass
class AppConfig:
    """Main application configuration."""
    inference: InferenceConfig
    template: TemplateConfig
    output_dir: str = "output/"
    http_timeout_seconds: float = 10.0


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(name)
    if not value:
        return default
    return tuple(item.strip().lower() for item in value.split(",") if item.strip())


def get_config(reload: bool = False) -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Args:
        reload: Discard the cached instance and read the environment again

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build inference configuration
    inference_config = InferenceConfig(
        long_text_min_length=int(os.getenv("LONG_TEXT_MIN_LENGTH", "120")),
        api_prefix=os.getenv("API_PREFIX", "/api/v1/"),
        exclude_layout_sections=_env_bool("EXCLUDE_LAYOUT_SECTIONS", True),
        layout_sections=_env_list("LAYOUT_SECTIONS", DEFAULT_LAYOUT_SECTIONS),
    )

    # Build template defaults
    template_config = TemplateConfig(
        multilanguage=_env_bool("TEMPLATE_MULTILANGUAGE", True),
        is_content=_env_bool("TEMPLATE_IS_CONTENT", False),
        is_multiple=_env_bool("TEMPLATE_IS_MULTIPLE", False),
    )

    # Build main application configuration
    _config_instance = AppConfig(
        inference=inference_config,
        template=template_config,
        output_dir=os.getenv("OUTPUT_DIR", "output/"),
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "10.0")),
    )

    return _config_instance
