# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - config          → AppConfig with defaults, output under tmp_path
# - resolver        → SectionResolver with default rules
# - synthesizer     → FieldSynthesizer with default rules
# - pipeline        → InferTemplate built from `config`
# - *_section       → raw section payloads used across test modules
# - landing_page    → a whole metadata document (sections in order)
#
# NOTES:
# ------
# - Use tmp_path for temporary files
# - Fixtures never read .env; tests that exercise get_config() patch
#   the environment themselves
# ==============================================

import pytest

from template_infer.config import AppConfig, InferenceConfig, TemplateConfig
from template_infer.analysis import SectionResolver
from template_infer.synthesis import FieldSynthesizer
from template_infer.infer_template import InferTemplate


@pytest.fixture
def config(tmp_path) -> AppConfig:
    """Default configuration writing into a temporary directory."""
    return AppConfig(
        inference=InferenceConfig(),
        template=TemplateConfig(),
        output_dir=str(tmp_path / "output"),
    )


@pytest.fixture
def resolver() -> SectionResolver:
    return SectionResolver()


@pytest.fixture
def synthesizer() -> FieldSynthesizer:
    return FieldSynthesizer()


@pytest.fixture
def pipeline(config) -> InferTemplate:
    """Create a fresh pipeline instance."""
    return InferTemplate(config)


# ==============================================
# Section payloads
# ==============================================

@pytest.fixture
def hero_section() -> dict:
    return {
        "title": "Build faster",
        "subtitle": "Ship content without waiting on developers",
        "cta_button": "Get started",
        "background_image": "hero.jpg",
    }


@pytest.fixture
def clients_section() -> dict:
    """Two uniform logo cards wrapped in a single key."""
    return {
        "companies": [
            {"name": "Slack", "logo": "slack.png"},
            {"name": "Zoover", "logo": "zoover.png"},
        ]
    }


@pytest.fixture
def contact_section() -> dict:
    return {"email": "a@b.com", "phone": "123", "address": "1 Main St"}


@pytest.fixture
def projects_section() -> dict:
    """Five rich project cards next to a see-more affordance."""
    return {
        "projects": [
            {
                "title": f"Project {index}",
                "description": "A case study",
                "image": f"project-{index}.jpg",
                "date": "2024-01-0{}".format(index),
                "author": "Studio",
            }
            for index in range(1, 6)
        ],
        "see_more_button": True,
    }


@pytest.fixture
def form_section() -> dict:
    return {
        "fields": [
            {"type": "email", "label": "Email", "placeholder": "you@example.com"},
            {"type": "text", "label": "Name"},
            {"type": "textarea", "label": "Message"},
        ],
        "submit_button": "Send",
    }


@pytest.fixture
def gallery_section() -> dict:
    return {
        "photos": [
            {"src": "a.jpg", "width": 800, "height": 600},
            {"src": "b.jpg", "width": 800, "height": 600},
            {"src": "c.jpg", "width": 800, "height": 600},
        ]
    }


@pytest.fixture
def company_info_section() -> dict:
    return {"name": "Acme", "founded": 1999, "logo": "acme.png"}


@pytest.fixture
def landing_page(hero_section, clients_section, projects_section, contact_section) -> dict:
    """A whole page, including a layout section that gets excluded."""
    return {
        "hero": hero_section,
        "clients": clients_section,
        "projects": projects_section,
        "contact": contact_section,
        "footer": {"copyright": "© Acme", "privacy_link": "/privacy"},
    }
