# ==============================================
# Tests for the command line interface
# ==============================================

import json

import pytest

import template_infer.cli as cli
from template_infer.cli import main


@pytest.fixture(autouse=True)
def fixed_config(monkeypatch, config):
    """Keep the CLI away from the real environment and .env file."""
    monkeypatch.setattr(cli, "get_config", lambda: config)
    return config


@pytest.fixture
def metadata_file(tmp_path, landing_page):
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps({"sections": landing_page}))
    return path


def test_field_types(capsys):
    assert main(["field-types"]) == 0
    types = json.loads(capsys.readouterr().out)
    assert len(types) == 12


def test_infer_prints_template(capsys, metadata_file):
    assert main(["infer", "--metadata", str(metadata_file), "--name", "landing"]) == 0
    captured = capsys.readouterr()
    template = json.loads(captured.out)
    assert template["name"] == "landing"
    assert [c["keyName"] for c in template["components"]] == ["hero", "clients", "projects", "contact"]
    assert "Skipped layout section 'footer'" in captured.err


def test_infer_report(capsys, metadata_file):
    assert main(["infer", "--metadata", str(metadata_file), "--report"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert set(report) == {"template", "sections", "skipped_sections", "validation"}


def test_infer_options(capsys, metadata_file):
    argv = [
        "infer", "--metadata", str(metadata_file),
        "--no-multilanguage", "--include-layout", "--label", "Home", "--description", "Main page",
    ]
    assert main(argv) == 0
    template = json.loads(capsys.readouterr().out)
    assert template["multilanguage"] is False
    assert template["label"] == "Home"
    assert template["description"] == "Main page"
    assert template["components"][-1]["keyName"] == "footer"


def test_infer_with_separate_hints(capsys, tmp_path, metadata_file):
    hints = tmp_path / "hints.json"
    hints.write_text(json.dumps({
        "hero": {"detectedFields": ["title"], "identifiedFieldTypes": ["texteditor"]},
    }))
    assert main(["infer", "--metadata", str(metadata_file), "--hints", str(hints)]) == 0
    template = json.loads(capsys.readouterr().out)
    hero = template["components"][0]
    assert [(f["name"], f["field"]) for f in hero["fields"]] == [("title", "texteditor")]


def test_infer_save(tmp_path, metadata_file):
    out = tmp_path / "saved"
    argv = ["infer", "--metadata", str(metadata_file), "--name", "landing", "--save", "--output-dir", str(out)]
    assert main(argv) == 0
    assert (out / "landing.template.json").is_file()
    assert (out / "landing.analysis.json").is_file()


def test_infer_missing_metadata(capsys, tmp_path):
    assert main(["infer", "--metadata", str(tmp_path / "missing.json")]) == 1
    assert "✗" in capsys.readouterr().err


def test_infer_malformed_sections(capsys, tmp_path):
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps({"sections": ["hero"]}))
    assert main(["infer", "--metadata", str(path)]) == 1


def test_infer_requires_metadata():
    with pytest.raises(SystemExit) as exc:
        main(["infer"])
    assert exc.value.code == 2


def test_validate_valid(capsys, tmp_path, metadata_file):
    main(["infer", "--metadata", str(metadata_file), "--name", "landing", "--save",
          "--output-dir", str(tmp_path)])
    capsys.readouterr()
    assert main(["validate", str(tmp_path / "landing.template.json")]) == 0
    assert json.loads(capsys.readouterr().out)["valid"] is True


def test_validate_invalid(capsys, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"name": "broken"}))
    assert main(["validate", str(path)]) == 1
    result = json.loads(capsys.readouterr().out)
    assert "Missing required key: components" in result["errors"]


def test_field(capsys):
    argv = ["field", "heroTitle", "--type", "input", "--label", "Hero Title", "--multilanguage"]
    assert main(argv) == 0
    field = json.loads(capsys.readouterr().out)
    assert field == {
        "name": "hero_title",
        "label": "Hero Title",
        "field": "input",
        "multilanguage": True,
        "attribute": {"type": "text"},
    }


def test_field_attributes(capsys):
    argv = ["field", "gallery", "--type", "repeater", "--attributes", '{"max": 6, "rows": 2}']
    assert main(argv) == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out)["attribute"] == {"fields": [], "max": 6}
    assert "Attribute 'rows' is not allowed for 'repeater'" in captured.err


def test_field_uses_configured_api_prefix(capsys, monkeypatch, config):
    from dataclasses import replace

    configured = replace(config, inference=replace(config.inference, api_prefix="/api/v2/"))
    monkeypatch.setattr(cli, "get_config", lambda: configured)
    assert main(["field", "news", "--type", "post_related"]) == 0
    assert json.loads(capsys.readouterr().out)["attribute"] == {"api_prefix": "/api/v2/"}


def test_field_invalid_attributes(capsys):
    assert main(["field", "title", "--type", "input", "--attributes", "{not json"]) == 1
    assert "✗" in capsys.readouterr().err


def test_field_unknown_type():
    with pytest.raises(SystemExit) as exc:
        main(["field", "slides", "--type", "carousel"])
    assert exc.value.code == 2
