# ==============================================
# Integration Tests for InferTemplate
# ==============================================
#
# Whole-document runs through all four topics: structure, analysis,
# synthesis and template assembly, plus persistence and status.
# ==============================================

import json

import pytest

from template_infer.analysis import ArchetypeTag
from template_infer.errors import MalformedInputError


def component(template, key_name):
    for entry in template["components"]:
        if entry["keyName"] == key_name:
            return entry
    raise AssertionError(f"no component {key_name}")


class TestLandingPage:

    def test_archetypes(self, pipeline, landing_page):
        result = pipeline.infer(landing_page, name="landing")
        assert {name: a.winning_archetype for name, a in result.analyses.items()} == {
            "hero": ArchetypeTag.SINGLE_FIELDS,
            "clients": ArchetypeTag.REPEATER_COLLECTION,
            "projects": ArchetypeTag.EXTERNAL_COLLECTION_REF,
            "contact": ArchetypeTag.SINGLE_FIELDS,
        }

    def test_footer_is_skipped(self, pipeline, landing_page):
        result = pipeline.infer(landing_page, name="landing")
        assert result.skipped_sections == ["footer"]
        assert [c["keyName"] for c in result.template["components"]] == [
            "hero", "clients", "projects", "contact",
        ]
        assert [c["section"] for c in result.template["components"]] == ["1", "2", "3", "4"]

    def test_template_is_valid(self, pipeline, landing_page):
        result = pipeline.infer(landing_page, name="landing")
        assert result.validation.valid
        assert result.validation.errors == []

    def test_rendered_fields(self, pipeline, landing_page):
        template = pipeline.infer(landing_page, name="landing").template

        clients = component(template, "clients")["fields"]
        assert [(f["name"], f["field"]) for f in clients] == [("companies", "repeater")]
        assert [f["field"] for f in clients[0]["attribute"]["fields"]] == ["input", "media"]

        projects = component(template, "projects")["fields"]
        assert projects[0]["field"] == "post_related"
        assert projects[0]["attribute"] == {"api_prefix": "/api/v1/projects"}

        contact = component(template, "contact")["fields"]
        assert [f["field"] for f in contact] == ["input", "input", "textarea"]

    def test_template_defaults(self, pipeline, landing_page):
        template = pipeline.infer(landing_page, name="landing_page").template
        assert template["name"] == "landing_page"
        assert template["label"] == "Landing Page"
        assert template["description"] == "Template for Landing Page"
        assert template["multilanguage"] is True

    def test_flags_override_config(self, pipeline, hero_section):
        template = pipeline.infer(
            {"hero": hero_section}, multilanguage=False, is_content=True, is_multiple=True
        ).template
        assert template["multilanguage"] is False
        assert template["is_content"] is True
        assert template["is_multiple"] is True
        assert all(f.get("multilanguage") in (None, False) for f in component(template, "hero")["fields"])

    def test_include_layout(self, config, landing_page):
        from dataclasses import replace
        from template_infer.infer_template import InferTemplate

        config = replace(config, inference=replace(config.inference, exclude_layout_sections=False))
        result = InferTemplate(config).infer(landing_page)
        assert result.skipped_sections == []
        assert component(result.template, "footer")["section"] == "5"

    def test_empty_document(self, pipeline):
        result = pipeline.infer({})
        assert result.template["components"] == []
        assert result.validation.valid


class TestHints:

    def test_hint_overrides_typing(self, pipeline, hero_section):
        hints = {"Hero": {"detectedFields": ["title", "subtitle"], "identifiedFieldTypes": ["input", "texteditor"]}}
        result = pipeline.infer({"hero": hero_section}, hints)
        fields = component(result.template, "hero")["fields"]
        assert [(f["name"], f["field"]) for f in fields] == [("title", "input"), ("subtitle", "texteditor")]
        assert result.analyses["hero"].hint_applied

    def test_bad_hint_only_affects_its_section(self, pipeline, landing_page):
        hints = {"hero": {"detectedFields": ["a", "b"], "identifiedFieldTypes": ["input"]}}
        result = pipeline.infer(landing_page, hints)
        assert any("HintLengthMismatchError" in w for w in result.warnings["hero"])
        assert len(component(result.template, "hero")["fields"]) == 4
        assert "clients" not in result.warnings
        assert result.validation.valid

    def test_unknown_hint_type_is_reported(self, pipeline):
        hints = {"hero": {"detectedFields": ["slides"], "identifiedFieldTypes": ["carousel"]}}
        result = pipeline.infer({"hero": {"slides": "x"}}, hints)
        assert any("UnknownFieldTypeError" in w for w in result.all_warnings)
        assert component(result.template, "hero")["fields"][0]["field"] == "input"


class TestErrors:

    def test_sections_must_be_mapping(self, pipeline):
        with pytest.raises(MalformedInputError):
            pipeline.infer([{"title": "x"}])

    def test_non_json_value(self, pipeline):
        with pytest.raises(MalformedInputError) as exc:
            pipeline.infer({"hero": {"tags": {"a", "b"}}})
        assert exc.value.path.startswith("$.hero")

    def test_hints_must_be_mapping(self, pipeline):
        with pytest.raises(MalformedInputError):
            pipeline.infer({}, ["hero"])


class TestReportsAndState:

    def test_to_dict_is_json_serializable(self, pipeline, landing_page):
        report = pipeline.infer(landing_page, name="landing").to_dict()
        decoded = json.loads(json.dumps(report))
        assert decoded["sections"]["projects"]["analysis"]["winning_archetype"] == "externalCollectionRef"
        assert decoded["skipped_sections"] == ["footer"]

    def test_save(self, pipeline, landing_page, config):
        result = pipeline.infer(landing_page, name="landing")
        paths = pipeline.save(result)
        with open(paths["template"]) as f:
            assert json.load(f) == result.template
        with open(paths["analysis"]) as f:
            assert json.load(f)["template"] == "landing"
        assert paths["template"].startswith(config.output_dir)

    def test_status(self, pipeline, landing_page):
        assert pipeline.get_status()["runs"] == 0
        pipeline.infer(landing_page)
        status = pipeline.get_status()
        assert status["runs"] == 1
        assert status["sections_analyzed"] == 4
        assert status["last_run"] is not None
        assert status["api_prefix"] == "/api/v1/"

    def test_summary(self, pipeline, landing_page):
        assert pipeline.get_summary()["valid"] is None
        pipeline.infer(landing_page)
        summary = pipeline.get_summary()
        assert summary["archetypes"] == {
            "singleFields": 2, "repeaterCollection": 1, "externalCollectionRef": 1,
        }
        assert summary["field_types"]["media"] == 2
        assert summary["skipped_sections"] == ["footer"]
        assert summary["valid"] is True
