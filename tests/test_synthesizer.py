# ==============================================
# Tests for FieldSynthesizer
# ==============================================
#
# Per-archetype output, hint-driven output, name uniqueness,
# multilanguage flags and idempotence.
# ==============================================

import json

import pytest

from template_infer.analysis import AnalysisHint, ConfidenceLabel, FieldType, SectionResolver
from template_infer.structure import analyze
from template_infer.synthesis import FieldSynthesizer


def run(section_name, raw, hint=None, multilanguage=True):
    tree = analyze(raw)
    analysis = SectionResolver().resolve(section_name, tree, hint)
    return FieldSynthesizer().synthesize_with_warnings(analysis, tree, hint, multilanguage)


def shape(fields):
    return [(spec.name, spec.type) for spec in fields]


# ==============================================
# Scenario Tests
# ==============================================

class TestScenarios:

    def test_logo_cards_become_one_repeater(self, clients_section):
        result = run("clients", clients_section)
        assert len(result.fields) == 1
        repeater = result.fields[0]
        assert repeater.name == "companies"
        assert repeater.type is FieldType.REPEATER
        assert repeater.attributes == {"min": 1, "max": 2}
        assert shape(repeater.children) == [("name", FieldType.TEXT), ("logo", FieldType.MEDIA)]

    def test_contact_details_are_typed_by_name(self, contact_section):
        result = run("contact", contact_section)
        assert shape(result.fields) == [
            ("email", FieldType.TEXT),
            ("phone", FieldType.TEXT),
            ("address", FieldType.LONG_TEXT),
        ]
        assert result.fields[0].attributes == {"type": "email"}
        assert result.fields[1].attributes == {"type": "tel"}

    def test_project_listing_is_one_reference(self, projects_section):
        result = run("projects", projects_section)
        assert len(result.fields) == 1
        ref = result.fields[0]
        assert ref.type is FieldType.EXTERNAL_COLLECTION_REF
        assert ref.name == "projects"
        assert ref.children == ()
        assert ref.attributes == {"source_prefix": "/api/v1/projects"}

    def test_repeater_hint_on_scalar(self):
        hint = AnalysisHint("logos", ("logo (repeater, max 3)",), ("repeater",))
        result = run("logos", "logo.png", hint)
        assert len(result.fields) == 1
        repeater = result.fields[0]
        assert repeater.type is FieldType.REPEATER
        assert repeater.children == ()
        assert repeater.attributes == {"min": 1, "max": 3}
        assert any("Malformed-shape hint" in warning for warning in result.warnings)


# ==============================================
# Archetype Tests
# ==============================================

class TestArchetypeOutput:

    def test_form(self, form_section):
        result = run("contact_form", form_section)
        assert [spec.name for spec in result.fields] == ["form_fields", "submit_button"]
        form_fields = result.fields[0]
        assert form_fields.type is FieldType.REPEATER
        assert shape(form_fields.children) == [
            ("field_type", FieldType.CHOICE),
            ("label", FieldType.TEXT),
            ("placeholder", FieldType.TEXT),
            ("required", FieldType.BOOLEAN),
        ]
        options = form_fields.children[0].attributes["options"]
        assert [option["value"] for option in options] == ["email", "text", "textarea"]
        assert form_fields.attributes["max"] == 3

    def test_gallery(self, gallery_section):
        result = run("showcase", gallery_section)
        assert len(result.fields) == 1
        gallery = result.fields[0]
        assert gallery.name == "photos"
        assert gallery.attributes == {"min": 1, "max": 3}
        assert shape(gallery.children) == [
            ("image", FieldType.MEDIA),
            ("caption", FieldType.TEXT),
            ("alt_text", FieldType.TEXT),
        ]
        assert gallery.children[0].attributes == {"accept": ["image"]}

    def test_nested_group(self, company_info_section):
        result = run("company_info", company_info_section)
        assert shape(result.fields) == [("company_info", FieldType.GROUP)]
        assert [child.name for child in result.fields[0].children] == ["name", "founded", "logo"]

    def test_single_fields_recurse(self, hero_section):
        result = run("hero", dict(hero_section, settings={"is_visible": True}))
        assert shape(result.fields) == [
            ("title", FieldType.TEXT),
            ("subtitle", FieldType.LONG_TEXT),
            ("cta_button", FieldType.TEXT),
            ("background_image", FieldType.MEDIA),
            ("settings", FieldType.GROUP),
        ]
        toggle = result.fields[-1].children[0]
        assert toggle.type is FieldType.BOOLEAN
        assert toggle.attributes == {"default_value": True}

    def test_scalar_array_gets_singular_child(self):
        result = run("hero", {"title": "x", "tags": ["a", "b"]})
        tags = result.fields[1]
        assert tags.type is FieldType.REPEATER
        assert [child.name for child in tags.children] == ["tag"]

    def test_differing_item_shapes_become_optional(self):
        raw = {"team_members": [
            {"name": "A", "role": "CEO"},
            {"name": "B", "photo": "b.jpg"},
        ]}
        result = run("hero", raw)
        members = result.fields[0]
        assert [child.name for child in members.children] == ["name", "role", "photo"]
        assert all(child.attributes["is_required"] is False for child in members.children)
        assert members.children[2].type is FieldType.MEDIA

    def test_empty_nested_values_are_skipped(self):
        result = run("hero", {"title": "Hi", "items": [], "meta": {}})
        assert [spec.name for spec in result.fields] == ["title"]
        assert len(result.warnings) == 2

    def test_empty_section_has_no_fields(self):
        assert run("hero", {}).fields == ()

    def test_relationship_and_table_defaults(self):
        hint = AnalysisHint(
            "pricing",
            ("related_posts", "plans"),
            ("relationship", "table"),
        )
        result = run("pricing", {"plans": [{"name": "Basic", "price": "9"}]}, hint)
        related, plans = result.fields
        assert related.attributes["filter"] == {"post_type": ["post"], "post_status": "publish"}
        assert plans.type is FieldType.TABLE
        assert [child.name for child in plans.children] == ["name", "price"]


# ==============================================
# Hint-driven Tests
# ==============================================

class TestHintDriven:

    def test_only_hinted_fields_in_hint_order(self, hero_section):
        hint = AnalysisHint("hero", ("subtitle", "title"), ("texteditor", "input"))
        result = run("hero", hero_section, hint)
        assert shape(result.fields) == [
            ("subtitle", FieldType.RICH_TEXT),
            ("title", FieldType.TEXT),
        ]

    def test_group_marker_uses_raw_object(self):
        hint = AnalysisHint("contact", ("info (group)",), ("group",))
        result = run("contact", {"info": {"phone": "1", "email": "a@b.com"}}, hint)
        group = result.fields[0]
        assert group.type is FieldType.GROUP
        assert [child.name for child in group.children] == ["phone", "email"]

    def test_repeater_marker_matches_plural_key(self, clients_section):
        hint = AnalysisHint("clients", ("company (repeater)",), ("repeater",))
        result = run("clients", clients_section, hint)
        repeater = result.fields[0]
        assert repeater.name == "company"
        assert repeater.attributes["max"] == 2
        assert [child.name for child in repeater.children] == ["name", "logo"]

    def test_unnamed_raw_keys_are_reported(self):
        hint = AnalysisHint("hero", ("title",), ("input",))
        result = run("hero", {"title": "x", "subtitle": "y", "image": "a.png", "badge": None}, hint)
        assert shape(result.fields) == [("title", FieldType.TEXT)]
        assert result.warnings == (
            "Hint for section 'hero' does not name raw keys: subtitle, image; not synthesized",
        )

    def test_fully_named_hint_has_no_warning(self, clients_section):
        hint = AnalysisHint("clients", ("company (repeater)",), ("repeater",))
        assert run("clients", clients_section, hint).warnings == ()

    def test_post_related_marker(self):
        hint = AnalysisHint("stories", ("our_stories (post_related)",), ("input",))
        result = run("stories", {}, hint)
        assert result.fields[0].type is FieldType.EXTERNAL_COLLECTION_REF
        assert result.fields[0].attributes == {"source_prefix": "/api/v1/our-stories"}

    def test_unknown_type_is_text_with_warning(self):
        hint = AnalysisHint("hero", ("title",), ("widget",))
        result = run("hero", {"title": "x"}, hint)
        assert shape(result.fields) == [("title", FieldType.TEXT)]
        assert any("UnknownFieldTypeError" in warning for warning in result.warnings)

    def test_low_confidence_hint_falls_back_to_heuristics(self, contact_section):
        hint = AnalysisHint(
            "contact", ("email",), ("texteditor",), confidence=ConfidenceLabel.MEDIUM
        )
        result = run("contact", contact_section, hint)
        assert len(result.fields) == 3
        assert result.fields[0].type is FieldType.TEXT


# ==============================================
# Output shape Tests
# ==============================================

class TestOutputShape:

    def test_sibling_names_are_unique(self):
        result = run("hero", {"Title": "a", "title": "b", "TITLE": "c"})
        assert [spec.name for spec in result.fields] == ["title", "title_2", "title_3"]

    def test_children_present_only_for_composites(self, landing_page):
        for name, raw in landing_page.items():
            for top in run(name, raw).fields:
                for spec in top.walk():
                    assert bool(spec.children) == spec.type.is_composite

    def test_multilanguage_follows_flag(self, contact_section):
        enabled = run("contact", contact_section).fields
        disabled = run("contact", contact_section, multilanguage=False).fields
        assert all(spec.multilanguage for spec in enabled)
        assert not any(spec.multilanguage for spec in disabled)

    def test_media_is_never_multilanguage(self, hero_section):
        fields = run("hero", hero_section).fields
        assert fields[-1].type is FieldType.MEDIA
        assert fields[-1].multilanguage is False

    @pytest.mark.parametrize("section", ["hero", "clients", "projects", "contact"])
    def test_idempotent(self, landing_page, section):
        first = [spec.to_dict() for spec in run(section, landing_page[section]).fields]
        second = [spec.to_dict() for spec in run(section, landing_page[section]).fields]
        assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)
