# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to run the pipeline.
#   This is how users interact with the system.
#
# COMMANDS:
# ---------
# 1. Infer a template from extracted design metadata:
#    template-infer infer --metadata design.json --name landing_page
#    template-infer infer --metadata https://host/meta.json --hints hints.json --save
#
# 2. Validate an existing template document:
#    template-infer validate output/landing_page.template.json
#
# 3. List supported AntiCMS field types:
#    template-infer field-types
#
# 4. Generate one custom field:
#    template-infer field hero_title --type input --label "Hero Title" --multilanguage
#    template-infer field gallery --type repeater --attributes '{"max": 6}'
#
# EXIT CODES:
# -----------
#   0 → success          1 → invalid template / inference error
#   2 → usage error (argparse)
#
# ==============================================

import argparse
import json
import sys
from dataclasses import replace
from typing import List, Optional

from template_infer.config import get_config
from template_infer.errors import MalformedInputError, TemplateInferenceError
from template_infer.infer_template import InferTemplate
from template_infer.template import (
    FIELD_TYPES,
    generate_custom_field,
    list_field_types,
    load_document,
    split_document,
    unsupported_attributes,
    validate_template,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="template-infer",
        description="Infer AntiCMS v3 templates from extracted design metadata.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    infer_parser = subparsers.add_parser(
        "infer",
        help="Infer a template from a metadata document.",
    )
    infer_parser.add_argument(
        "--metadata",
        required=True,
        help="Path or http(s) URL of the metadata document.",
    )
    infer_parser.add_argument(
        "--hints",
        help="Path or URL of a separate hint document (overrides embedded hints).",
    )
    infer_parser.add_argument("--name", default="template", help="Template name.")
    infer_parser.add_argument("--label", help="Template label (derived from --name if omitted).")
    infer_parser.add_argument("--description", help="Template description.")
    infer_parser.add_argument(
        "--no-multilanguage",
        action="store_true",
        help="Mark every field as single-language.",
    )
    infer_parser.add_argument(
        "--include-layout",
        action="store_true",
        help="Keep navigation/header/footer sections.",
    )
    infer_parser.add_argument("--output-dir", help="Where --save writes files.")
    infer_parser.add_argument(
        "--save",
        action="store_true",
        help="Write the template and analysis report instead of printing the template.",
    )
    infer_parser.add_argument(
        "--report",
        action="store_true",
        help="Print the full analysis report instead of the template only.",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate an AntiCMS v3 template document.",
    )
    validate_parser.add_argument("path", help="Path or URL of the template document.")

    subparsers.add_parser(
        "field-types",
        help="List supported AntiCMS field types.",
    )

    field_parser = subparsers.add_parser(
        "field",
        help="Generate a single AntiCMS field definition.",
    )
    field_parser.add_argument("name", help="Field identifier (normalized to snake_case).")
    field_parser.add_argument(
        "--type",
        dest="field_type",
        required=True,
        choices=list(FIELD_TYPES),
        help="AntiCMS field type.",
    )
    field_parser.add_argument("--label", help="Field label (derived from the name if omitted).")
    field_parser.add_argument(
        "--multilanguage",
        action="store_true",
        help="Enable multilanguage support for the field.",
    )
    field_parser.add_argument(
        "--attributes",
        help="Field attributes as a JSON object.",
    )

    return parser


def _run_infer(args: argparse.Namespace) -> int:
    config = get_config()
    if args.output_dir:
        config = replace(config, output_dir=args.output_dir)
    if args.include_layout:
        config = replace(config, inference=replace(config.inference, exclude_layout_sections=False))

    timeout = config.http_timeout_seconds
    document = load_document(args.metadata, timeout=timeout)
    hints = load_document(args.hints, timeout=timeout) if args.hints else None
    sections, hints = split_document(document, hints)
    print(f"✓ Loaded {len(sections)} sections from {args.metadata}", file=sys.stderr)

    pipeline = InferTemplate(config)
    result = pipeline.infer(
        sections,
        hints,
        name=args.name,
        label=args.label,
        multilanguage=False if args.no_multilanguage else None,
        description=args.description,
    )

    for warning in result.all_warnings:
        print(f"⚠ {warning}", file=sys.stderr)
    for error in result.validation.errors:
        print(f"✗ {error}", file=sys.stderr)

    if args.save:
        pipeline.save(result)
    else:
        payload = result.to_dict() if args.report else result.template
        print(json.dumps(payload, indent=2))

    return 0 if result.validation.valid else 1


def _run_validate(args: argparse.Namespace) -> int:
    template = load_document(args.path, timeout=get_config().http_timeout_seconds)
    result = validate_template(template)
    print(json.dumps(result.to_dict(), indent=2))
    if result.valid:
        print(f"✓ Template validation PASSED ({len(result.warnings)} warnings)", file=sys.stderr)
        return 0
    print(f"✗ Template validation FAILED ({len(result.errors)} errors)", file=sys.stderr)
    return 1


def _run_field_types(args: argparse.Namespace) -> int:
    print(json.dumps(list_field_types(), indent=2))
    return 0


def _run_field(args: argparse.Namespace) -> int:
    attributes = {}
    if args.attributes:
        try:
            attributes = json.loads(args.attributes)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Invalid --attributes JSON: {e.msg}")
        if not isinstance(attributes, dict):
            raise MalformedInputError("--attributes must be a JSON object")

    for key in unsupported_attributes(args.field_type, attributes):
        print(f"⚠ Attribute '{key}' is not allowed for '{args.field_type}'; dropped", file=sys.stderr)

    field = generate_custom_field(
        args.name,
        args.field_type,
        label=args.label,
        multilanguage=args.multilanguage,
        attributes=attributes,
        api_prefix=get_config().inference.api_prefix,
    )
    print(json.dumps(field, indent=2))
    return 0


COMMANDS = {
    "infer": _run_infer,
    "validate": _run_validate,
    "field-types": _run_field_types,
    "field": _run_field,
}


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint for template-infer commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        return COMMANDS[args.command](args)
    except TemplateInferenceError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
