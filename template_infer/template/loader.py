# ==============================================
# Document Loader
# ==============================================
#
# PURPOSE:
#   Read an already-extracted metadata or hint document from a file
#   path or an http(s) URL and split it into its sections / hints.
#
# ACCEPTED SHAPES:
# ----------------
#   {"sections": {...}, "hints": {...}}   → combined document
#   {"sections": {...}}                   → sections only
#   {...}                                 → a bare section mapping
#
# FUNCTIONS:
# ----------
# - load_document(source, timeout=10.0) -> Any
#     Raises DocumentLoadError for missing files, HTTP failures and
#     invalid JSON.
#
# - split_document(document) -> (sections, hints)
#     Raises MalformedInputError when sections are not an object.
#
# ==============================================

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import requests

from template_infer.errors import DocumentLoadError, MalformedInputError


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_document(source: str, timeout: float = 10.0) -> Any:
    """
    Load a JSON document.

    Args:
        source: File path or http(s) URL
        timeout: HTTP timeout in seconds

    Returns:
        The parsed JSON value
    """
    if is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise DocumentLoadError(source, str(e)) from e
        except ValueError as e:
            raise DocumentLoadError(source, f"invalid JSON: {e}") from e

    path = Path(source)
    if not path.is_file():
        raise DocumentLoadError(source, "file not found")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DocumentLoadError(source, f"invalid JSON: {e}") from e
    except OSError as e:
        raise DocumentLoadError(source, str(e)) from e


def split_document(
    document: Any,
    hints: Optional[Any] = None
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Separate sections from hints.

    Args:
        document: Combined document or bare section mapping
        hints: Separately loaded hint document; wins over embedded hints

    Returns:
        (sections, hints) mappings
    """
    if not isinstance(document, dict):
        raise MalformedInputError("metadata document must be an object")

    if "sections" in document:
        sections = document["sections"]
        embedded_hints = document.get("hints") or {}
    else:
        sections = document
        embedded_hints = {}

    if not isinstance(sections, dict):
        raise MalformedInputError("sections must be an object", "$.sections")

    chosen_hints = hints if hints is not None else embedded_hints
    if isinstance(chosen_hints, dict) and "hints" in chosen_hints and isinstance(chosen_hints["hints"], dict):
        chosen_hints = chosen_hints["hints"]
    if not isinstance(chosen_hints, dict):
        raise MalformedInputError("hints must be an object", "$.hints")

    return sections, chosen_hints
