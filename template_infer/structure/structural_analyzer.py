import json
import math
from typing import Any

from template_infer.errors import MalformedInputError
from .raw_value import RawValue


class StructuralAnalyzer:
    """
    Classifies any JSON value as Array / Object / Scalar and recurses
    into its children, producing an immutable RawValue tree.

    Total over JSON values: lists and tuples become arrays, dicts become
    objects, str/int/float/bool/None become scalars. Anything that JSON
    cannot represent raises MalformedInputError with the offending path.
    """

    SCALAR_TYPES = (str, int, float, bool)

    @classmethod
    def analyze(cls, raw: Any, path: str = "$") -> RawValue:
        if raw is None:
            return RawValue.scalar(None)

        if isinstance(raw, bool):
            return RawValue.scalar(raw)

        if isinstance(raw, float):
            # NaN / Infinity are accepted by json.loads but are not JSON
            if math.isnan(raw) or math.isinf(raw):
                raise MalformedInputError(f"Non-finite number {raw!r}", path)
            return RawValue.scalar(raw)

        if isinstance(raw, cls.SCALAR_TYPES):
            return RawValue.scalar(raw)

        if isinstance(raw, (list, tuple)):
            return RawValue.array(
                cls.analyze(item, f"{path}[{index}]")
                for index, item in enumerate(raw)
            )

        if isinstance(raw, dict):
            entries = []
            for key, value in raw.items():
                if not isinstance(key, str):
                    raise MalformedInputError(f"Object key {key!r} is not a string", path)
                entries.append((key, cls.analyze(value, f"{path}.{key}")))
            return RawValue.object(entries)

        raise MalformedInputError(
            f"Value of type {type(raw).__name__} is not JSON-representable", path
        )

    @classmethod
    def analyze_json(cls, text: str) -> RawValue:
        try:
            raw = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise MalformedInputError(f"Invalid JSON: {e}") from e
        return cls.analyze(raw)


def analyze(raw: Any) -> RawValue:
    """Analyze an already-decoded JSON value."""
    return StructuralAnalyzer.analyze(raw)


def analyze_json(text: str) -> RawValue:
    """Decode JSON text and analyze it."""
    return StructuralAnalyzer.analyze_json(text)
