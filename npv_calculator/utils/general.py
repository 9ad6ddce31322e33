"""JSON rendering of response bodies."""

from __future__ import annotations

from decimal import Decimal
from typing import Union

from pydantic import BaseModel

__all__ = ["JsonSafeType", "convert_to_json_safe"]

JsonSafeType = Union[None, str, int, bool, float, dict[str, "JsonSafeType"], list["JsonSafeType"]]


def convert_to_json_safe(data: object) -> JsonSafeType:
    """Render a response body with only JSON-native values.

    ``Decimal`` amounts become ``float``; NaN and infinities become ``None``.
    Pydantic models are rendered through ``model_dump()``.

    Raises:
        TypeError: For any other value type.
    """
    if data is None or isinstance(data, (str, bool, int)):
        return data

    if isinstance(data, Decimal):
        return float(data) if data.is_finite() else None

    if isinstance(data, dict):
        return {key: convert_to_json_safe(value) for key, value in data.items()}

    if isinstance(data, list):
        return [convert_to_json_safe(item) for item in data]

    if isinstance(data, BaseModel):
        return convert_to_json_safe(data.model_dump())

    raise TypeError(f"Cannot render {type(data).__name__} as JSON")
