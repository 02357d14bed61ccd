"""
Key-Value Store Domain Model

Stored values are JSON trees: str, int, float, bool, None, lists and
string-keyed dicts, nested arbitrarily (``pydantic.JsonValue``). Values are
validated when crossing the storage edge in either direction.
"""

from typing import Any

from pydantic import JsonValue, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from content_store.common.errors import ValidationError

_VALUE_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)


def encode_value(value: Any) -> JsonValue:
    """
    Validate a value before it is written.

    Raises:
        ValidationError: value is not representable as JSON
    """
    try:
        return _VALUE_ADAPTER.validate_python(value, strict=True)
    except PydanticValidationError as e:
        raise ValidationError(
            message="Value is not JSON-serializable",
            code="invalid_value",
            details={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
        ) from e


def decode_value(raw: Any) -> JsonValue:
    """Validate a value read back from the backend."""
    return _VALUE_ADAPTER.validate_python(raw)
