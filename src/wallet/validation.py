"""
Pass Payload Schema Validation.

Validates pass payloads against the pass.json JSON Schema before they are
sent for signing, so malformed passes fail locally with a readable message
instead of as an opaque error from the signing service.

Validation is lenient about scalar types: a value that can be coerced to
the type the schema declares is accepted ("42" is a valid integer, 3 is a
valid string). Only the first violation is raised; collect_violations()
returns all of them for diagnostics.
"""
import json
import logging
import math
import re
from typing import Any, Dict, List

from jsonschema import Draft7Validator, ValidationError
from jsonschema.validators import extend

from schema import get_pkpass_schema

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


class PassSchemaError(TypeError):
    """Raised when a pass payload violates the pass.json schema.

    Attributes:
        path: Property path of the offending value (e.g., "barcodes[0].format")
        message: Validator message for the violated constraint

    Example:
        >>> PKPass.generic().validate()
        PassSchemaError: [organizationName] 'organizationName' is a required property
    """

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"[{path}] {message}")


def _matches(value: Any, type_name: str) -> bool:
    if type_name == "string":
        return isinstance(value, str)
    if type_name == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if type_name == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if type_name == "boolean":
        return isinstance(value, bool)
    return True


def _coerce_to(value: Any, type_name: str) -> Any:
    """Convert a scalar to type_name, or return None when it does not convert."""
    if type_name == "string" and isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if type_name in ("integer", "number") and isinstance(value, str) and _INTEGER_PATTERN.match(value):
        return int(value)
    if type_name == "integer" and isinstance(value, float) and value.is_integer():
        return int(value)
    if type_name == "number" and isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    if type_name == "boolean" and value in ("true", "false"):
        return value == "true"
    return None


def coerce(value: Any, declared: Any) -> Any:
    """Coerce a scalar to the schema-declared type(s) when it is not one already."""
    types = [declared] if isinstance(declared, str) else list(declared)
    if any(_matches(value, type_name) for type_name in types):
        return value

    for type_name in types:
        coerced = _coerce_to(value, type_name)
        if coerced is not None:
            return coerced
    return value


def _coercing_properties(validator, properties, instance, schema):
    if isinstance(instance, dict):
        for name, subschema in properties.items():
            if name in instance and isinstance(subschema, dict) and "type" in subschema:
                instance[name] = coerce(instance[name], subschema["type"])
    yield from Draft7Validator.VALIDATORS["properties"](validator, properties, instance, schema)


def _coercing_items(validator, items, instance, schema):
    if isinstance(instance, list) and isinstance(items, dict) and "type" in items:
        instance[:] = [coerce(item, items["type"]) for item in instance]
    yield from Draft7Validator.VALIDATORS["items"](validator, items, instance, schema)


# Draft 7 validator that converts scalars to their declared types in place
# before checking them, so "42" satisfies {"type": "integer"}
CoercingValidator = extend(
    Draft7Validator,
    validators={
        "properties": _coercing_properties,
        "items": _coercing_items,
    },
)


def _property_path(error: ValidationError) -> str:
    parts = list(error.absolute_path)

    # Point required-property errors at the missing property itself
    if error.validator == "required" and isinstance(error.instance, dict):
        for name in error.validator_value:
            if name not in error.instance and repr(name) in error.message:
                parts.append(name)
                break

    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _as_json(payload: Dict[str, Any]) -> Any:
    # Round-trip so only plain JSON types reach the validator
    return json.loads(json.dumps(payload))


def _validator() -> CoercingValidator:
    return CoercingValidator(get_pkpass_schema())


def collect_violations(payload: Dict[str, Any]) -> List[str]:
    """Return every schema violation in a payload as "[path] message" strings."""
    return [
        f"[{_property_path(error)}] {error.message}"
        for error in _validator().iter_errors(_as_json(payload))
    ]


def validate_payload(payload: Dict[str, Any]) -> bool:
    """Validate a pass payload against the pass.json schema.

    Args:
        payload: Pass payload as produced by PKPass.to_payload()

    Returns:
        True when the payload is valid

    Raises:
        PassSchemaError: For the first violation found. Further violations
            are not reported.
    """
    for error in _validator().iter_errors(_as_json(payload)):
        exc = PassSchemaError(_property_path(error), error.message)
        logger.error(f"Pass schema validation failed: {exc}")
        raise exc
    return True
