"""
Centralized JSON Schema Loading Module.

This module is responsible for loading JSON schema files from disk and
handing them out to validators throughout the application.

Design Principles:
    1. Load Once: A schema is read the first time it is asked for and then
       kept for the life of the process. It is never reloaded.
    2. Lazy: Importing this module does no file I/O, so code that never
       validates a pass never pays for parsing the schema.
    3. Clear Errors: File location and parse errors are clearly reported.
    4. Single Source: All schema access goes through this module.

File Location:
    Schemas are expected to be in the same directory as this module
    (src/schema/). The path is resolved using __file__ to ensure
    it works regardless of the current working directory.

Error Handling:
    - FileNotFoundError: Schema file doesn't exist at expected path
    - json.JSONDecodeError: Schema file contains invalid JSON syntax
"""
import json
import threading
from pathlib import Path
from typing import Dict, Any

# Locate schema directory
SCHEMA_DIR = Path(__file__).parent

PKPASS_SCHEMA_FILENAME = "pkpass.schema.json"

_loaded_schemas: Dict[str, Dict[str, Any]] = {}
_load_lock = threading.Lock()


def _load_schema(schema_filename: str) -> Dict[str, Any]:
    """
    Load a JSON schema file from the schema directory.

    Args:
        schema_filename: Name of the JSON schema file (e.g., "pkpass.schema.json")

    Returns:
        Parsed JSON schema as a dictionary, ready for use with jsonschema library

    Raises:
        FileNotFoundError: If the schema file doesn't exist at the expected location.
        json.JSONDecodeError: If the schema file exists but contains invalid JSON.

    Example:
        >>> schema = _load_schema("pkpass.schema.json")
        >>> schema["$schema"]
        'http://json-schema.org/draft-07/schema#'
    """
    schema_path = SCHEMA_DIR / schema_filename

    # Check first for a more helpful error message than open() gives
    if not schema_path.exists():
        raise FileNotFoundError(
            f"Schema file not found: {schema_path}. "
            f"Expected location: {SCHEMA_DIR}"
        )

    try:
        with open(schema_path, "r") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        # Re-raise with the file name; keep the original position
        raise json.JSONDecodeError(
            f"Invalid JSON in schema file {schema_filename}: {e.msg}",
            e.doc,
            e.pos
        ) from e


def get_schema(schema_filename: str) -> Dict[str, Any]:
    """
    Return a schema, loading it on first use.

    Concurrent first calls are serialized so the file is parsed at most once.
    Callers must treat the returned dictionary as read-only.
    """
    schema = _loaded_schemas.get(schema_filename)
    if schema is not None:
        return schema

    with _load_lock:
        if schema_filename not in _loaded_schemas:
            _loaded_schemas[schema_filename] = _load_schema(schema_filename)
        return _loaded_schemas[schema_filename]


def get_pkpass_schema() -> Dict[str, Any]:
    """
    Get the Apple Wallet pass JSON schema.

    Returns:
        pass.json JSON schema (Draft 7) as a dictionary containing:
        - required top-level keys (formatVersion, organizationName, ...)
        - one property per pass style with its field groups
        - enumerations for barcode formats, date/number styles, alignments

    Example:
        >>> schema = get_pkpass_schema()
        >>> "organizationName" in schema["required"]
        True
    """
    return get_schema(PKPASS_SCHEMA_FILENAME)
