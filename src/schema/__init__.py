"""Schema Package - JSON Schema Loading.

This package provides centralized loading and access to the JSON schemas
used to validate documents before they leave the process.

Schemas are loaded lazily on first access and cached for the life of the
process; they are never reloaded.

Available Schemas:
    pkpass.schema.json: Apple Wallet pass.json contract (Draft 7).
        Validates the payload built by wallet.PKPass before it is sent
        to the Netflex signing service.

Usage:
    from schema import get_pkpass_schema
    schema = get_pkpass_schema()
"""
from .schema import get_pkpass_schema, get_schema

__all__ = ["get_pkpass_schema", "get_schema"]
