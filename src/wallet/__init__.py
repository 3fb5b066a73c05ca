"""Wallet Package - Apple Wallet Pass Builder.

Builds Apple Wallet passes, validates them against the pass.json schema
and has them signed by the Netflex wallet service.

Key Components:
    PKPass: Fluent pass builder (fields, images, localization, signing)
    PassType: The five pass styles
    Placement: The five field groups
    PKPassRepresentable: Interface for objects that render a pass
    PassSigningClient: Submits passes to the signing endpoint

Usage:
    >>> from wallet import PKPass
    >>> pkpass = (PKPass.store_card()
    ...     .organization_name("Apility")
    ...     .description("Membership card")
    ...     .add_primary_field("points", 1200, "Points"))
    >>> pkpass.validate()
    True
    >>> response = pkpass.download("membership.pkpass")  # return it from a Flask view

Errors:
    PassTypeError: Attribute not supported by the pass type
    PassSchemaError: Payload violates the pass.json schema
"""
from .contracts import PKPassRepresentable
from .fields import Placement
from .pkpass import PassType, PassTypeError, PKPass
from .submission import PKPASS_MIME_TYPE, PassSigningClient
from .validation import PassSchemaError, collect_violations, validate_payload

__all__ = [
    "PKPass",
    "PassType",
    "Placement",
    "PassTypeError",
    "PassSchemaError",
    "PKPassRepresentable",
    "PassSigningClient",
    "PKPASS_MIME_TYPE",
    "collect_violations",
    "validate_payload",
]
