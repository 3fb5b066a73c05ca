"""
Apple Wallet Pass Builder.

PKPass assembles the contents of an Apple Wallet pass (pass.json, images
and localizations) and hands it to the Netflex signing service, which
returns the finished .pkpass archive.

Architecture:
    PKPass is a fluent builder: every setter mutates the pass and returns
    the same instance. A pass is built for a single submission and then
    thrown away.

        PKPass.event_ticket()
            .organization_name("Apility")
            .description("Concert ticket")
            .add_primary_field("event", "Summer Concert", "Event")
            .barcode("TICKET-0001")
            .add_icon("https://cdn.example.com/icon.png")
            .to_response()

Pass Types:
    generic, boardingPass, storeCard, eventTicket, coupon. The type is fixed
    at construction and decides where fields are placed in pass.json and
    which options are allowed: transitType is boarding-pass only,
    groupingIdentifier is boarding-pass and event-ticket only. Setting
    those on any other pass type raises PassTypeError.

Serialization:
    to_payload() returns pass.json: the top-level metadata plus one block
    named after the pass type holding the non-empty field groups. Images
    (files) and localized strings (i18n) are sent next to the payload, not
    inside it. A serial number is generated on each call when none is set.

Error Handling:
    - PassTypeError: type-gated attribute set on the wrong pass type
    - ValueError: web service token shorter than 16 characters
    - PassSchemaError: validate() found a schema violation
    - OSError: a local image file could not be read
    - requests exceptions: signing request failed
    Invalid field options (unknown date styles, alignments, ...) are
    dropped from the field instead of raising.
"""
import copy
import json
import logging
import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from flask import Response

from . import fields as field_options
from .contracts import PKPassRepresentable
from .fields import Placement, encode_field, to_zulu
from .files import encode_file, encode_localized_file
from .submission import PassSigningClient
from .validation import validate_payload

logger = logging.getLogger(__name__)


class PassType(str, Enum):
    GENERIC = "generic"
    BOARDING_PASS = "boardingPass"
    STORE_CARD = "storeCard"
    EVENT_TICKET = "eventTicket"
    COUPON = "coupon"


class PassTypeError(ValueError):
    """Raised when an attribute is not supported by the pass type."""


FieldOptions = Union[str, Mapping[str, Any], None]


class PKPass(PKPassRepresentable):
    """Builder for an Apple Wallet pass.

    Use one of the named constructors (generic, boarding_pass, store_card,
    event_ticket, coupon) rather than instantiating directly.

    Attributes:
        type: The pass type
        data: Top-level pass.json metadata (always holds formatVersion 1)
        fields: Field groups by placement, plus transitType for boarding passes
        files: Attached images in insertion order
        i18n: Localized strings by locale
    """

    FORMAT_QR = "PKBarcodeFormatQR"
    FORMAT_PDF417 = "PKBarcodeFormatPDF417"
    FORMAT_AZTEC = "PKBarcodeFormatAztec"
    FORMAT_CODE128 = "PKBarcodeFormatCode128"

    TRANSIT_TYPE_AIR = "PKTransitTypeAir"
    TRANSIT_TYPE_BOAT = "PKTransitTypeBoat"
    TRANSIT_TYPE_BUS = "PKTransitTypeBus"
    TRANSIT_TYPE_GENERIC = "PKTransitTypeGeneric"
    TRANSIT_TYPE_TRAIN = "PKTransitTypeTrain"

    TRANSIT_TYPES = frozenset({
        TRANSIT_TYPE_AIR, TRANSIT_TYPE_BOAT, TRANSIT_TYPE_BUS, TRANSIT_TYPE_GENERIC, TRANSIT_TYPE_TRAIN,
    })

    DATE_STYLE_NONE = field_options.DATE_STYLE_NONE
    DATE_STYLE_SHORT = field_options.DATE_STYLE_SHORT
    DATE_STYLE_MEDIUM = field_options.DATE_STYLE_MEDIUM
    DATE_STYLE_LONG = field_options.DATE_STYLE_LONG
    DATE_STYLE_FULL = field_options.DATE_STYLE_FULL

    DATA_DETECTOR_PHONE_NUMBER = field_options.DATA_DETECTOR_PHONE_NUMBER
    DATA_DETECTOR_LINK = field_options.DATA_DETECTOR_LINK
    DATA_DETECTOR_ADDRESS = field_options.DATA_DETECTOR_ADDRESS
    DATA_DETECTOR_CALENDAR_EVENT = field_options.DATA_DETECTOR_CALENDAR_EVENT

    TEXT_ALIGNMENT_LEFT = field_options.TEXT_ALIGNMENT_LEFT
    TEXT_ALIGNMENT_CENTER = field_options.TEXT_ALIGNMENT_CENTER
    TEXT_ALIGNMENT_RIGHT = field_options.TEXT_ALIGNMENT_RIGHT

    NUMBER_STYLE_DECIMAL = field_options.NUMBER_STYLE_DECIMAL
    NUMBER_STYLE_PERCENT = field_options.NUMBER_STYLE_PERCENT
    NUMBER_STYLE_SCIENTIFIC = field_options.NUMBER_STYLE_SCIENTIFIC
    NUMBER_STYLE_SPELLOUT = field_options.NUMBER_STYLE_SPELLOUT

    MIN_AUTHENTICATION_TOKEN_LENGTH = 16

    def __init__(
        self,
        pass_type: PassType = PassType.GENERIC,
        data: Optional[Mapping[str, Any]] = None,
        fields: Optional[Mapping[str, Any]] = None,
        signing_client: Optional[PassSigningClient] = None
    ):
        self.type = PassType(pass_type)
        self.data: Dict[str, Any] = {**copy.deepcopy(dict(data or {})), "formatVersion": 1}

        if fields is None:
            self.fields: Dict[str, Any] = {placement.value: [] for placement in Placement}
        else:
            self.fields = copy.deepcopy(dict(fields))

        self.files: List[Dict[str, str]] = []
        self.i18n: Dict[str, Dict[str, Any]] = {}
        self.signing_client = signing_client or PassSigningClient()

    # ------------------------------------------------------------------
    # Named constructors
    # ------------------------------------------------------------------

    @classmethod
    def boarding_pass(cls, data: Optional[Mapping[str, Any]] = None,
                      fields: Optional[Mapping[str, Any]] = None) -> "PKPass":
        return cls(PassType.BOARDING_PASS, data, fields)

    @classmethod
    def store_card(cls, data: Optional[Mapping[str, Any]] = None,
                   fields: Optional[Mapping[str, Any]] = None) -> "PKPass":
        return cls(PassType.STORE_CARD, data, fields)

    @classmethod
    def event_ticket(cls, data: Optional[Mapping[str, Any]] = None,
                     fields: Optional[Mapping[str, Any]] = None) -> "PKPass":
        return cls(PassType.EVENT_TICKET, data, fields)

    @classmethod
    def coupon(cls, data: Optional[Mapping[str, Any]] = None,
               fields: Optional[Mapping[str, Any]] = None) -> "PKPass":
        return cls(PassType.COUPON, data, fields)

    @classmethod
    def generic(cls) -> "PKPass":
        return cls(PassType.GENERIC)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def organization_name(self, organization_name: str) -> "PKPass":
        self.data["organizationName"] = organization_name
        return self

    def description(self, description: str) -> "PKPass":
        """Brief description of the pass, used by iOS accessibility technologies."""
        self.data["description"] = description
        return self

    def serial_number(self, serial_number: str) -> "PKPass":
        """Serial number that uniquely identifies the pass within its pass type."""
        self.data["serialNumber"] = serial_number
        return self

    def logo_text(self, logo_text: str) -> "PKPass":
        self.data["logoText"] = logo_text
        return self

    def foreground_color(self, color: str) -> "PKPass":
        self.data["foregroundColor"] = color
        return self

    def background_color(self, color: str) -> "PKPass":
        self.data["backgroundColor"] = color
        return self

    def label_color(self, color: str) -> "PKPass":
        self.data["labelColor"] = color
        return self

    def strip_color(self, color: str) -> "PKPass":
        self.data["stripColor"] = color
        return self

    def voided(self, voided: bool = True) -> "PKPass":
        self.data["voided"] = voided
        return self

    def sharing_prohibited(self, sharing_prohibited: bool = True) -> "PKPass":
        """Prevent the user from sharing the pass."""
        self.data["sharingProhibited"] = sharing_prohibited
        return self

    def expiration_date(self, value: Union[datetime, date, str]) -> "PKPass":
        if isinstance(value, (datetime, date)):
            value = to_zulu(value)
        self.data["expirationDate"] = value
        return self

    def relevant_date(self, value: Union[datetime, date, str]) -> "PKPass":
        if isinstance(value, (datetime, date)):
            value = to_zulu(value)
        self.data["relevantDate"] = value
        return self

    def max_distance(self, max_distance: int) -> "PKPass":
        """Maximum distance in meters from a relevant location at which the pass is suggested."""
        self.data["maxDistance"] = max_distance
        return self

    def app_launch_url(self, app_launch_url: str) -> "PKPass":
        """URL passed to the associated app when it is launched from the pass."""
        self.data["appLaunchURL"] = app_launch_url
        return self

    def associated_store_identifier(self, store_identifier: int) -> "PKPass":
        """Add an App Store identifier of an app associated with the pass."""
        self.data.setdefault("associatedStoreIdentifiers", []).append(store_identifier)
        return self

    def user_info(self, user_info: Any) -> "PKPass":
        """Custom data for companion apps. Not displayed to the user."""
        self.data["userInfo"] = user_info
        return self

    def web_service(self, web_service_url: str, authentication_token: str) -> "PKPass":
        """Register the web service that receives pass updates.

        Args:
            web_service_url: Base URL of the PassKit web service
            authentication_token: Shared secret, at least 16 characters

        Raises:
            ValueError: If the token is shorter than 16 characters
        """
        if len(authentication_token) < self.MIN_AUTHENTICATION_TOKEN_LENGTH:
            raise ValueError(
                f"Authentication token must be {self.MIN_AUTHENTICATION_TOKEN_LENGTH} characters or longer"
            )

        self.data["webServiceURL"] = web_service_url
        self.data["authenticationToken"] = authentication_token
        return self

    def grouping_identifier(self, grouping_identifier: str) -> "PKPass":
        """Identifier used to group related passes.

        Raises:
            PassTypeError: Unless this is a boarding pass or an event ticket
        """
        if self.type not in (PassType.BOARDING_PASS, PassType.EVENT_TICKET):
            raise PassTypeError("Grouping identifier is only supported for boarding passes and event tickets")

        self.data["groupingIdentifier"] = grouping_identifier
        return self

    def transit_type(self, transit_type: str) -> "PKPass":
        """Set the transit type of a boarding pass.

        Unknown transit types are ignored.

        Raises:
            PassTypeError: Unless this is a boarding pass
        """
        if self.type is not PassType.BOARDING_PASS:
            raise PassTypeError("This pass type does not support transit type")

        if transit_type in self.TRANSIT_TYPES:
            self.fields["transitType"] = transit_type
        else:
            logger.debug(f"Ignoring unknown transit type {transit_type!r}")
        return self

    # ------------------------------------------------------------------
    # Relevance, barcodes
    # ------------------------------------------------------------------

    def add_location(self, latitude: float, longitude: float,
                     relevant_text: Optional[str] = None) -> "PKPass":
        """Add a location near which the pass is suggested on the lock screen."""
        location: Dict[str, Any] = {"latitude": latitude, "longitude": longitude}
        if relevant_text:
            location["relevantText"] = relevant_text

        self.data.setdefault("locations", []).append(location)
        return self

    def add_beacon(self, proximity_uuid: str, major: Optional[int] = None,
                   minor: Optional[int] = None, relevant_text: Optional[str] = None) -> "PKPass":
        """Add a BLE beacon in whose range the pass is suggested.

        major and minor are omitted only when None; 0 is a valid value.
        """
        beacon: Dict[str, Any] = {"proximityUUID": proximity_uuid}
        if major is not None:
            beacon["major"] = major
        if minor is not None:
            beacon["minor"] = minor
        if relevant_text:
            beacon["relevantText"] = relevant_text

        self.data.setdefault("beacons", []).append(beacon)
        return self

    def barcode(self, message: str, alt_text: Optional[str] = None,
                format: str = FORMAT_QR) -> "PKPass":
        """Add a barcode. The alt text defaults to the message itself."""
        self.data.setdefault("barcodes", []).append({
            "format": format,
            "message": message,
            "altText": alt_text if alt_text is not None else message,
            "messageEncoding": "iso-8859-1",
        })
        return self

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def _add_field(self, key: str, value: Any, placement: Placement,
                   options: FieldOptions = None) -> "PKPass":
        field = encode_field(key, value, options)
        self.fields.setdefault(placement.value, []).append(field)
        return self

    def add_header_field(self, key: str, value: Any, options: FieldOptions = None) -> "PKPass":
        """Add a field to the header, visible when the pass is stacked.

        Args:
            key: Field key
            value: Field value (str, number, bool, datetime or rich text)
            options: A label string, or a mapping of field options
        """
        return self._add_field(key, value, Placement.HEADER, options)

    def add_primary_field(self, key: str, value: Any, options: FieldOptions = None) -> "PKPass":
        return self._add_field(key, value, Placement.PRIMARY, options)

    def add_secondary_field(self, key: str, value: Any, options: FieldOptions = None) -> "PKPass":
        return self._add_field(key, value, Placement.SECONDARY, options)

    def add_auxiliary_field(self, key: str, value: Any, options: FieldOptions = None) -> "PKPass":
        return self._add_field(key, value, Placement.AUXILIARY, options)

    def add_back_field(self, key: str, value: Any, options: FieldOptions = None) -> "PKPass":
        return self._add_field(key, value, Placement.BACK, options)

    # ------------------------------------------------------------------
    # Images and localization
    # ------------------------------------------------------------------

    def add_file(self, file: Any, name: Optional[str] = None) -> "PKPass":
        """Attach a file to the pass.

        Args:
            file: Bytes, upload, open file, Path, media object with url(), URL or local path
            name: File name inside the pass; derived from the input when omitted
        """
        self.files.append(encode_file(file, name))
        return self

    def add_localized_file(self, locale: str, file: Any, name: Optional[str] = None) -> "PKPass":
        """Attach a file to the pass for a single locale (e.g., "nb")."""
        self.files.append(encode_localized_file(locale, file, name))
        return self

    def _add_image(self, file: Any, name: str, locale: Optional[str]) -> "PKPass":
        if locale:
            return self.add_localized_file(locale, file, name)
        return self.add_file(file, name)

    def add_background(self, file: Any, locale: Optional[str] = None) -> "PKPass":
        return self._add_image(file, "background.png", locale)

    def add_thumbnail(self, file: Any, locale: Optional[str] = None) -> "PKPass":
        return self._add_image(file, "thumbnail.png", locale)

    def add_logo(self, file: Any, locale: Optional[str] = None) -> "PKPass":
        return self._add_image(file, "logo.png", locale)

    def add_strip(self, file: Any, locale: Optional[str] = None) -> "PKPass":
        return self._add_image(file, "strip.png", locale)

    def add_footer(self, file: Any, locale: Optional[str] = None) -> "PKPass":
        return self._add_image(file, "footer.png", locale)

    def add_icon(self, file: Any, locale: Optional[str] = None) -> "PKPass":
        return self._add_image(file, "icon.png", locale)

    def add_locale(self, locale: str, messages: Mapping[str, Any]) -> "PKPass":
        """Set the localized strings for a locale, replacing any set before."""
        self.i18n[locale] = dict(messages)
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def generate_serial_number(self) -> str:
        return str(uuid.uuid4())

    def to_payload(self) -> Dict[str, Any]:
        """Return the pass.json payload.

        Empty field groups are left out. A serial number is generated when
        none is set, so two calls on a pass without one differ.
        """
        payload = copy.deepcopy(self.data)

        structure: Dict[str, Any] = {}
        for name, group in self.fields.items():
            if not isinstance(group, list) or group:
                structure[name] = copy.deepcopy(group)
        payload[self.type.value] = structure

        if not payload.get("serialNumber"):
            payload["serialNumber"] = self.generate_serial_number()

        return payload

    def to_envelope(self) -> Dict[str, Any]:
        """Return the body sent to the signing service."""
        return {
            "data": self.to_payload(),
            "files": copy.deepcopy(self.files),
            "i18n": copy.deepcopy(self.i18n),
        }

    def to_json(self, **kwargs: Any) -> str:
        """Return the payload as a JSON string; kwargs go to json.dumps."""
        return json.dumps(self.to_payload(), **kwargs)

    def to_pkpass(self) -> "PKPass":
        return self

    def validate(self) -> bool:
        """Validate the payload against the pass.json schema.

        Returns:
            True when valid

        Raises:
            PassSchemaError: For the first violation found
        """
        return validate_payload(self.to_payload())

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def to_response(self, headers: Optional[Mapping[str, Any]] = None) -> Response:
        """Sign the pass and return it as a Flask response."""
        return self.signing_client.to_response(self, headers)

    def download(self, filename: Optional[str] = None) -> Response:
        """Sign the pass and return it as an attachment response."""
        disposition = "attachment"
        if filename:
            disposition += f'; filename="{filename}"'
        return self.to_response({"Content-Disposition": disposition})

    def blob(self) -> bytes:
        """Sign the pass and return the .pkpass bytes."""
        return self.signing_client.submit(self)
