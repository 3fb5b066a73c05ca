"""
Pass Field Encoding.

Turns a (key, value, options) triple into a pass.json field dictionary.

Values are normalized first (datetimes to ISO-8601 Zulu strings, rich text
to its HTML string, other objects to str). Options are then run through a
table of per-option normalizers. An option that fails its check is left
out of the field instead of raising.

Example:
    >>> encode_field("gate", "A12", "Gate")
    {'key': 'gate', 'value': 'A12', 'label': 'Gate'}
    >>> encode_field("price", 99.5, {"currencyCode": "NOK", "dateStyle": "bogus"})
    {'key': 'price', 'value': 99.5, 'currencyCode': 'NOK'}
"""
import logging
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class Placement(str, Enum):
    """Display region of a field on the pass."""
    HEADER = "headerFields"
    PRIMARY = "primaryFields"
    SECONDARY = "secondaryFields"
    AUXILIARY = "auxiliaryFields"
    BACK = "backFields"


DATE_STYLE_NONE = "PKDateStyleNone"
DATE_STYLE_SHORT = "PKDateStyleShort"
DATE_STYLE_MEDIUM = "PKDateStyleMedium"
DATE_STYLE_LONG = "PKDateStyleLong"
DATE_STYLE_FULL = "PKDateStyleFull"

DATA_DETECTOR_PHONE_NUMBER = "PKDataDetectorTypePhoneNumber"
DATA_DETECTOR_LINK = "PKDataDetectorTypeLink"
DATA_DETECTOR_ADDRESS = "PKDataDetectorTypeAddress"
DATA_DETECTOR_CALENDAR_EVENT = "PKDataDetectorTypeCalendarEvent"

TEXT_ALIGNMENT_LEFT = "PKTextAlignmentLeft"
TEXT_ALIGNMENT_CENTER = "PKTextAlignmentCenter"
TEXT_ALIGNMENT_RIGHT = "PKTextAlignmentRight"

NUMBER_STYLE_DECIMAL = "PKNumberStyleDecimal"
NUMBER_STYLE_PERCENT = "PKNumberStylePercent"
NUMBER_STYLE_SCIENTIFIC = "PKNumberStyleScientific"
NUMBER_STYLE_SPELLOUT = "PKNumberStyleSpellOut"

DATE_STYLES = frozenset({
    DATE_STYLE_NONE, DATE_STYLE_SHORT, DATE_STYLE_MEDIUM, DATE_STYLE_LONG, DATE_STYLE_FULL,
})
DATA_DETECTOR_TYPES = frozenset({
    DATA_DETECTOR_PHONE_NUMBER, DATA_DETECTOR_LINK, DATA_DETECTOR_ADDRESS, DATA_DETECTOR_CALENDAR_EVENT,
})
TEXT_ALIGNMENTS = frozenset({TEXT_ALIGNMENT_LEFT, TEXT_ALIGNMENT_CENTER, TEXT_ALIGNMENT_RIGHT})
NUMBER_STYLES = frozenset({
    NUMBER_STYLE_DECIMAL, NUMBER_STYLE_PERCENT, NUMBER_STYLE_SCIENTIFIC, NUMBER_STYLE_SPELLOUT,
})

# Sentinel returned by a normalizer to drop the option
DROP = object()

_JSON_SCALARS = (str, int, float, bool, type(None))


def to_zulu(value: Union[datetime, date]) -> str:
    """Format a date or datetime as an ISO-8601 UTC string (2024-05-01T18:30:00Z).

    Naive datetimes are taken to be UTC already; plain dates are midnight UTC.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _stringify(value: Any) -> Any:
    """Convert rich text and arbitrary objects to strings, leave JSON data alone."""
    if hasattr(value, "__html__"):
        return str(value.__html__())
    if isinstance(value, _JSON_SCALARS) or isinstance(value, (list, tuple, set, frozenset, Mapping)):
        return value
    return str(value)


def normalize_value(value: Any) -> Any:
    """Normalize a field value to something pass.json can hold."""
    if isinstance(value, (datetime, date)):
        return to_zulu(value)
    return _stringify(value)


def is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _passthrough(option: Any, value: Any) -> Any:
    return option


def _as_bool(option: Any, value: Any) -> Any:
    return bool(option)


def _one_of(allowed: frozenset) -> Callable[[Any, Any], Any]:
    def check(option: Any, value: Any) -> Any:
        return option if isinstance(option, str) and option in allowed else DROP
    return check


def _data_detectors(option: Any, value: Any) -> Any:
    if not isinstance(option, (list, tuple, set, frozenset)):
        option = [option]
    return [detector for detector in option if isinstance(detector, str) and detector in DATA_DETECTOR_TYPES]


def _numeric_only(check: Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
    def wrapped(option: Any, value: Any) -> Any:
        return check(option, value) if is_numeric(value) else DROP
    return wrapped


def _mapping_only(option: Any, value: Any) -> Any:
    return option if isinstance(option, Mapping) else DROP


# Option name -> normalizer(option_value, field_value). Unlisted options are ignored.
OPTION_NORMALIZERS: Dict[str, Callable[[Any, Any], Any]] = {
    "label": _passthrough,
    "attributedValue": _passthrough,
    "changeMessage": _passthrough,
    "isRelative": _as_bool,
    "dateStyle": _one_of(DATE_STYLES),
    "timeStyle": _one_of(DATE_STYLES),
    "dataDetectorTypes": _data_detectors,
    "textAlignment": _one_of(TEXT_ALIGNMENTS),
    "currencyCode": _numeric_only(_passthrough),
    "numberStyle": _numeric_only(_one_of(NUMBER_STYLES)),
    "semantics": _mapping_only,
}


def encode_field(key: str, value: Any, options: Optional[Union[str, Mapping[str, Any]]] = None) -> Dict[str, Any]:
    """Build a field dictionary.

    Args:
        key: Field key, unique per pass by convention (not enforced)
        value: Field value; datetimes, rich text and objects are normalized
        options: A label string, or a mapping of field options

    Returns:
        Field dictionary with key, value and every option that passed validation
    """
    value = normalize_value(value)
    field: Dict[str, Any] = {"key": key, "value": value}

    if options is None:
        options = {}
    elif isinstance(options, str):
        options = {"label": options}

    for name, option in options.items():
        normalizer = OPTION_NORMALIZERS.get(name)
        if normalizer is None:
            continue

        result = normalizer(_stringify(option), value)
        if result is DROP:
            logger.debug(f"Dropping invalid option {name}={option!r} on field '{key}'")
            continue
        field[name] = result

    return field
