"""
Pass Asset Encoding.

Images attached to a pass travel to the signing service as
{"name": ..., "path": ...} records. The path is either a remote URL the
service downloads itself, or a data: URI with the file embedded as base64.

Accepted inputs, in order of precedence:
    RAW_HANDLE         raw bytes, werkzeug FileStorage uploads, open binary
                       files, pathlib.Path objects: bytes embedded as base64.
                       Seekable handles are read from the start.
    REMOTE_RESOLVABLE  objects with a url() method (CMS media): URL used as is
    REMOTE_URL         strings starting with "http": URL used as is
    LOCAL_PATH         any other string: file read and embedded as base64
"""
import base64
import logging
import posixpath
from enum import Enum
from pathlib import PurePath, Path
from typing import Any, Dict, NamedTuple, Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:text/plain;base64,"


class AssetSourceKind(Enum):
    RAW_HANDLE = "raw_handle"
    REMOTE_RESOLVABLE = "remote_resolvable"
    REMOTE_URL = "remote_url"
    LOCAL_PATH = "local_path"


class AssetSource(NamedTuple):
    kind: AssetSourceKind
    file: Any


def classify(file: Any) -> AssetSource:
    """Tag a file input with the kind of source it is.

    Raises:
        TypeError: If the input is none of the supported shapes
    """
    if isinstance(file, (bytes, bytearray, PurePath)) or callable(getattr(file, "read", None)):
        return AssetSource(AssetSourceKind.RAW_HANDLE, file)
    if callable(getattr(file, "url", None)):
        return AssetSource(AssetSourceKind.REMOTE_RESOLVABLE, file)
    if isinstance(file, str):
        if file.startswith("http"):
            return AssetSource(AssetSourceKind.REMOTE_URL, file)
        return AssetSource(AssetSourceKind.LOCAL_PATH, file)
    raise TypeError(f"Unsupported pass asset: {type(file).__name__}")


def to_data_uri(content: bytes) -> str:
    return DATA_URI_PREFIX + base64.b64encode(content).decode("ascii")


def url_basename(url: str) -> str:
    """Return the last path segment of a URL, ignoring query and fragment."""
    return posixpath.basename(urlparse(url).path)


def _encode_raw_handle(file: Any, name: Optional[str]) -> Dict[str, str]:
    if isinstance(file, (bytes, bytearray)):
        content = bytes(file)
        default_name = ""
    elif isinstance(file, PurePath):
        content = Path(file).read_bytes()
        default_name = file.name
    else:
        # FileStorage exposes the client's filename; plain files expose name
        default_name = getattr(file, "filename", None) or posixpath.basename(str(getattr(file, "name", "") or ""))
        seekable = getattr(file, "seekable", None)
        if callable(seekable) and seekable():
            file.seek(0)
        content = file.read()
        if isinstance(content, str):
            content = content.encode("utf-8")

    return {"name": name or default_name, "path": to_data_uri(content)}


def _encode_remote_resolvable(file: Any, name: Optional[str]) -> Dict[str, str]:
    url = file.url()
    return {"name": name or url_basename(url), "path": url}


def _encode_remote_url(file: str, name: Optional[str]) -> Dict[str, str]:
    return {"name": name or url_basename(file), "path": file}


def _encode_local_path(file: str, name: Optional[str]) -> Dict[str, str]:
    content = Path(file).read_bytes()
    return {"name": name or posixpath.basename(file), "path": to_data_uri(content)}


_ENCODERS = {
    AssetSourceKind.RAW_HANDLE: _encode_raw_handle,
    AssetSourceKind.REMOTE_RESOLVABLE: _encode_remote_resolvable,
    AssetSourceKind.REMOTE_URL: _encode_remote_url,
    AssetSourceKind.LOCAL_PATH: _encode_local_path,
}


def encode_file(file: Any, name: Optional[str] = None) -> Dict[str, str]:
    """Encode a file input as a pass asset record.

    Args:
        file: Bytes, upload, open file, Path, media object with url(), URL or local path
        name: File name inside the pass (e.g., "icon.png"). Derived from the
              input when omitted.

    Returns:
        {"name": ..., "path": ...}

    Raises:
        OSError: If a local file cannot be read
        TypeError: If the input is not a supported file shape
    """
    source = classify(file)
    asset = _ENCODERS[source.kind](source.file, name)
    logger.debug(f"Encoded pass asset '{asset['name']}' from {source.kind.value}")
    return asset


def encode_localized_file(locale: str, file: Any, name: Optional[str] = None) -> Dict[str, str]:
    """Encode a file input as a pass asset scoped to a locale (e.g., "nb")."""
    asset = encode_file(file, name)
    asset["locale"] = locale
    return asset
