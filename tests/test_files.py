"""
Unit Tests for pass asset encoding.

Test Coverage:
    - Source classification precedence
    - Remote URLs used as is
    - Local paths, Path objects, uploads and open files embedded as base64
    - Name derivation and locale stamping
"""
import base64
import io
from pathlib import Path

import pytest
from werkzeug.datastructures import FileStorage

from wallet.files import (
    DATA_URI_PREFIX,
    AssetSourceKind,
    classify,
    encode_file,
    encode_localized_file,
)
from conftest import PNG_BYTES


class MediaFile:
    """Stand-in for a CMS media object that resolves to a URL."""

    def __init__(self, url):
        self._url = url

    def url(self):
        return self._url


def decode_data_uri(path):
    assert path.startswith(DATA_URI_PREFIX)
    return base64.b64decode(path[len(DATA_URI_PREFIX):])


class TestClassify:
    """Test input classification."""

    def test_kinds(self, png_file):
        assert classify(Path(png_file)).kind is AssetSourceKind.RAW_HANDLE
        assert classify(PNG_BYTES).kind is AssetSourceKind.RAW_HANDLE
        assert classify(bytearray(PNG_BYTES)).kind is AssetSourceKind.RAW_HANDLE
        assert classify(io.BytesIO(b"x")).kind is AssetSourceKind.RAW_HANDLE
        assert classify(MediaFile("https://cdn.example.com/a.png")).kind is AssetSourceKind.REMOTE_RESOLVABLE
        assert classify("https://example.com/a.png").kind is AssetSourceKind.REMOTE_URL
        assert classify("/tmp/x.png").kind is AssetSourceKind.LOCAL_PATH

    def test_unsupported_input_raises(self):
        with pytest.raises(TypeError):
            classify(12345)


class TestEncodeFile:
    """Test encode_file for every source kind."""

    def test_remote_url_is_not_embedded(self):
        assert encode_file("https://example.com/a.png") == {"name": "a.png", "path": "https://example.com/a.png"}

    def test_remote_url_name_ignores_query(self):
        asset = encode_file("https://example.com/images/a.png?w=100")
        assert asset["name"] == "a.png"
        assert asset["path"] == "https://example.com/images/a.png?w=100"

    def test_explicit_name_wins(self):
        assert encode_file("https://example.com/a.png", "icon.png")["name"] == "icon.png"

    def test_local_path_is_embedded(self, tmp_path):
        path = tmp_path / "x.png"
        path.write_bytes(PNG_BYTES)

        asset = encode_file(str(path))

        assert asset["name"] == "x.png"
        assert decode_data_uri(asset["path"]) == PNG_BYTES

    def test_missing_local_path_raises(self, tmp_path):
        with pytest.raises(OSError):
            encode_file(str(tmp_path / "missing.png"))

    def test_path_object_is_embedded(self, png_file):
        asset = encode_file(Path(png_file))

        assert asset["name"] == "logo.png"
        assert decode_data_uri(asset["path"]) == PNG_BYTES

    def test_upload_uses_client_filename(self):
        upload = FileStorage(stream=io.BytesIO(PNG_BYTES), filename="uploaded.png", name="image")

        asset = encode_file(upload)

        assert asset["name"] == "uploaded.png"
        assert decode_data_uri(asset["path"]) == PNG_BYTES

    def test_open_file_uses_basename(self, png_file):
        with open(png_file, "rb") as f:
            asset = encode_file(f)

        assert asset["name"] == "logo.png"
        assert decode_data_uri(asset["path"]) == PNG_BYTES

    def test_raw_bytes_are_embedded(self):
        asset = encode_file(PNG_BYTES, "icon.png")

        assert asset["name"] == "icon.png"
        assert decode_data_uri(asset["path"]) == PNG_BYTES

    def test_raw_bytes_without_name(self):
        assert encode_file(bytearray(b"abc"))["name"] == ""

    def test_reused_handle_is_read_from_start(self):
        handle = io.BytesIO(b"abc")

        first = encode_file(handle, "icon.png")
        second = encode_localized_file("nb", handle, "icon.png")

        assert decode_data_uri(first["path"]) == b"abc"
        assert decode_data_uri(second["path"]) == b"abc"

    def test_reused_upload_is_read_from_start(self):
        upload = FileStorage(stream=io.BytesIO(PNG_BYTES), filename="uploaded.png", name="image")

        encode_file(upload)
        asset = encode_file(upload)

        assert decode_data_uri(asset["path"]) == PNG_BYTES

    def test_media_object_uses_resolved_url(self):
        asset = encode_file(MediaFile("https://cdn.example.com/media/strip@2x.png"))
        assert asset == {"name": "strip@2x.png", "path": "https://cdn.example.com/media/strip@2x.png"}

    def test_localized_file_is_stamped(self):
        asset = encode_localized_file("nb", "https://example.com/a.png", "logo.png")
        assert asset == {"name": "logo.png", "path": "https://example.com/a.png", "locale": "nb"}
