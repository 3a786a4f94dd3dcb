import pytest

from core.exceptions import StorageKeyInvalidError
from core.storage.keys import build_key, build_prefix, validate_key


@pytest.mark.parametrize("key", [None, "", "   ", "\t\n"])
def test_empty_keys_are_rejected(key):
    with pytest.raises(StorageKeyInvalidError, match="empty"):
        validate_key(key)


@pytest.mark.parametrize("key", ["../foo", "gen-1/../../etc/passwd", "gen-1/..", "a..b"])
def test_path_traversal_is_rejected(key):
    with pytest.raises(StorageKeyInvalidError, match="Path traversal") as excinfo:
        validate_key(key)
    assert excinfo.value.details["key"] == key


def test_valid_key_is_returned_verbatim():
    assert validate_key("gen-123/enh-7/bom file (1).json") == "gen-123/enh-7/bom file (1).json"
    assert validate_key("./gen/bom.json") == "./gen/bom.json"


def test_prefix_and_key():
    assert build_prefix("gen-123") == "gen-123"
    assert build_prefix("gen-123", "enh-7") == "gen-123/enh-7"
    assert build_key(build_prefix("gen-123", "enh-7"), "bom.json") == "gen-123/enh-7/bom.json"
