"""Tests for content fingerprinting."""

import pytest

from arc_hives.errors import ValidationError
from arc_hives.services.fingerprint import fingerprint, normalize_fingerprint

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_fingerprint_is_sha256_hex():
    assert fingerprint(b"hello") == HELLO_SHA256


def test_fingerprint_text_is_utf8_encoded():
    assert fingerprint("hello") == fingerprint(b"hello")
    assert fingerprint("café") == fingerprint("café".encode("utf-8"))


def test_fingerprint_is_deterministic():
    content = b"Same article body.\n" * 50
    assert fingerprint(content) == fingerprint(content)


def test_fingerprint_depends_only_on_content():
    assert fingerprint(b"hello") != fingerprint(b"hello ")


def test_fingerprint_of_empty_input():
    assert fingerprint(b"") == EMPTY_SHA256


def test_normalize_fingerprint_strips_and_lowercases():
    assert normalize_fingerprint(f"  {HELLO_SHA256.upper()}\n") == HELLO_SHA256


@pytest.mark.parametrize("value", ["", "abc", HELLO_SHA256[:-1] + "g", HELLO_SHA256 + "0"])
def test_normalize_fingerprint_rejects_malformed(value):
    with pytest.raises(ValidationError):
        normalize_fingerprint(value)
