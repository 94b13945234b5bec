# tests/test_token_manager.py
import pytest
import secrets
from ballotbox.errors import EntropyUnavailable
from ballotbox.security.token_manager import TokenManager


@pytest.fixture
def token_manager():
    return TokenManager()


def test_generate_token_is_256_bit_hex(token_manager):
    token = token_manager.generate_token()
    assert isinstance(token, str)
    assert len(token) == 64
    int(token, 16)  # hex-encoded


def test_tokens_are_unique(token_manager):
    tokens = {token_manager.generate_token() for _ in range(200)}
    assert len(tokens) == 200


@pytest.mark.parametrize("token_bytes", [8, 16, 31])
def test_too_little_randomness_rejected(token_bytes):
    with pytest.raises(ValueError):
        TokenManager(token_bytes=token_bytes)


def test_minimum_token_carries_256_bits():
    token = TokenManager(token_bytes=32).generate_token()
    assert len(token) * 4 >= 256


def test_entropy_failure_is_surfaced(token_manager, monkeypatch):
    def broken_source(nbytes=None):
        raise OSError("no entropy")

    monkeypatch.setattr(secrets, "token_hex", broken_source)
    with pytest.raises(EntropyUnavailable):
        token_manager.generate_token()


@pytest.mark.parametrize("header,expected", [
    ("Token abc123", "abc123"),
    ("Bearer abc123", "abc123"),
    ("", None),
    (None, None),
    ("abc123", None),
    ("Basic abc123", None),
    ("Token ", None),
    ("Token a b", None),
])
def test_extract_from_header(header, expected):
    assert TokenManager.extract_from_header(header) == expected
