import base64

import pytest

from nic_calculator.security.session_hasher import SessionHasher

pytestmark = pytest.mark.unit

KEY = "eTWbbFeb1TPUBE5vq6A+LUGhl3LVtZwHhzZggfLMjpc="


def test_hash_is_deterministic_for_same_key() -> None:
    first = SessionHasher.from_base64(KEY)
    second = SessionHasher.from_base64(KEY)

    assert first.hash("session-1") == second.hash("session-1")


def test_hash_hides_session_identifier() -> None:
    hasher = SessionHasher.from_base64(KEY)

    token = hasher.hash("session-1")

    assert "session-1" not in token
    assert len(base64.b64decode(token)) == 64


def test_hash_differs_between_sessions_and_keys() -> None:
    hasher = SessionHasher.from_base64(KEY)
    other = SessionHasher(key=b"another-secret")

    assert hasher.hash("a") != hasher.hash("b")
    assert hasher.hash("a") != other.hash("a")


@pytest.mark.parametrize("encoded", ["not base64!!", ""])
def test_invalid_key_is_rejected(encoded: str) -> None:
    with pytest.raises(ValueError):
        SessionHasher.from_base64(encoded)


def test_unknown_algorithm_is_rejected() -> None:
    with pytest.raises(ValueError):
        SessionHasher(key=b"secret", algorithm="nope")
