"""Тесты хеширования паролей пользователей."""

import base64
import hashlib

from rabbitmq_http_client.password_hashing import (
    HashingAlgorithm,
    base64_encoded_salted_password_hash_sha256,
    base64_encoded_salted_password_hash_sha512,
    hash_password,
    salt,
)


def test_salt_is_four_alphanumeric_bytes():
    value = salt()
    assert len(value) == 4
    assert value.decode("ascii").isalnum()


def test_sha256_layout():
    """base64(salt + sha256(salt + password))."""
    encoded = base64_encoded_salted_password_hash_sha256(b"abcd", "s3kRe7")
    raw = base64.b64decode(encoded)

    assert raw[:4] == b"abcd"
    assert raw[4:] == hashlib.sha256(b"abcds3kRe7").digest()
    assert len(raw) == 4 + 32


def test_sha512_layout():
    raw = base64.b64decode(base64_encoded_salted_password_hash_sha512(b"abcd", "s3kRe7"))
    assert raw[:4] == b"abcd"
    assert len(raw) == 4 + 64


def test_same_salt_same_hash():
    assert (base64_encoded_salted_password_hash_sha256(b"wxyz", "pw")
            == base64_encoded_salted_password_hash_sha256(b"wxyz", "pw"))


def test_hash_password_uses_fresh_salt():
    first = base64.b64decode(hash_password("pw"))
    second = base64.b64decode(hash_password("pw", HashingAlgorithm.SHA256))
    assert len(first) == len(second) == 36
    assert first[4:] == hashlib.sha256(first[:4] + b"pw").digest()


def test_algorithm_names():
    assert str(HashingAlgorithm.SHA256) == "rabbit_password_hashing_sha256"
    assert HashingAlgorithm.SHA512.value == "rabbit_password_hashing_sha512"
