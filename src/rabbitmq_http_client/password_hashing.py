"""
Salted password hashes in the format the broker stores for internal users.

The result is ``base64(salt + H(salt + password))`` where ``H`` is SHA-256
(the broker default) or SHA-512. Pass it as ``password_hash`` to
:meth:`Client.create_user` together with the matching ``hashing_algorithm``.

Example:
    >>> salt_bytes = salt()
    >>> password_hash = base64_encoded_salted_password_hash_sha256(salt_bytes, "s3kRe7")
"""

import base64
import hashlib
import secrets
import string
from enum import Enum

SALT_LENGTH = 4

_SALT_ALPHABET = string.ascii_letters + string.digits


class HashingAlgorithm(str, Enum):
    SHA256 = "rabbit_password_hashing_sha256"
    SHA512 = "rabbit_password_hashing_sha512"

    def __str__(self) -> str:
        return self.value

    def salt_and_hash(self, salt_bytes: bytes, password: str) -> bytes:
        digest = hashlib.sha512 if self is HashingAlgorithm.SHA512 else hashlib.sha256
        return salt_bytes + digest(salt_bytes + password.encode("utf-8")).digest()


def salt() -> bytes:
    """Four random alphanumeric bytes."""
    return "".join(secrets.choice(_SALT_ALPHABET) for _ in range(SALT_LENGTH)).encode("ascii")


def salted_password_hash_sha256(salt_bytes: bytes, password: str) -> bytes:
    return HashingAlgorithm.SHA256.salt_and_hash(salt_bytes, password)


def salted_password_hash_sha512(salt_bytes: bytes, password: str) -> bytes:
    return HashingAlgorithm.SHA512.salt_and_hash(salt_bytes, password)


def base64_encoded_salted_password_hash_sha256(salt_bytes: bytes, password: str) -> str:
    return base64.b64encode(salted_password_hash_sha256(salt_bytes, password)).decode("ascii")


def base64_encoded_salted_password_hash_sha512(salt_bytes: bytes, password: str) -> str:
    return base64.b64encode(salted_password_hash_sha512(salt_bytes, password)).decode("ascii")


def hash_password(password: str, algorithm: HashingAlgorithm = HashingAlgorithm.SHA256) -> str:
    """Hash ``password`` with a freshly generated salt."""
    return base64.b64encode(algorithm.salt_and_hash(salt(), password)).decode("ascii")
