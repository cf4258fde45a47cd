"""Fernet encryption for health records at rest.

Each stored record is serialized to its JSON payload and encrypted as a
single token before it reaches SQLite.
"""

from __future__ import annotations

import json

from cryptography.fernet import Fernet, InvalidToken

from pulseguard.domains.health.domain_logic.models import HealthRecord


class EncryptionError(Exception):
    """Raised when a record cannot be encrypted or decrypted."""


class RecordCipher:
    """Encrypts and decrypts :class:`HealthRecord` values.

    Usage::

        cipher = RecordCipher(key=RecordCipher.generate_key())
        token = cipher.encrypt_record(record)
        assert cipher.decrypt_record(token) == record
    """

    def __init__(self, key: str) -> None:
        """
        Args:
            key: A Fernet key string.

        Raises:
            EncryptionError: If the key is empty or not a valid Fernet key.
        """
        if not key or not key.strip():
            raise EncryptionError("Encryption key must not be empty")
        try:
            self._fernet = Fernet(key.encode("utf-8"))
        except ValueError as exc:
            raise EncryptionError(f"Invalid encryption key: {exc}") from exc

    def encrypt_record(self, record: HealthRecord) -> str:
        """Serialize and encrypt a record to a Fernet token string."""
        plaintext = json.dumps(record.to_payload(), separators=(",", ":")).encode("utf-8")
        return self._fernet.encrypt(plaintext).decode("utf-8")

    def decrypt_record(self, token: str) -> HealthRecord:
        """Decrypt a token produced by :meth:`encrypt_record`.

        Raises:
            EncryptionError: If the token is empty, was made with another key,
                or does not hold a valid record payload.
        """
        if not token:
            raise EncryptionError("Cannot decrypt an empty token")
        try:
            plaintext = self._fernet.decrypt(token.encode("utf-8"))
        except InvalidToken as exc:
            raise EncryptionError("Decryption failed: invalid token or wrong key") from exc
        try:
            return HealthRecord.from_payload(json.loads(plaintext))
        except (KeyError, ValueError) as exc:
            raise EncryptionError(f"Decrypted payload is not a health record: {exc}") from exc

    @staticmethod
    def generate_key() -> str:
        """Generate a new URL-safe base64 Fernet key."""
        return Fernet.generate_key().decode("utf-8")
