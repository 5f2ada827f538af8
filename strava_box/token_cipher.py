"""Symmetric encryption of refresh tokens kept in a remote gist."""

from cryptography.fernet import Fernet, InvalidToken

from .exceptions import CredentialStoreError


def generate_key() -> str:
    return Fernet.generate_key().decode("ascii")


def _fernet(key: str) -> Fernet:
    try:
        return Fernet(key.strip().encode("ascii"))
    except ValueError as e:
        raise CredentialStoreError(f"Invalid token encryption key: {e}") from e


def encrypt_token(token: str, key: str) -> str:
    return _fernet(key).encrypt(token.encode("utf-8")).decode("ascii")


def decrypt_token(ciphertext: str, key: str) -> str:
    try:
        return _fernet(key).decrypt(ciphertext.strip().encode("ascii")).decode("utf-8")
    except (InvalidToken, ValueError) as e:
        raise CredentialStoreError("Stored refresh token could not be decrypted with the configured key") from e
