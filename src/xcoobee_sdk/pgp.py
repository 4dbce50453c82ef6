"""
PGP decryption of event payloads.

The XcooBee system encrypts event payloads with the public key on the API
user's profile. When the config carries the matching private key
(`pgp_secret`, armored) and its passphrase (`pgp_password`), payloads are
decrypted and parsed as JSON before they are handed to the caller.

Requires the `pgp` extra: pip install 'xcoobee-sdk[pgp]'
"""

import json
import logging
from typing import Any, Optional

from xcoobee_sdk.exceptions import DomainError

logger = logging.getLogger("xcoobee_sdk.pgp")

DECRYPT_ERROR_MESSAGE = "Unable to decrypt event payload."


def _pgpy():
    try:
        import pgpy
    except ImportError as err:
        raise ImportError(
            "PGP decryption requires pgpy package. Install with: pip install 'xcoobee-sdk[pgp]'"
        ) from err
    return pgpy


def load_private_key(pgp_secret: str):
    """Parses an armored private key."""
    pgpy = _pgpy()
    try:
        key, _ = pgpy.PGPKey.from_blob(pgp_secret)
    except Exception as exc:
        raise DomainError("Invalid PGP secret key.", details=str(exc)) from exc
    if key.is_public:
        raise DomainError("Invalid PGP secret key.", details="Key is not a private key.")
    return key


def decrypt(payload: str, pgp_secret, pgp_password: Optional[str] = None) -> Any:
    """
    Decrypts an armored PGP message and parses the plaintext as JSON.

    Args:
        payload (str): Armored PGP message.
        pgp_secret (str | pgpy.PGPKey): Armored private key, or one already
            loaded with `load_private_key`.
        pgp_password (str | None): Passphrase of a protected key.

    Raises:
        DomainError: If the key or passphrase is wrong, or the payload is not
            a PGP message holding JSON.
    """
    pgpy = _pgpy()
    key = load_private_key(pgp_secret) if isinstance(pgp_secret, str) else pgp_secret
    try:
        message = pgpy.PGPMessage.from_blob(payload)
        if key.is_protected:
            with key.unlock(pgp_password or ""):
                plaintext = key.decrypt(message).message
        else:
            plaintext = key.decrypt(message).message
        if isinstance(plaintext, (bytes, bytearray)):
            plaintext = plaintext.decode("utf-8")
        return json.loads(plaintext)
    except Exception as exc:
        logger.warning(f"Failed to decrypt event payload: {exc}")
        raise DomainError(DECRYPT_ERROR_MESSAGE, details=str(exc)) from exc


def decrypt_events(events: list[dict], pgp_secret: str, pgp_password: Optional[str] = None):
    """Returns copies of `events` with every non-empty `payload` decrypted."""
    key = load_private_key(pgp_secret)
    decrypted = []
    for event in events:
        event = dict(event)
        if event.get("payload"):
            event["payload"] = decrypt(event["payload"], key, pgp_password)
        decrypted.append(event)
    return decrypted
