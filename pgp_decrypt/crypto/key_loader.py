"""
Private key loading.

Turns an ASCII-armored private key block into a single in-memory key entity
(primary key plus sub-keys and self-signatures) backed by pgpy.
"""

from dataclasses import dataclass

import pgpy
import structlog

from pgp_decrypt.config import DEFAULT_CONFIG, DecryptConfig
from pgp_decrypt.crypto.armor import byte_length, decode_armor
from pgp_decrypt.exceptions import (
    ArmorDecodeError,
    InputTooLargeError,
    InvalidKeyTypeError,
    KeyParseError,
    ProtectedKeyError,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PrivateKeyEntity:
    """Wrapper around an unprotected pgpy.PGPKey holding secret key material."""

    _key: pgpy.PGPKey

    @property
    def key_id(self) -> str:
        return str(self._key.fingerprint.keyid)

    @property
    def fingerprint(self) -> str:
        return str(self._key.fingerprint)

    @property
    def subkey_ids(self) -> list[str]:
        return [str(key_id) for key_id in self._key.subkeys]

    @property
    def pgpy_key(self) -> pgpy.PGPKey:
        return self._key

    def __repr__(self) -> str:
        return f"PrivateKeyEntity(key_id={self.key_id!r})"


def load_private_key(
    armored_key: bytes | str,
    *,
    config: DecryptConfig = DEFAULT_CONFIG,
) -> PrivateKeyEntity:
    """
    Load a private key from ASCII-armored format.

    Args:
        armored_key: ASCII-armored private key block.
        config: Pipeline configuration.

    Returns:
        PrivateKeyEntity wrapping the parsed key.

    Raises:
        InputTooLargeError: If the armored key exceeds ``config.max_key_size``.
        ArmorDecodeError: If the armor framing is malformed.
        InvalidKeyTypeError: If the block is not tagged as a private key.
        KeyParseError: If the packets do not form a usable private key.
        ProtectedKeyError: If the key is passphrase-protected.
    """
    _check_size(armored_key, config.max_key_size)

    try:
        block = decode_armor(armored_key, require_checksum=config.require_checksum)
    except ArmorDecodeError as e:
        msg = f"Failed to decode private key armor: {e.message}"
        raise ArmorDecodeError(msg, stage="key") from e

    if block.block_type != config.private_key_block_type:
        msg = f"Invalid private key data: expected {config.private_key_block_type!r} block"
        raise InvalidKeyTypeError(msg, block_type=block.block_type)

    key = _parse_key_packets(block.body)
    _validate_secret_material(key)

    entity = PrivateKeyEntity(key)
    logger.debug(
        "Private key loaded",
        key_id=entity.key_id,
        subkeys=len(entity.subkey_ids),
    )
    return entity


def _check_size(armored_key: bytes | str, limit: int) -> None:
    size = byte_length(armored_key)
    if size <= limit:
        return
    msg = "Private key exceeds size limit"
    raise InputTooLargeError(msg, stage="key", size=size, limit=limit)


def _parse_key_packets(packets: bytes) -> pgpy.PGPKey:
    try:
        key, _ = pgpy.PGPKey.from_blob(bytearray(packets))
    except Exception as e:
        msg = f"Failed to parse private key packets: {e}"
        raise KeyParseError(msg) from e
    if key is None or key._key is None:
        raise KeyParseError("Private key packets contain no key")
    return key


def _validate_secret_material(key: pgpy.PGPKey) -> None:
    if key.is_public:
        msg = "Key block contains no secret key material"
        raise KeyParseError(msg, key_id=str(key.fingerprint.keyid))
    protected = [k for k in (key, *key.subkeys.values()) if k.is_protected]
    if not protected:
        return
    msg = "Passphrase-protected private keys are not supported"
    raise ProtectedKeyError(msg, key_id=str(protected[0].fingerprint.keyid))
