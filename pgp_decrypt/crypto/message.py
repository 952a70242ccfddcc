"""
Ciphertext normalization.

Produces the canonical OpenPGP packet stream that the decryptor consumes.
"""

import structlog

from pgp_decrypt.config import DEFAULT_CONFIG, DecryptConfig
from pgp_decrypt.crypto.armor import byte_length, decode_armor
from pgp_decrypt.exceptions import ArmorDecodeError, InputTooLargeError, InvalidMessageTypeError
from pgp_decrypt.models.decrypt import CiphertextEncoding

logger = structlog.get_logger(__name__)


def normalize_ciphertext(
    ciphertext: bytes | str,
    encoding: CiphertextEncoding,
    *,
    config: DecryptConfig = DEFAULT_CONFIG,
) -> bytes:
    """
    Turn ciphertext into an OpenPGP packet stream.

    ARMORED ciphertext is stripped of its armor framing. BASE64 ciphertext has
    already been base64-decoded by the caller and is returned unchanged.

    Args:
        ciphertext: Armored text, or raw packet bytes.
        encoding: How the ciphertext is encoded.
        config: Pipeline configuration.

    Returns:
        The message packet stream.

    Raises:
        InputTooLargeError: If the ciphertext exceeds ``config.max_ciphertext_size``.
        ArmorDecodeError: If the armor framing is malformed.
        InvalidMessageTypeError: If the armored block is not tagged as a message.
    """
    size = byte_length(ciphertext)
    if size > config.max_ciphertext_size:
        msg = "Ciphertext exceeds size limit"
        raise InputTooLargeError(
            msg, stage="message", size=size, limit=config.max_ciphertext_size
        )

    if CiphertextEncoding(encoding) is not CiphertextEncoding.ARMORED:
        if isinstance(ciphertext, str):
            return ciphertext.encode("utf-8")
        return bytes(ciphertext)

    try:
        block = decode_armor(ciphertext, require_checksum=config.require_checksum)
    except ArmorDecodeError as e:
        msg = f"Error decoding message armor: {e.message}"
        raise ArmorDecodeError(msg, stage="message") from e

    if block.block_type not in config.message_block_types:
        msg = "Invalid message type"
        raise InvalidMessageTypeError(msg, block_type=block.block_type)

    logger.debug("Message armor decoded", block_type=block.block_type, size=len(block.body))
    return block.body
