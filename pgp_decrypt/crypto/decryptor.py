"""
Message decryption and decompression.

Decrypts an OpenPGP packet stream with exactly one private key. Signatures
carried by the message are ignored: they are never verified and their presence
does not change the result. For armored input the decrypted body is a gzip
stream and is decompressed; for base64 input the decrypted body is returned
unchanged.
"""

import gzip
import io
import zlib

import pgpy
import structlog

from pgp_decrypt.config import DEFAULT_CONFIG, DecryptConfig
from pgp_decrypt.crypto.key_loader import PrivateKeyEntity
from pgp_decrypt.exceptions import (
    BodyReadError,
    DecompressionInitError,
    DecompressionReadError,
    MessageReadError,
)
from pgp_decrypt.models.decrypt import CiphertextEncoding

logger = structlog.get_logger(__name__)

_GZIP_MAGIC = b"\x1f\x8b"
_GZIP_METHOD_DEFLATE = 8
_GZIP_HEADER_SIZE = 10
_READ_CHUNK_SIZE = 64 * 1024


def decrypt(
    key: PrivateKeyEntity,
    stream: bytes,
    encoding: CiphertextEncoding,
    *,
    config: DecryptConfig = DEFAULT_CONFIG,
) -> bytes:
    """
    Decrypt a message packet stream.

    Args:
        key: The only key considered for decryption.
        stream: OpenPGP message packet stream.
        encoding: Encoding the ciphertext arrived in; selects decompression.
        config: Pipeline configuration.

    Returns:
        The plaintext.

    Raises:
        MessageReadError: If the stream is not an encrypted message or cannot
            be decrypted with ``key``.
        BodyReadError: If the decrypted payload cannot be read.
        DecompressionInitError: If an armored body is not a gzip stream.
        DecompressionReadError: If an armored body's gzip stream is corrupt.
    """
    encoding = CiphertextEncoding(encoding)
    message = _read_message(stream)
    decrypted = _decrypt_message(key, message)
    body = _read_unverified_body(decrypted)
    logger.debug("Message decrypted", key_id=key.key_id, size=len(body))

    if encoding is CiphertextEncoding.ARMORED:
        return decompress_gzip(body, max_size=config.max_plaintext_size)
    return body


def decompress_gzip(data: bytes, *, max_size: int) -> bytes:
    """
    Decompress a complete gzip stream held in memory.

    Args:
        data: gzip-compressed bytes.
        max_size: Maximum number of decompressed bytes.

    Returns:
        Decompressed bytes.

    Raises:
        DecompressionInitError: If ``data`` has no valid gzip header.
        DecompressionReadError: If the stream is corrupt, truncated or larger
            than ``max_size`` once decompressed.
    """
    _check_gzip_header(data)

    chunks: list[bytes] = []
    total = 0
    try:
        with gzip.GzipFile(fileobj=io.BytesIO(data), mode="rb") as reader:
            while chunk := reader.read(_READ_CHUNK_SIZE):
                total += len(chunk)
                if total > max_size:
                    msg = "Decompressed plaintext exceeds size limit"
                    raise DecompressionReadError(msg, limit=max_size)
                chunks.append(chunk)
    except (OSError, EOFError, zlib.error) as e:
        msg = f"Error reading gzip stream: {e}"
        raise DecompressionReadError(msg) from e

    logger.debug("Message decompressed", compressed=len(data), size=total)
    return b"".join(chunks)


def _read_message(stream: bytes) -> pgpy.PGPMessage:
    try:
        message = pgpy.PGPMessage.from_blob(bytes(stream))
    except Exception as e:
        msg = f"Error reading message: {e}"
        raise MessageReadError(msg) from e
    if not message.is_encrypted:
        raise MessageReadError("Error reading message: not an encrypted message")
    return message


def _decrypt_message(key: PrivateKeyEntity, message: pgpy.PGPMessage) -> pgpy.PGPMessage:
    try:
        return key.pgpy_key.decrypt(message)
    except Exception as e:
        msg = f"Error reading message: {e}"
        raise MessageReadError(msg, key_id=key.key_id) from e


def _read_unverified_body(decrypted: pgpy.PGPMessage) -> bytes:
    try:
        if decrypted.type != "literal":
            msg = f"Error reading unverified body: expected literal data, got {decrypted.type}"
            raise BodyReadError(msg)
        content = decrypted.message
        text_format = _literal_format(decrypted)
    except BodyReadError:
        raise
    except Exception as e:
        msg = f"Error reading unverified body: {e}"
        raise BodyReadError(msg) from e

    if decrypted.is_signed:
        logger.debug(
            "Message signatures ignored",
            signers=sorted(str(signer) for signer in decrypted.signers),
        )
    return _normalize_literal_content(content, text_format)


def _literal_format(decrypted: pgpy.PGPMessage) -> str:
    try:
        return decrypted._message.format
    except AttributeError as e:
        msg = (
            "Error reading unverified body: literal data packet has no format field; "
            "pgpy 0.6 LiteralData layout expected"
        )
        raise BodyReadError(msg) from e


def _normalize_literal_content(content: bytes | str | bytearray, text_format: str) -> bytes:
    """
    Re-encode literal content to the bytes that were encrypted.

    Relies on pgpy 0.6 behaviour: ``PGPMessage.message`` returns the raw
    bytearray for ``b`` literals, decodes ``u`` literals as UTF-8 and ``t`` literals
    as latin-1, and the format byte is read from the private ``_message.format``.
    """
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    return content.encode("utf-8" if text_format == "u" else "latin-1")


def _check_gzip_header(data: bytes) -> None:
    if len(data) < _GZIP_HEADER_SIZE:
        msg = f"Error initializing gzip reader: {len(data)} bytes is too short for a gzip header"
        raise DecompressionInitError(msg)
    if data[:2] != _GZIP_MAGIC:
        msg = f"Error initializing gzip reader: invalid magic {data[:2].hex()}"
        raise DecompressionInitError(msg)
    if data[2] != _GZIP_METHOD_DEFLATE:
        msg = f"Error initializing gzip reader: unsupported method {data[2]}"
        raise DecompressionInitError(msg)
