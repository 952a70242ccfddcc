import gzip
from collections.abc import Callable
from unittest.mock import Mock

import pgpy
import pytest

from pgp_decrypt.config import DecryptConfig
from pgp_decrypt.crypto.armor import encode_armor
from pgp_decrypt.crypto.decryptor import (
    _normalize_literal_content,
    _read_unverified_body,
    decompress_gzip,
    decrypt,
)
from pgp_decrypt.crypto.key_loader import PrivateKeyEntity, load_private_key
from pgp_decrypt.crypto.message import normalize_ciphertext
from pgp_decrypt.exceptions import (
    BodyReadError,
    DecompressionInitError,
    DecompressionReadError,
    MessageReadError,
)
from pgp_decrypt.models.decrypt import CiphertextEncoding


@pytest.fixture(scope="module")
def private_key(armored_private_key: str) -> PrivateKeyEntity:
    return load_private_key(armored_private_key)


def test_decrypt_armored_hello_world(
    private_key: PrivateKeyEntity, encrypt_armored: Callable[..., str]
) -> None:
    armored = encrypt_armored(b"hello world")
    stream = normalize_ciphertext(armored, CiphertextEncoding.ARMORED)

    result = decrypt(private_key, stream, CiphertextEncoding.ARMORED)

    assert result == b"hello world"


def test_decrypt_armored_returns_binary_plaintext_unchanged(
    private_key: PrivateKeyEntity, encrypt_armored: Callable[..., str]
) -> None:
    plaintext = bytes(range(256)) * 8
    stream = normalize_ciphertext(encrypt_armored(plaintext), CiphertextEncoding.ARMORED)

    assert decrypt(private_key, stream, CiphertextEncoding.ARMORED) == plaintext


def test_decrypt_raw_returns_body_without_decompression(
    private_key: PrivateKeyEntity, encrypt_binary: Callable[..., bytes]
) -> None:
    stream = encrypt_binary(b"plain body")

    assert decrypt(private_key, stream, CiphertextEncoding.BASE64) == b"plain body"


def test_decrypt_raw_keeps_gzip_looking_plaintext_compressed(
    private_key: PrivateKeyEntity, encrypt_binary: Callable[..., bytes]
) -> None:
    compressed = gzip.compress(b"still compressed")

    result = decrypt(private_key, encrypt_binary(compressed), CiphertextEncoding.BASE64)

    assert result == compressed


def test_decrypt_ignores_signatures(
    private_key: PrivateKeyEntity,
    other_pgp_key: pgpy.PGPKey,
    encrypt_armored: Callable[..., str],
) -> None:
    armored = encrypt_armored(b"signed text", signer=other_pgp_key)
    stream = normalize_ciphertext(armored, CiphertextEncoding.ARMORED)

    assert decrypt(private_key, stream, CiphertextEncoding.ARMORED) == b"signed text"


def test_decrypt_raises_message_read_error_for_wrong_key(
    private_key: PrivateKeyEntity,
    other_pgp_key: pgpy.PGPKey,
    encrypt_binary: Callable[..., bytes],
) -> None:
    stream = encrypt_binary(b"not for you", recipient=other_pgp_key)

    with pytest.raises(MessageReadError, match="Error reading message") as exc_info:
        decrypt(private_key, stream, CiphertextEncoding.BASE64)

    assert exc_info.value.context["key_id"] == private_key.key_id


def test_decrypt_raises_message_read_error_for_garbage(private_key: PrivateKeyEntity) -> None:
    with pytest.raises(MessageReadError):
        decrypt(private_key, b"", CiphertextEncoding.BASE64)


def test_decrypt_raises_message_read_error_for_unencrypted_message(
    private_key: PrivateKeyEntity,
) -> None:
    stream = bytes(pgpy.PGPMessage.new(b"plain literal", format="b"))

    with pytest.raises(MessageReadError, match="not an encrypted message"):
        decrypt(private_key, stream, CiphertextEncoding.BASE64)


def test_decrypt_fails_cleanly_on_truncated_ciphertext(
    private_key: PrivateKeyEntity, encrypt_binary: Callable[..., bytes]
) -> None:
    stream = encrypt_binary(gzip.compress(b"hello world" * 50))
    armored = encode_armor("Message", stream[:-40])
    truncated = normalize_ciphertext(armored, CiphertextEncoding.ARMORED)

    with pytest.raises((MessageReadError, BodyReadError)):
        decrypt(private_key, truncated, CiphertextEncoding.ARMORED)


def test_decrypt_armored_raises_init_error_for_uncompressed_body(
    private_key: PrivateKeyEntity, encrypt_armored: Callable[..., str]
) -> None:
    armored = encrypt_armored(b"not gzip at all", compress=False)
    stream = normalize_ciphertext(armored, CiphertextEncoding.ARMORED)

    with pytest.raises(DecompressionInitError) as exc_info:
        decrypt(private_key, stream, CiphertextEncoding.ARMORED)

    assert exc_info.value.stage == "decompress"


def test_decrypt_armored_applies_plaintext_limit(
    private_key: PrivateKeyEntity, encrypt_armored: Callable[..., str]
) -> None:
    stream = normalize_ciphertext(encrypt_armored(b"x" * 1000), CiphertextEncoding.ARMORED)
    config = DecryptConfig(max_plaintext_size=100)

    with pytest.raises(DecompressionReadError, match="exceeds size limit"):
        decrypt(private_key, stream, CiphertextEncoding.ARMORED, config=config)


def test_decompress_gzip_returns_plaintext() -> None:
    assert decompress_gzip(gzip.compress(b"data"), max_size=1024) == b"data"


def test_decompress_gzip_handles_concatenated_members() -> None:
    data = gzip.compress(b"first ") + gzip.compress(b"second")

    assert decompress_gzip(data, max_size=1024) == b"first second"


def test_decompress_gzip_raises_init_error_on_short_input() -> None:
    with pytest.raises(DecompressionInitError, match="too short"):
        decompress_gzip(b"\x1f\x8b", max_size=1024)


def test_decompress_gzip_raises_init_error_on_bad_magic() -> None:
    with pytest.raises(DecompressionInitError, match="invalid magic"):
        decompress_gzip(b"PK" + bytes(20), max_size=1024)


def test_decompress_gzip_raises_init_error_on_unsupported_method() -> None:
    data = bytearray(gzip.compress(b"data"))
    data[2] = 7

    with pytest.raises(DecompressionInitError, match="unsupported method"):
        decompress_gzip(bytes(data), max_size=1024)


def test_decompress_gzip_raises_read_error_on_truncated_stream() -> None:
    data = gzip.compress(b"hello world" * 100)[:-12]

    with pytest.raises(DecompressionReadError, match="Error reading gzip stream"):
        decompress_gzip(data, max_size=1 << 20)


def test_decompress_gzip_raises_read_error_on_corrupt_crc() -> None:
    data = bytearray(gzip.compress(b"hello world"))
    data[-8] ^= 0xFF

    with pytest.raises(DecompressionReadError):
        decompress_gzip(bytes(data), max_size=1024)


def test_normalize_literal_content_returns_bytes_unchanged() -> None:
    assert _normalize_literal_content(bytearray(b"\xff\x00"), "b") == b"\xff\x00"


def test_normalize_literal_content_encodes_text_literal_as_latin1() -> None:
    assert _normalize_literal_content("caf\xe9", "t") == b"caf\xe9"


def test_normalize_literal_content_encodes_utf8_literal() -> None:
    assert _normalize_literal_content("caf\xe9", "u") == "caf\xe9".encode("utf-8")


def test_read_unverified_body_raises_when_literal_has_no_format() -> None:
    decrypted = Mock(spec=["type", "message", "_message", "is_signed"])
    decrypted.type = "literal"
    decrypted.message = b"payload"
    decrypted._message = object()

    with pytest.raises(BodyReadError, match="no format field"):
        _read_unverified_body(decrypted)


def test_read_unverified_body_rejects_non_literal_payload() -> None:
    decrypted = Mock(spec=["type"])
    decrypted.type = "encrypted"

    with pytest.raises(BodyReadError, match="expected literal data"):
        _read_unverified_body(decrypted)
