"""
Decrypt service.

Entry point for callers holding a private key and a ciphertext as text. Validates
the ciphertext encoding, removes the outer base64 layer when asked to, and runs
the key loading, normalization and decryption stages in order.
"""

import base64
import binascii

import structlog

from pgp_decrypt.config import DEFAULT_CONFIG, DecryptConfig
from pgp_decrypt.crypto.decryptor import decrypt
from pgp_decrypt.crypto.key_loader import load_private_key
from pgp_decrypt.crypto.message import normalize_ciphertext
from pgp_decrypt.exceptions import CiphertextDecodeError, InvalidEncodingError
from pgp_decrypt.models.decrypt import CiphertextEncoding, DecryptedData

logger = structlog.get_logger(__name__)


class DecryptService:
    """
    Stateless decryption facade.

    Example:
        service = DecryptService()
        result = service.decrypt(armored_private_key, armored_message)
        print(result.text, result.digest)
    """

    def __init__(self, config: DecryptConfig | None = None) -> None:
        """
        Args:
            config: Pipeline configuration. Uses defaults if not provided.
        """
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> DecryptConfig:
        return self._config

    def decrypt(
        self,
        private_key: str,
        ciphertext: str,
        ciphertext_encoding: str = CiphertextEncoding.ARMORED,
    ) -> DecryptedData:
        """
        Decrypt ``ciphertext`` with ``private_key``.

        Args:
            private_key: ASCII-armored, unprotected private key.
            ciphertext: Armored message, or base64 of the binary message.
            ciphertext_encoding: ``"armored"`` or ``"base64"``.

        Returns:
            DecryptedData with the plaintext and its SHA-256 digest.

        Raises:
            InvalidEncodingError: If ``ciphertext_encoding`` is not supported.
            CiphertextDecodeError: If base64 ciphertext cannot be decoded.
            PgpDecryptError: Any error raised by the pipeline stages.
        """
        encoding = self._parse_encoding(ciphertext_encoding)
        key = load_private_key(private_key, config=self._config)

        raw_ciphertext: bytes | str = ciphertext
        if encoding is CiphertextEncoding.BASE64:
            raw_ciphertext = self._decode_base64(ciphertext)

        stream = normalize_ciphertext(raw_ciphertext, encoding, config=self._config)
        plaintext = decrypt(key, stream, encoding, config=self._config)

        result = DecryptedData.from_plaintext(plaintext, encoding)
        logger.info("Ciphertext decrypted", encoding=encoding.value, digest=result.digest)
        return result

    @staticmethod
    def _parse_encoding(value: str) -> CiphertextEncoding:
        try:
            return CiphertextEncoding(value)
        except ValueError:
            choices = " or ".join(repr(choice) for choice in CiphertextEncoding.choices())
            msg = f"ciphertext_encoding must be either {choices}, got: {value!r}"
            raise InvalidEncodingError(msg, encoding=str(value)) from None

    @staticmethod
    def _decode_base64(ciphertext: str) -> bytes:
        try:
            return base64.b64decode(ciphertext, validate=True)
        except (binascii.Error, ValueError) as e:
            msg = f"Unable to decode ciphertext: {e}"
            raise CiphertextDecodeError(msg) from e


def decrypt_data(
    private_key: str,
    ciphertext: str,
    ciphertext_encoding: str = CiphertextEncoding.ARMORED,
) -> DecryptedData:
    """Decrypt with the default configuration. See DecryptService.decrypt."""
    return DecryptService().decrypt(private_key, ciphertext, ciphertext_encoding)
