"""
pgp_decrypt: decrypt OpenPGP messages with a single private key.

Example:
    ```python
    from pgp_decrypt import decrypt_data

    result = decrypt_data(armored_private_key, armored_message)
    print(result.text)

    # Binary message that was base64-encoded for transport
    result = decrypt_data(armored_private_key, b64_message, "base64")
    ```

Signatures carried by a message are ignored, never verified.
"""

from pgp_decrypt.config import DecryptConfig
from pgp_decrypt.crypto.decryptor import decrypt
from pgp_decrypt.crypto.key_loader import PrivateKeyEntity, load_private_key
from pgp_decrypt.crypto.message import normalize_ciphertext
from pgp_decrypt.exceptions import (
    ArmorDecodeError,
    BodyReadError,
    CiphertextDecodeError,
    DecompressionError,
    DecompressionInitError,
    DecompressionReadError,
    InputError,
    InputTooLargeError,
    InvalidEncodingError,
    InvalidKeyTypeError,
    InvalidMessageTypeError,
    KeyLoadError,
    KeyParseError,
    MessageError,
    MessageReadError,
    PgpDecryptError,
    ProtectedKeyError,
)
from pgp_decrypt.models.decrypt import CiphertextEncoding, DecryptedData
from pgp_decrypt.services.decrypt_service import DecryptService, decrypt_data

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "DecryptService",
    "DecryptConfig",
    "decrypt_data",
    # Pipeline stages
    "load_private_key",
    "normalize_ciphertext",
    "decrypt",
    # Models
    "CiphertextEncoding",
    "DecryptedData",
    "PrivateKeyEntity",
    # Exceptions
    "PgpDecryptError",
    "InputError",
    "InvalidEncodingError",
    "CiphertextDecodeError",
    "InputTooLargeError",
    "ArmorDecodeError",
    "KeyLoadError",
    "InvalidKeyTypeError",
    "KeyParseError",
    "ProtectedKeyError",
    "MessageError",
    "InvalidMessageTypeError",
    "MessageReadError",
    "BodyReadError",
    "DecompressionError",
    "DecompressionInitError",
    "DecompressionReadError",
]
