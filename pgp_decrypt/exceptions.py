"""
pgp_decrypt exception hierarchy.

All exceptions inherit from PgpDecryptError for easy catching. Every error raised
by the pipeline carries the ``stage`` that failed in its context.
"""

from typing import Any


class PgpDecryptError(Exception):
    """Base exception for all pgp_decrypt errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message

    @property
    def stage(self) -> str | None:
        return self.context.get("stage")


class InputError(PgpDecryptError):
    """Caller-supplied input was rejected before decryption started."""


class InvalidEncodingError(InputError):
    """Unknown ciphertext encoding."""

    def __init__(self, message: str, *, encoding: str) -> None:
        super().__init__(message, stage="input", encoding=encoding)
        self.encoding = encoding


class CiphertextDecodeError(InputError):
    """Base64 ciphertext could not be decoded."""

    def __init__(self, message: str) -> None:
        super().__init__(message, stage="input")


class InputTooLargeError(InputError):
    """Input exceeds the configured size limit."""

    def __init__(self, message: str, *, stage: str, size: int, limit: int) -> None:
        super().__init__(message, stage=stage, size=size, limit=limit)
        self.size = size
        self.limit = limit


class ArmorDecodeError(PgpDecryptError):
    """Malformed ASCII-armor framing (key or message)."""

    def __init__(self, message: str, *, stage: str = "armor") -> None:
        super().__init__(message, stage=stage)


class KeyLoadError(PgpDecryptError):
    """The private key could not be loaded."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, stage="key", **context)


class InvalidKeyTypeError(KeyLoadError):
    """Armored block is not tagged as a private key."""

    def __init__(self, message: str, *, block_type: str) -> None:
        super().__init__(message, block_type=block_type)
        self.block_type = block_type


class KeyParseError(KeyLoadError):
    """Packet stream does not yield a usable private key entity."""


class ProtectedKeyError(KeyParseError):
    """Private key is passphrase-protected; protected keys are not supported."""

    def __init__(self, message: str, *, key_id: str) -> None:
        super().__init__(message, key_id=key_id)
        self.key_id = key_id


class MessageError(PgpDecryptError):
    """The ciphertext could not be turned into a plaintext body."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, stage="message", **context)


class InvalidMessageTypeError(MessageError):
    """Armored block is not tagged as a message."""

    def __init__(self, message: str, *, block_type: str) -> None:
        super().__init__(message, block_type=block_type)
        self.block_type = block_type


class MessageReadError(MessageError):
    """Ciphertext cannot be parsed or decrypted with the supplied key."""


class BodyReadError(MessageError):
    """Failed to drain the decrypted body."""


class DecompressionError(PgpDecryptError):
    """Gzip layer of an armored message failed."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, stage="decompress", **context)


class DecompressionInitError(DecompressionError):
    """Decrypted body does not start with a valid gzip header."""


class DecompressionReadError(DecompressionError):
    """Gzip stream is corrupt, truncated or too large."""
