"""
Decryption domain models.
"""

import hashlib
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Self


class CiphertextEncoding(StrEnum):
    """
    How the ciphertext reaches the pipeline.

    ARMORED ciphertext is ASCII-armored and gzip-compressed before encryption.
    BASE64 ciphertext has had its base64 layer removed by the caller and its
    decrypted body is used as-is.
    """

    ARMORED = "armored"
    BASE64 = "base64"

    @classmethod
    def choices(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


@dataclass(frozen=True, kw_only=True)
class DecryptedData:
    """
    Result of a successful decryption.

    Attributes:
        plaintext: The decrypted (and, for armored input, decompressed) bytes.
        digest: SHA-256 hex digest of the plaintext, usable as an opaque id.
        encoding: Encoding the ciphertext was supplied in.
    """

    plaintext: bytes = field(repr=False)
    digest: str
    encoding: CiphertextEncoding

    @classmethod
    def from_plaintext(cls, plaintext: bytes, encoding: CiphertextEncoding) -> Self:
        return cls(
            plaintext=plaintext,
            digest=hashlib.sha256(plaintext).hexdigest(),
            encoding=encoding,
        )

    @property
    def text(self) -> str:
        """Plaintext decoded as UTF-8."""
        return self.plaintext.decode("utf-8")

    def __len__(self) -> int:
        return len(self.plaintext)
