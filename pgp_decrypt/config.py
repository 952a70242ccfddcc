"""
Decryption pipeline configuration.
"""

from dataclasses import dataclass

_MIB = 1024 * 1024


@dataclass(frozen=True, kw_only=True)
class DecryptConfig:
    """
    Attributes:
        message_block_types: Armor labels accepted for an armored message.
        private_key_block_type: Armor label required for a private key.
        require_checksum: Reject armor without a CRC-24 line.
        max_key_size: Maximum size of the armored private key in bytes.
        max_ciphertext_size: Maximum size of the ciphertext in bytes.
        max_plaintext_size: Maximum size of the decompressed plaintext in bytes.
    """

    message_block_types: tuple[str, ...] = ("Message", "PGP MESSAGE")
    private_key_block_type: str = "PGP PRIVATE KEY BLOCK"
    require_checksum: bool = False
    max_key_size: int = 1 * _MIB
    max_ciphertext_size: int = 64 * _MIB
    max_plaintext_size: int = 256 * _MIB

    def __post_init__(self) -> None:
        if not self.message_block_types:
            msg = "message_block_types must not be empty"
            raise ValueError(msg)
        if not self.private_key_block_type:
            msg = "private_key_block_type must not be empty"
            raise ValueError(msg)
        if self.max_key_size <= 0:
            msg = "max_key_size must be positive"
            raise ValueError(msg)
        if self.max_ciphertext_size <= 0:
            msg = "max_ciphertext_size must be positive"
            raise ValueError(msg)
        if self.max_plaintext_size <= 0:
            msg = "max_plaintext_size must be positive"
            raise ValueError(msg)


DEFAULT_CONFIG = DecryptConfig()
