"""
Cryptographic pipeline for pgp_decrypt.

This module provides:
- ASCII-armor decoding and encoding
- Private key loading
- Ciphertext normalization
- Message decryption and gzip decompression
"""

from pgp_decrypt.crypto.armor import decode_armor, encode_armor
from pgp_decrypt.crypto.decryptor import decompress_gzip, decrypt
from pgp_decrypt.crypto.key_loader import PrivateKeyEntity, load_private_key
from pgp_decrypt.crypto.message import normalize_ciphertext

__all__ = [
    "PrivateKeyEntity",
    "decode_armor",
    "decompress_gzip",
    "decrypt",
    "encode_armor",
    "load_private_key",
    "normalize_ciphertext",
]
