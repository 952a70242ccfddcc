"""
Domain models for pgp_decrypt.

These are immutable (frozen) dataclasses and enums shared by the pipeline stages.
"""

from pgp_decrypt.models.armor import ArmorBlock
from pgp_decrypt.models.decrypt import CiphertextEncoding, DecryptedData

__all__ = [
    "ArmorBlock",
    "CiphertextEncoding",
    "DecryptedData",
]
