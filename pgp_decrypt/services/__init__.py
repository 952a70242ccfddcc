"""
Caller-facing services for pgp_decrypt.
"""

from pgp_decrypt.services.decrypt_service import DecryptService, decrypt_data

__all__ = [
    "DecryptService",
    "decrypt_data",
]
