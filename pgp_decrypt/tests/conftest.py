import gzip
from collections.abc import Callable

import pgpy
import pytest
from pgpy.constants import (
    CompressionAlgorithm,
    HashAlgorithm,
    KeyFlags,
    PubKeyAlgorithm,
    SymmetricKeyAlgorithm,
)

from pgp_decrypt.crypto.armor import encode_armor


def create_test_key(name: str = "Test User") -> pgpy.PGPKey:
    key = pgpy.PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, 2048)
    uid = pgpy.PGPUID.new(name, comment="test", email="test@test.com")
    key.add_uid(
        uid,
        usage={KeyFlags.Sign, KeyFlags.EncryptCommunications, KeyFlags.EncryptStorage},
        hashes=[HashAlgorithm.SHA256],
        ciphers=[SymmetricKeyAlgorithm.AES256],
        compression=[CompressionAlgorithm.Uncompressed],
    )
    return key


@pytest.fixture(scope="session")
def pgp_key() -> pgpy.PGPKey:
    return create_test_key()


@pytest.fixture(scope="session")
def other_pgp_key() -> pgpy.PGPKey:
    return create_test_key("Other User")


@pytest.fixture(scope="session")
def protected_pgp_key() -> pgpy.PGPKey:
    key = create_test_key("Protected User")
    key.protect("passphrase", SymmetricKeyAlgorithm.AES256, HashAlgorithm.SHA256)
    return key


@pytest.fixture(scope="session")
def armored_private_key(pgp_key: pgpy.PGPKey) -> str:
    return str(pgp_key)


@pytest.fixture
def encrypt_binary(pgp_key: pgpy.PGPKey) -> Callable[..., bytes]:
    """Encrypt ``payload`` as-is and return the binary packet stream."""

    def _encrypt(
        payload: bytes,
        *,
        recipient: pgpy.PGPKey | None = None,
        signer: pgpy.PGPKey | None = None,
    ) -> bytes:
        message = pgpy.PGPMessage.new(payload, format="b")
        if signer is not None:
            message |= signer.sign(message)
        encrypted = (recipient or pgp_key).pubkey.encrypt(message)
        return bytes(encrypted)

    return _encrypt


@pytest.fixture
def encrypt_armored(encrypt_binary: Callable[..., bytes]) -> Callable[..., str]:
    """Gzip ``plaintext``, encrypt it and armor it the way the companion encryptor does."""

    def _encrypt(
        plaintext: bytes,
        *,
        block_type: str = "Message",
        compress: bool = True,
        **kwargs: pgpy.PGPKey,
    ) -> str:
        payload = gzip.compress(plaintext) if compress else plaintext
        return encode_armor(block_type, encrypt_binary(payload, **kwargs))

    return _encrypt
