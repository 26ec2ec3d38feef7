"""Stream encryption of the connection and the server's RSA key pair."""

from __future__ import annotations

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

VERIFY_TOKEN_SIZE = 4
SHARED_SECRET_SIZE = 16
RSA_KEY_SIZE = 1024
_PUBLIC_EXPONENT = 65537


class BufferCrypter:
    """AES/CFB8 stream cipher keyed, and seeded, with the shared secret.

    Encryption and decryption each keep their own running state, so data
    must be passed through in the order it travels on the wire.
    """

    def __init__(self, shared_secret: bytes) -> None:
        secret = bytes(shared_secret)
        if len(secret) != SHARED_SECRET_SIZE:
            raise ValueError(
                f"shared secret must be {SHARED_SECRET_SIZE} bytes, got {len(secret)}"
            )
        cipher = Cipher(algorithms.AES(secret), modes.CFB8(secret))
        self._encryptor = cipher.encryptor()
        self._decryptor = cipher.decryptor()

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt the next chunk of outgoing data."""
        return self._encryptor.update(bytes(data))

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt the next chunk of incoming data."""
        return self._decryptor.update(bytes(data))


class RSAKeypair:
    """A freshly generated 1024-bit RSA key pair."""

    def __init__(self) -> None:
        self._private_key = rsa.generate_private_key(
            public_exponent=_PUBLIC_EXPONENT, key_size=RSA_KEY_SIZE
        )

    @property
    def private_key(self) -> rsa.RSAPrivateKey:
        return self._private_key

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self._private_key.public_key()

    def public_key_der(self) -> bytes:
        """The public key as a DER-encoded SubjectPublicKeyInfo."""
        return self.public_key.public_bytes(
            serialization.Encoding.DER,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def decrypt(self, encrypted: bytes) -> bytes:
        """Decrypt PKCS#1 v1.5 ciphertext; raises ValueError if it is invalid."""
        return self._private_key.decrypt(bytes(encrypted), padding.PKCS1v15())