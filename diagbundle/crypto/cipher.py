"""Password based file encryption for diagnostic bundles.

The key is the SHA-256 digest of the password and the cipher is AES-256 in
output feedback mode with an all-zero IV. OFB turns AES into a keystream that
is XORed with the data, so the same operation both encrypts and decrypts and
the output has exactly the length of the input. The container is raw
ciphertext: no header, salt or IV is stored.

Every file encrypted with the same password reuses the same keystream. This
keeps existing ``.aes`` bundles readable; a random per-file IV would break
that compatibility.
"""

import hashlib
import os
from pathlib import Path

from cryptography.hazmat.primitives.ciphers import Cipher, CipherContext, algorithms, modes

from diagbundle.exceptions import BundleIOError, CipherInitError
from diagbundle.logging.logger import Log

KEY_SIZE = 32
ZERO_IV = bytes(algorithms.AES.block_size // 8)
CHUNK_SIZE = 64 * 1024


def derive_key(password: str) -> bytes:
    """Fixed-length key from a password of any length."""
    return hashlib.sha256(password.encode("utf-8")).digest()


class FileCipher:
    """AES-OFB stream transform with a fixed key and a zero IV."""

    def __init__(self, key: bytes) -> None:
        self._key = key
        # Fail at construction rather than halfway through a file.
        self._new_context()

    @classmethod
    def from_password(cls, password: str) -> "FileCipher":
        return cls(derive_key(password))

    def transform(self, data: bytes) -> bytes:
        context = self._new_context()
        return context.update(data) + context.finalize()

    def transform_file(self, input_path: Path, output_path: Path) -> int:
        """Stream *input_path* through the cipher into *output_path*.

        The output is created with mode 0600, truncated if it exists. The
        input is only read.

        Returns:
            Number of bytes written.

        Raises:
            BundleIOError: if the input cannot be read or the output cannot
                be created or written.
        """
        if input_path.resolve() == output_path.resolve():
            raise BundleIOError("use the input file as output", output_path)

        context = self._new_context()
        try:
            src = input_path.open("rb")
        except OSError as exc:
            raise BundleIOError("open for reading", input_path, exc) from exc

        with src:
            try:
                fd = os.open(output_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            except OSError as exc:
                raise BundleIOError("open for writing", output_path, exc) from exc

            total = 0
            try:
                with os.fdopen(fd, "wb") as dst:
                    for chunk in iter(lambda: src.read(CHUNK_SIZE), b""):
                        total += dst.write(context.update(chunk))
                    total += dst.write(context.finalize())
            except OSError as exc:
                raise BundleIOError("write", output_path, exc) from exc
        return total

    def _new_context(self) -> CipherContext:
        try:
            cipher = Cipher(algorithms.AES(self._key), modes.OFB(ZERO_IV))
        except (TypeError, ValueError) as exc:
            raise CipherInitError(f"Cannot create the cipher: {exc}") from exc
        return cipher.encryptor()


def encrypt_file(input_path: Path, output_path: Path, password: str) -> int:
    """Encrypt *input_path* into *output_path* with a password-derived key."""
    Log.info(f"Encrypting {input_path} into {output_path}")
    return FileCipher.from_password(password).transform_file(input_path, output_path)


def decrypt_file(input_path: Path, output_path: Path, password: str) -> int:
    """Reverse :func:`encrypt_file`; OFB decryption is the same keystream XOR."""
    Log.info(f"Decrypting {input_path} into {output_path}")
    return FileCipher.from_password(password).transform_file(input_path, output_path)
