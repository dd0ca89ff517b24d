import hashlib
import stat
from pathlib import Path

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from diagbundle.crypto.cipher import (
    CHUNK_SIZE,
    FileCipher,
    decrypt_file,
    derive_key,
    encrypt_file,
)
from diagbundle.exceptions import BundleIOError, CipherError, CipherInitError


class TestDeriveKey:
    def test_is_sha256_of_password(self) -> None:
        assert derive_key("secret") == hashlib.sha256(b"secret").digest()

    @pytest.mark.parametrize("password", ["", "x", "p" * 1000, "päss"])
    def test_always_32_bytes(self, password: str) -> None:
        assert len(derive_key(password)) == 32


class TestFileCipher:
    def test_rejects_invalid_key_length(self) -> None:
        with pytest.raises(CipherInitError):
            FileCipher(b"0123456789")

    def test_init_error_is_a_cipher_error(self) -> None:
        assert issubclass(CipherInitError, CipherError)

    def test_keystream_starts_with_encrypted_zero_block(self) -> None:
        key = derive_key("pw")
        ecb = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
        expected = ecb.update(bytes(16)) + ecb.finalize()

        assert FileCipher(key).transform(bytes(16)) == expected

    def test_transform_twice_restores_data(self) -> None:
        cipher = FileCipher.from_password("pw")
        data = b"diagnostic bundle contents" * 10
        assert cipher.transform(cipher.transform(data)) == data

    def test_output_length_equals_input_length(self) -> None:
        cipher = FileCipher.from_password("pw")
        for size in (0, 1, 15, 16, 17, 1000):
            assert len(cipher.transform(b"a" * size)) == size


class TestEncryptDecryptFile:
    def test_round_trip(self, tmp_path: Path) -> None:
        plain = tmp_path / "bundle.tar.gz"
        encrypted = tmp_path / "bundle.aes"
        restored = tmp_path / "restored.tar.gz"
        data = bytes(range(256)) * (CHUNK_SIZE // 256 + 3)
        plain.write_bytes(data)

        assert encrypt_file(plain, encrypted, "pw") == len(data)
        assert decrypt_file(encrypted, restored, "pw") == len(data)

        assert encrypted.read_bytes() != data
        assert restored.read_bytes() == data

    def test_streamed_output_matches_one_shot_transform(self, tmp_path: Path) -> None:
        plain = tmp_path / "in.bin"
        encrypted = tmp_path / "out.aes"
        data = b"x" * (CHUNK_SIZE * 2 + 5)
        plain.write_bytes(data)

        encrypt_file(plain, encrypted, "pw")

        assert encrypted.read_bytes() == FileCipher.from_password("pw").transform(data)

    def test_empty_input_gives_empty_output(self, tmp_path: Path) -> None:
        plain = tmp_path / "empty"
        encrypted = tmp_path / "empty.aes"
        plain.write_bytes(b"")

        assert encrypt_file(plain, encrypted, "pw") == 0
        assert encrypted.read_bytes() == b""

    def test_wrong_password_does_not_restore(self, tmp_path: Path) -> None:
        plain = tmp_path / "in.bin"
        encrypted = tmp_path / "out.aes"
        restored = tmp_path / "restored.bin"
        plain.write_bytes(b"sensitive")

        encrypt_file(plain, encrypted, "right")
        decrypt_file(encrypted, restored, "wrong")

        assert restored.read_bytes() != b"sensitive"

    def test_input_is_left_untouched(self, tmp_path: Path) -> None:
        plain = tmp_path / "in.bin"
        plain.write_bytes(b"keep me")

        encrypt_file(plain, tmp_path / "out.aes", "pw")

        assert plain.read_bytes() == b"keep me"

    def test_output_is_private(self, tmp_path: Path) -> None:
        plain = tmp_path / "in.bin"
        encrypted = tmp_path / "out.aes"
        plain.write_bytes(b"data")

        encrypt_file(plain, encrypted, "pw")

        assert stat.S_IMODE(encrypted.stat().st_mode) & 0o077 == 0

    def test_existing_output_is_truncated(self, tmp_path: Path) -> None:
        plain = tmp_path / "in.bin"
        encrypted = tmp_path / "out.aes"
        plain.write_bytes(b"ab")
        encrypted.write_bytes(b"much longer previous content")

        encrypt_file(plain, encrypted, "pw")

        assert len(encrypted.read_bytes()) == 2


class TestCipherFileErrors:
    def test_missing_input(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.tar.gz"
        with pytest.raises(BundleIOError) as exc_info:
            encrypt_file(missing, tmp_path / "out.aes", "pw")

        assert exc_info.value.operation == "open for reading"
        assert exc_info.value.path == missing
        assert not (tmp_path / "out.aes").exists()

    def test_unwritable_output(self, tmp_path: Path) -> None:
        plain = tmp_path / "in.bin"
        plain.write_bytes(b"data")
        output = tmp_path / "no-such-dir" / "out.aes"

        with pytest.raises(BundleIOError) as exc_info:
            encrypt_file(plain, output, "pw")

        assert exc_info.value.operation == "open for writing"

    def test_refuses_same_input_and_output(self, tmp_path: Path) -> None:
        plain = tmp_path / "in.bin"
        plain.write_bytes(b"data")

        with pytest.raises(BundleIOError):
            encrypt_file(plain, plain, "pw")

        assert plain.read_bytes() == b"data"
