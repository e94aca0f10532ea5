# --------------------------------------------------------------
# File: test_codec.py
# Description: Pruebas de las transformaciones AES-CBC en flujo.
# --------------------------------------------------------------

import os

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from filecrypt.codec import configure
from filecrypt.errors import (
    ConfigurationError,
    DecryptionError,
    PaddingError,
    TransformFinalizedError,
)
from filecrypt.models import InitializationVector, SymmetricKey


def _encrypt_in_pieces(handle, iv, data, piece):
    transform = handle.new_encryptor(iv)
    out = b""
    for start in range(0, len(data), piece):
        out += transform.update(data[start : start + piece])
    return out + transform.finalize()


def test_configure_rejects_bad_key_sizes():
    """Comprueba que configure rechace claves con longitudes no soportadas.

    Returns:
        None: Se espera ConfigurationError.
    """
    with pytest.raises(ConfigurationError):
        configure(os.urandom(15))
    with pytest.raises(ConfigurationError):
        configure("")


def test_configure_accepts_bytes_base64_and_typed_key():
    raw = os.urandom(24)
    typed = SymmetricKey.from_bytes(raw)
    assert configure(raw).key == typed
    assert configure(typed.to_base64()).key == typed
    assert configure(typed).key is typed


@pytest.mark.parametrize("length", [0, 1, 15, 16, 17, 100])
def test_stream_roundtrip_and_block_alignment(length):
    """Verifica el cifrado por trozos, el relleno y el descifrado completo.

    Returns:
        None: Las aserciones validan la alineación y la igualdad del claro.
    """
    handle = configure(os.urandom(32))
    iv = InitializationVector.random()
    data = os.urandom(length)

    ciphertext = _encrypt_in_pieces(handle, iv, data, 7)
    assert len(ciphertext) % 16 == 0
    assert len(ciphertext) == (length // 16 + 1) * 16

    decryptor = handle.new_decryptor(iv)
    recovered = decryptor.update(ciphertext[:5]) + decryptor.update(ciphertext[5:])
    recovered += decryptor.finalize()
    assert recovered == data


def test_matches_reference_cbc():
    """El cifrado coincide con AES-CBC estándar sobre datos ya rellenados."""
    key = os.urandom(16)
    iv = InitializationVector.random()
    data = b"A" * 16
    reference = Cipher(algorithms.AES(key), modes.CBC(iv.value)).encryptor()
    expected = reference.update(data + bytes([16]) * 16) + reference.finalize()
    assert _encrypt_in_pieces(configure(key), iv, data, 16) == expected


def test_finalize_twice_is_an_error():
    """Garantiza que finalizar dos veces o escribir tras finalizar falle.

    Returns:
        None: Se espera TransformFinalizedError.
    """
    handle = configure(os.urandom(16))
    transform = handle.new_encryptor(InitializationVector.random())
    transform.update(b"abc")
    transform.finalize()
    assert transform.finalized
    with pytest.raises(TransformFinalizedError):
        transform.finalize()
    with pytest.raises(TransformFinalizedError):
        transform.update(b"more")


def test_invalid_padding_raises_padding_error():
    """Un bloque cuyo último byte es 0 no tiene relleno PKCS#7 válido."""
    key = os.urandom(32)
    iv = InitializationVector.random()
    raw = Cipher(algorithms.AES(key), modes.CBC(iv.value)).encryptor()
    ciphertext = raw.update(b"B" * 15 + b"\x00") + raw.finalize()

    decryptor = configure(key).new_decryptor(iv)
    decryptor.update(ciphertext)
    with pytest.raises(PaddingError):
        decryptor.finalize()


def test_misaligned_ciphertext_raises_decryption_error():
    decryptor = configure(os.urandom(32)).new_decryptor(InitializationVector.random())
    decryptor.update(os.urandom(20))
    with pytest.raises(DecryptionError):
        decryptor.finalize()
