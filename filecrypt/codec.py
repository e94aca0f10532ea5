# --------------------------------------------------------------
# File: codec.py
# Description: Transformaciones AES-CBC con relleno PKCS#7 en flujo.
# --------------------------------------------------------------
"""Envoltorio sobre ``cryptography`` fijado a AES-CBC con bloques de 128 bits."""

from __future__ import annotations

from typing import Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from filecrypt.errors import DecryptionError, PaddingError, TransformFinalizedError
from filecrypt.models import (
    BLOCK_SIZE,
    InitializationVector,
    SymmetricKey,
)

__all__ = ["CodecHandle", "DecryptTransform", "EncryptTransform", "configure"]

KeyLike = Union[SymmetricKey, bytes, bytearray, str]


class _Transform:
    """Estado común: una transformación se finaliza exactamente una vez."""

    def __init__(self) -> None:
        self._finalized = False

    def _ensure_open(self) -> None:
        if self._finalized:
            raise TransformFinalizedError("la transformación ya fue finalizada")

    @property
    def finalized(self) -> bool:
        return self._finalized


class EncryptTransform(_Transform):
    """Cifra bloques en orden, rellenando el bloque final al finalizar."""

    def __init__(self, key: SymmetricKey, iv: InitializationVector) -> None:
        super().__init__()
        cipher = Cipher(algorithms.AES(key.material), modes.CBC(iv.value))
        self._encryptor = cipher.encryptor()
        self._padder = padding.PKCS7(BLOCK_SIZE * 8).padder()

    def update(self, data: bytes) -> bytes:
        """Añade datos en claro y devuelve los bloques cifrados completos."""

        self._ensure_open()
        return self._encryptor.update(self._padder.update(data))

    def finalize(self) -> bytes:
        """Rellena y cifra el último bloque; la transformación queda terminada."""

        self._ensure_open()
        self._finalized = True
        tail = self._padder.finalize()
        return self._encryptor.update(tail) + self._encryptor.finalize()


class DecryptTransform(_Transform):
    """Descifra bloques en orden y elimina el relleno al finalizar."""

    def __init__(self, key: SymmetricKey, iv: InitializationVector) -> None:
        super().__init__()
        cipher = Cipher(algorithms.AES(key.material), modes.CBC(iv.value))
        self._decryptor = cipher.decryptor()
        self._unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()

    def update(self, data: bytes) -> bytes:
        self._ensure_open()
        return self._unpadder.update(self._decryptor.update(data))

    def finalize(self) -> bytes:
        """Comprueba el relleno del último bloque y devuelve el resto en claro.

        Raises:
            DecryptionError: Si el cuerpo no es múltiplo del tamaño de bloque.
            PaddingError: Si el relleno PKCS#7 es estructuralmente inválido.

        """

        self._ensure_open()
        self._finalized = True
        try:
            tail = self._decryptor.finalize()
        except ValueError as exc:
            raise DecryptionError(
                "el texto cifrado no es múltiplo del tamaño de bloque"
            ) from exc
        try:
            return self._unpadder.update(tail) + self._unpadder.finalize()
        except ValueError as exc:
            raise PaddingError(
                "relleno inválido: clave incorrecta o datos dañados"
            ) from exc


class CodecHandle:
    """Clave validada a partir de la cual se crean transformaciones por archivo."""

    def __init__(self, key: SymmetricKey) -> None:
        self._key = key

    @property
    def key(self) -> SymmetricKey:
        return self._key

    def new_encryptor(self, iv: InitializationVector) -> EncryptTransform:
        return EncryptTransform(self._key, iv)

    def new_decryptor(self, iv: InitializationVector) -> DecryptTransform:
        return DecryptTransform(self._key, iv)


def configure(key: KeyLike) -> CodecHandle:
    """Prepara el códec AES-CBC para la clave indicada.

    Args:
        key (KeyLike): Clave tipada, bytes crudos o texto Base64.

    Returns:
        CodecHandle: Manejador listo para crear cifradores y descifradores.

    Raises:
        ConfigurationError: Si la clave no mide 16, 24 o 32 bytes.

    """

    if isinstance(key, SymmetricKey):
        return CodecHandle(key)
    if isinstance(key, str):
        return CodecHandle(SymmetricKey.from_base64(key))
    return CodecHandle(SymmetricKey.from_bytes(key))
