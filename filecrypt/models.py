# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos de claves, IV, cabeceras y resultados de lote.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan las estructuras del cifrado de archivos."""

from __future__ import annotations

import base64
import binascii
import os
import struct
from typing import BinaryIO, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from filecrypt.errors import ConfigurationError, CorruptHeaderError

BLOCK_SIZE = 16
KEY_SIZES = (16, 24, 32)

# Longitud del IV: entero sin signo de 4 bytes en little-endian.
_IV_LENGTH = struct.Struct("<I")


class SymmetricKey(BaseModel):
    """Clave simétrica AES de 128, 192 o 256 bits.

    Attributes:
        material (bytes): Bytes crudos de la clave.

    """

    model_config = ConfigDict(frozen=True)

    material: bytes

    @field_validator("material")
    @classmethod
    def _check_length(cls, value: bytes) -> bytes:
        if len(value) not in KEY_SIZES:
            raise ValueError(
                f"la clave debe medir 16, 24 o 32 bytes, no {len(value)}"
            )
        return value

    @classmethod
    def from_bytes(cls, raw: bytes) -> "SymmetricKey":
        """Construye la clave validando su longitud.

        Args:
            raw (bytes): Bytes crudos de la clave.

        Returns:
            SymmetricKey: Clave inmutable validada.

        Raises:
            ConfigurationError: Si la longitud no corresponde a AES.

        """

        if not isinstance(raw, (bytes, bytearray)):
            raise ConfigurationError("la clave debe ser una secuencia de bytes")
        try:
            return cls(material=bytes(raw))
        except ValidationError as exc:
            raise ConfigurationError(
                f"tamaño de clave no soportado: {len(raw)} bytes"
            ) from exc

    @classmethod
    def from_base64(cls, text: str) -> "SymmetricKey":
        """Decodifica una clave en Base64 estándar."""

        try:
            raw = base64.b64decode(text.strip(), validate=True)
        except (binascii.Error, ValueError, AttributeError) as exc:
            raise ConfigurationError("la clave no es Base64 válido") from exc
        return cls.from_bytes(raw)

    def to_base64(self) -> str:
        return base64.b64encode(self.material).decode("ascii")

    @property
    def bits(self) -> int:
        return len(self.material) * 8

    def __repr__(self) -> str:
        return f"SymmetricKey(bits={self.bits})"

    __str__ = __repr__


class InitializationVector(BaseModel):
    """Vector de inicialización de exactamente un bloque (16 bytes)."""

    model_config = ConfigDict(frozen=True)

    value: bytes

    @field_validator("value")
    @classmethod
    def _check_length(cls, value: bytes) -> bytes:
        if len(value) != BLOCK_SIZE:
            raise ValueError(f"el IV debe medir {BLOCK_SIZE} bytes, no {len(value)}")
        return value

    @classmethod
    def random(cls) -> "InitializationVector":
        """Genera un IV nuevo con el CSPRNG del sistema."""

        return cls(value=os.urandom(BLOCK_SIZE))


class EncryptedFileHeader(BaseModel):
    """Cabecera de un archivo cifrado: longitud del IV seguida del IV.

    Attributes:
        iv (InitializationVector): IV utilizado para cifrar el cuerpo.

    """

    model_config = ConfigDict(frozen=True)

    iv: InitializationVector

    def pack(self) -> bytes:
        """Serializa la cabecera en su formato binario."""

        return _IV_LENGTH.pack(len(self.iv.value)) + self.iv.value

    @classmethod
    def read_from(cls, handle: BinaryIO) -> "EncryptedFileHeader":
        """Lee y valida la cabecera desde el inicio de un archivo abierto.

        Args:
            handle (BinaryIO): Archivo abierto en modo binario y posicionado al inicio.

        Returns:
            EncryptedFileHeader: Cabecera con el IV recuperado.

        Raises:
            CorruptHeaderError: Si faltan bytes o la longitud declarada no es un bloque.

        """

        length_field = handle.read(_IV_LENGTH.size)
        if len(length_field) != _IV_LENGTH.size:
            raise CorruptHeaderError(
                f"cabecera truncada: {len(length_field)} de {_IV_LENGTH.size} bytes"
            )
        (iv_length,) = _IV_LENGTH.unpack(length_field)
        if iv_length != BLOCK_SIZE:
            raise CorruptHeaderError(
                f"longitud de IV declarada {iv_length}, se esperaba {BLOCK_SIZE}"
            )
        iv = handle.read(iv_length)
        if len(iv) != iv_length:
            raise CorruptHeaderError(f"IV truncado: {len(iv)} de {iv_length} bytes")
        return cls(iv=InitializationVector(value=iv))


class FileRecord(BaseModel):
    """Ruta de entrada y ruta de salida derivada por el sufijo."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str

    @staticmethod
    def has_suffix(path: str, suffix: str) -> bool:
        """Indica si el nombre del archivo termina en el sufijo."""

        return os.path.basename(path).endswith(suffix)

    @staticmethod
    def can_strip_suffix(path: str, suffix: str) -> bool:
        """Como ``has_suffix``, pero exige que quede un nombre tras quitar el sufijo."""

        name = os.path.basename(path)
        return name.endswith(suffix) and len(name) > len(suffix)

    @classmethod
    def for_encryption(cls, path: str, suffix: str) -> "FileRecord":
        return cls(source=path, target=path + suffix)

    @classmethod
    def for_decryption(cls, path: str, suffix: str) -> "FileRecord":
        return cls(source=path, target=path[: -len(suffix)])


class FileOutcome(BaseModel):
    """Resultado etiquetado del procesamiento de un archivo.

    Attributes:
        path (str): Archivo de entrada.
        output_path (Optional[str]): Archivo generado si la operación tuvo éxito.
        error_kind (Optional[str]): Etiqueta ``kind`` del error, si lo hubo.
        reason (Optional[str]): Mensaje legible del error.

    """

    path: str
    output_path: Optional[str] = None
    error_kind: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None


class Summary(BaseModel):
    """Resumen de una ejecución por lotes.

    Attributes:
        host (str): Identificador del equipo proporcionado por el llamador.
        key (str): Clave utilizada, en Base64.
        succeeded_paths (List[str]): Rutas de salida generadas, en orden de entrada.
        failures (List[FileOutcome]): Archivos que fallaron, en orden de entrada.

    """

    host: str
    key: str
    succeeded_paths: List[str] = []
    failures: List[FileOutcome] = []
