# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del cifrado de archivos en reposo.
# --------------------------------------------------------------
"""Excepciones tipadas que clasifican cada fallo por archivo.

Cada clase expone un atributo ``kind`` corto que la capa de lotes utiliza
para construir resultados etiquetados sin depender del tipo concreto.
"""

__all__ = [
    "AlreadyProcessedError",
    "ConfigurationError",
    "CorruptHeaderError",
    "DecryptionError",
    "EncryptionError",
    "FileCryptError",
    "FileIOError",
    "NotEncryptedError",
    "OperationCancelledError",
    "PaddingError",
    "TransformFinalizedError",
]


class FileCryptError(Exception):
    """Error base de todas las operaciones de cifrado de archivos."""

    kind = "error"


class ConfigurationError(FileCryptError, ValueError):
    """Clave, tamaño de clave o parámetro de configuración inválido."""

    kind = "configuration"


class FileIOError(FileCryptError, OSError):
    """No se pudo abrir, leer o escribir un archivo."""

    kind = "io"


class AlreadyProcessedError(FileCryptError):
    """El archivo ya lleva el sufijo de cifrado."""

    kind = "already_processed"


class NotEncryptedError(FileCryptError):
    """El archivo no lleva el sufijo de cifrado."""

    kind = "not_encrypted"


class EncryptionError(FileCryptError):
    """Fallo durante el cifrado de un archivo (salida parcial eliminada)."""

    kind = "encryption"


class DecryptionError(FileCryptError):
    """Fallo durante el descifrado de un archivo (salida parcial eliminada)."""

    kind = "decryption"


class CorruptHeaderError(DecryptionError):
    """La cabecera del IV está truncada o declara una longitud distinta al bloque."""

    kind = "corrupt_header"


class PaddingError(DecryptionError):
    """El relleno PKCS#7 del último bloque no es válido (clave errónea o datos dañados)."""

    kind = "padding"


class TransformFinalizedError(FileCryptError, RuntimeError):
    """Se usó una transformación que ya había sido finalizada."""

    kind = "finalized"


class OperationCancelledError(FileCryptError):
    """La operación se detuvo a petición del llamador."""

    kind = "cancelled"
