# --------------------------------------------------------------
# File: pipeline.py
# Description: Cifrado y descifrado de un archivo en flujo con cabecera de IV.
# --------------------------------------------------------------
"""Transforma un archivo bloque a bloque a través del códec AES-CBC.

El archivo de salida se confirma solo si toda la transformación termina; ante
cualquier fallo se cierran los manejadores y se elimina la salida parcial,
dejando intacto el archivo de entrada.
"""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, Optional, Protocol, Tuple, Union

from filecrypt.codec import DecryptTransform, EncryptTransform, KeyLike, configure
from filecrypt.errors import (
    AlreadyProcessedError,
    ConfigurationError,
    DecryptionError,
    EncryptionError,
    FileIOError,
    NotEncryptedError,
    OperationCancelledError,
)
from filecrypt.models import (
    BLOCK_SIZE,
    EncryptedFileHeader,
    FileRecord,
    InitializationVector,
)

__all__ = ["decrypt_file", "encrypt_file"]

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class StopFlag(Protocol):
    """Señal de cancelación cooperativa, compatible con ``threading.Event``."""

    def is_set(self) -> bool: ...


def _normalize_path(path: PathLike) -> str:
    """Devuelve la ruta como ``str``, decodificando rutas en bytes.

    Raises:
        FileIOError: Si el valor no es una ruta.
    """

    try:
        return os.fsdecode(path)
    except TypeError as exc:
        raise FileIOError(f"ruta inválida: {path!r}") from exc


def _check_options(suffix: str, read_size: int) -> None:
    if not isinstance(suffix, str) or not suffix:
        raise ConfigurationError("el sufijo no puede estar vacío")
    if isinstance(read_size, bool) or not isinstance(read_size, int) or read_size <= 0:
        raise ConfigurationError(f"tamaño de lectura inválido: {read_size!r}")


def _open_pair(record: FileRecord) -> Tuple[BinaryIO, BinaryIO]:
    """Abre la entrada en lectura y la salida en escritura (truncando)."""

    # ValueError: la ruta contiene un byte nulo.
    try:
        source = open(record.source, "rb")
    except (OSError, ValueError) as exc:
        raise FileIOError(f"no se puede abrir {record.source!r}: {exc}") from exc
    if os.path.exists(record.target):
        logger.warning(
            "%s ya existe: se sobrescribe y, si la operación falla, se elimina",
            record.target,
        )
    try:
        target = open(record.target, "wb")
    except (OSError, ValueError) as exc:
        source.close()
        raise FileIOError(f"no se puede crear {record.target!r}: {exc}") from exc
    return source, target


def _pump(
    source: BinaryIO,
    target: BinaryIO,
    transform: Union[EncryptTransform, DecryptTransform],
    read_size: int,
    stop_flag: Optional[StopFlag],
) -> None:
    """Pasa cada lectura (incluida la de 0 bytes) por la transformación y la finaliza."""

    while True:
        if stop_flag is not None and stop_flag.is_set():
            raise OperationCancelledError("operación cancelada por el llamador")
        chunk = source.read(read_size)
        target.write(transform.update(chunk))
        if not chunk:
            break
    target.write(transform.finalize())


def _discard_partial(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("No se pudo eliminar la salida parcial %s: %s", path, exc)
    else:
        logger.debug("Salida parcial eliminada: %s", path)


def _remove_committed_source(path: str, reason: str) -> None:
    try:
        os.remove(path)
    except OSError as exc:
        logger.warning("No se pudo eliminar %s (%s): %s", path, reason, exc)


def encrypt_file(
    path: PathLike,
    key: KeyLike,
    suffix: str,
    *,
    read_size: int = BLOCK_SIZE,
    delete_source: bool = False,
    stop_flag: Optional[StopFlag] = None,
) -> str:
    """Cifra ``path`` en ``path + suffix`` con un IV nuevo.

    Args:
        path (PathLike): Archivo en claro.
        key (KeyLike): Clave AES (tipada, bytes o Base64).
        suffix (str): Sufijo que identifica los archivos cifrados.
        read_size (int): Bytes solicitados en cada lectura.
        delete_source (bool): Elimina el archivo en claro tras confirmar la salida.
        stop_flag (Optional[StopFlag]): Señal de cancelación comprobada entre bloques.

    Returns:
        str: Ruta del archivo cifrado.

    Raises:
        AlreadyProcessedError: Si el nombre ya termina en ``suffix``.
        ConfigurationError: Si la clave o las opciones no son válidas.
        FileIOError: Si no se puede abrir la entrada o crear la salida.
        EncryptionError: Ante cualquier fallo posterior; la salida parcial se elimina.

    """

    path = _normalize_path(path)
    _check_options(suffix, read_size)
    if FileRecord.has_suffix(path, suffix):
        raise AlreadyProcessedError(f"{path} ya termina en {suffix}")
    codec = configure(key)
    record = FileRecord.for_encryption(path, suffix)

    source, target = _open_pair(record)
    try:
        # La salida se cierra antes que la entrada.
        with source, target:
            header = EncryptedFileHeader(iv=InitializationVector.random())
            target.write(header.pack())
            _pump(source, target, codec.new_encryptor(header.iv), read_size, stop_flag)
    except Exception as exc:
        _discard_partial(record.target)
        if isinstance(exc, EncryptionError):
            raise
        raise EncryptionError(f"fallo cifrando {path}: {exc}") from exc
    except BaseException:
        _discard_partial(record.target)
        raise

    logger.debug("Cifrado %s -> %s", record.source, record.target)
    if delete_source:
        _remove_committed_source(record.source, "origen en claro")
    return record.target


def decrypt_file(
    path: PathLike,
    key: KeyLike,
    suffix: str,
    *,
    read_size: int = BLOCK_SIZE,
    stop_flag: Optional[StopFlag] = None,
) -> str:
    """Descifra ``path`` en la ruta sin sufijo y elimina el archivo cifrado.

    Si la ruta sin sufijo ya existe (por ejemplo, el claro conservado tras
    cifrar), se trunca al abrirla; cuando el descifrado falla, ese archivo se
    trata como salida parcial y se elimina. Se registra un aviso antes de
    sobrescribirlo.

    Raises:
        NotEncryptedError: Si el nombre no termina en ``suffix``.
        ConfigurationError: Si la clave o las opciones no son válidas.
        FileIOError: Si no se puede abrir la entrada o crear la salida.
        CorruptHeaderError: Si la cabecera del IV está dañada.
        PaddingError: Si el relleno final es inválido.
        DecryptionError: Ante cualquier otro fallo a mitad de flujo.

    """

    path = _normalize_path(path)
    _check_options(suffix, read_size)
    if not FileRecord.can_strip_suffix(path, suffix):
        raise NotEncryptedError(f"{path} no termina en {suffix}")
    codec = configure(key)
    record = FileRecord.for_decryption(path, suffix)

    source, target = _open_pair(record)
    try:
        with source, target:
            header = EncryptedFileHeader.read_from(source)
            _pump(source, target, codec.new_decryptor(header.iv), read_size, stop_flag)
    except Exception as exc:
        _discard_partial(record.target)
        if isinstance(exc, DecryptionError):
            raise
        raise DecryptionError(f"fallo descifrando {path}: {exc}") from exc
    except BaseException:
        _discard_partial(record.target)
        raise

    logger.debug("Descifrado %s -> %s", record.source, record.target)
    _remove_committed_source(record.source, "archivo cifrado")
    return record.target
