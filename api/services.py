# --------------------------------------------------------------
# File: services.py
# Description: Operaciones expuestas a la CLI, la interfaz y la orquestación.
# --------------------------------------------------------------
"""Funciones de la capa de servicios que aplican la configuración del llamador."""

import logging
from typing import Iterable, Optional

from filecrypt import config
from filecrypt.batch import Operation, run_batch
from filecrypt.errors import ConfigurationError
from filecrypt.keygen import generate_key as _generate_key
from filecrypt.models import Summary
from filecrypt.pipeline import PathLike, StopFlag


def _positive_int(name: str, value: str) -> int:
    """Convierte un parámetro de configuración en un entero positivo.

    Args:
        name (str): Nombre del parámetro, usado en el mensaje de error.
        value (str): Valor leído del entorno.

    Returns:
        int: Valor convertido.

    Raises:
        ConfigurationError: Si el valor no es un entero positivo.
    """

    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} debe ser un entero: {value!r}") from exc
    if number <= 0:
        raise ConfigurationError(f"{name} debe ser positivo: {number}")
    return number


def configure_logging(level: Optional[str] = None) -> None:
    """Configura el registro raíz con el nivel de ``FILECRYPT_LOG_LEVEL``.

    Args:
        level (Optional[str]): Nivel explícito que sustituye al configurado.
    """

    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def generate_key(bits: Optional[int] = None) -> str:
    """Genera una clave aleatoria en Base64.

    Args:
        bits (Optional[int]): Tamaño en bits; por defecto ``FILECRYPT_KEY_BITS``.

    Returns:
        str: Clave codificada en Base64 lista para mostrarse o copiarse.
    """

    if bits is None:
        bits = _positive_int("FILECRYPT_KEY_BITS", config.KEY_BITS)
    return _generate_key(bits)


def _run(
    operation: Operation,
    paths: Iterable[PathLike],
    key: str,
    suffix: Optional[str],
    delete_source: bool,
    stop_flag: Optional[StopFlag],
) -> Summary:
    return run_batch(
        operation,
        paths,
        key,
        suffix if suffix is not None else config.SUFFIX,
        host=config.HOST_ID,
        read_size=_positive_int("FILECRYPT_READ_SIZE", config.READ_SIZE),
        delete_source=delete_source,
        stop_flag=stop_flag,
    )


def encrypt_files(
    paths: Iterable[PathLike],
    key: str,
    suffix: Optional[str] = None,
    *,
    delete_source: Optional[bool] = None,
    stop_flag: Optional[StopFlag] = None,
) -> Summary:
    """Cifra cada archivo de ``paths`` con la clave Base64 indicada.

    Args:
        paths (Iterable[PathLike]): Archivos en claro.
        key (str): Clave en Base64.
        suffix (Optional[str]): Sufijo de salida; por defecto ``FILECRYPT_SUFFIX``.
        delete_source (Optional[bool]): Borrar el claro tras cifrar; por defecto
            ``FILECRYPT_DELETE_SOURCE``.
        stop_flag (Optional[StopFlag]): Señal de cancelación cooperativa.

    Returns:
        Summary: Equipo, clave y rutas cifradas correctamente.
    """

    if delete_source is None:
        delete_source = config.DELETE_SOURCE
    return _run(Operation.ENCRYPT, paths, key, suffix, delete_source, stop_flag)


def decrypt_files(
    paths: Iterable[PathLike],
    key: str,
    suffix: Optional[str] = None,
    *,
    stop_flag: Optional[StopFlag] = None,
) -> Summary:
    """Descifra cada archivo de ``paths``; los cifrados se eliminan tras el éxito.

    Returns:
        Summary: Equipo, clave y rutas descifradas correctamente.
    """

    return _run(Operation.DECRYPT, paths, key, suffix, False, stop_flag)
