# --------------------------------------------------------------
# File: batch.py
# Description: Aplicación secuencial del cifrado o descifrado a una lista de archivos.
# --------------------------------------------------------------
"""Ejecuta la tubería por archivo sin que un fallo aislado aborte el lote."""

from __future__ import annotations

import enum
import logging
from typing import Iterable, List, Optional

from filecrypt.codec import KeyLike, configure
from filecrypt.errors import FileCryptError, OperationCancelledError
from filecrypt.models import BLOCK_SIZE, FileOutcome, Summary
from filecrypt.pipeline import PathLike, StopFlag, decrypt_file, encrypt_file

__all__ = ["Operation", "run_batch"]

logger = logging.getLogger(__name__)


class Operation(str, enum.Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


def _process_one(
    operation: Operation,
    path: PathLike,
    key: KeyLike,
    suffix: str,
    read_size: int,
    delete_source: bool,
    stop_flag: Optional[StopFlag],
) -> FileOutcome:
    """Procesa un archivo y convierte cualquier error tipado en un resultado etiquetado."""

    try:
        if operation is Operation.ENCRYPT:
            output = encrypt_file(
                path,
                key,
                suffix,
                read_size=read_size,
                delete_source=delete_source,
                stop_flag=stop_flag,
            )
        else:
            output = decrypt_file(
                path, key, suffix, read_size=read_size, stop_flag=stop_flag
            )
    except FileCryptError as exc:
        logger.warning("Fallo en %s (%s): %s", path, exc.kind, exc)
        return FileOutcome(path=str(path), error_kind=exc.kind, reason=str(exc))
    logger.info("%s: %s -> %s", operation.value, path, output)
    return FileOutcome(path=str(path), output_path=output)


def run_batch(
    operation: Operation,
    files: Iterable[PathLike],
    key: KeyLike,
    suffix: str,
    *,
    host: str,
    read_size: int = BLOCK_SIZE,
    delete_source: bool = False,
    stop_flag: Optional[StopFlag] = None,
) -> Summary:
    """Cifra o descifra cada archivo en orden y resume el resultado.

    Args:
        operation (Operation): Cifrar o descifrar.
        files (Iterable[PathLike]): Archivos a procesar, en orden.
        key (KeyLike): Clave compartida por todo el lote (solo lectura).
        suffix (str): Sufijo que identifica los archivos cifrados.
        host (str): Identificador del equipo que se registra en el resumen.
        read_size (int): Bytes por lectura en la tubería.
        delete_source (bool): Política de borrado del claro tras cifrar.
        stop_flag (Optional[StopFlag]): Cancela entre bloques y entre archivos.

    Returns:
        Summary: Rutas generadas y fallos, en el orden de entrada.

    Raises:
        ConfigurationError: Si la clave no es válida (antes de tocar ningún archivo).

    """

    operation = Operation(operation)
    codec = configure(key)
    succeeded: List[str] = []
    failures: List[FileOutcome] = []

    pending = list(files)
    for index, path in enumerate(pending):
        if stop_flag is not None and stop_flag.is_set():
            cancelled = OperationCancelledError("lote cancelado antes de procesar el archivo")
            for skipped in pending[index:]:
                failures.append(
                    FileOutcome(
                        path=str(skipped),
                        error_kind=cancelled.kind,
                        reason=str(cancelled),
                    )
                )
            logger.warning("Lote cancelado; %d archivos sin procesar", len(pending) - index)
            break
        outcome = _process_one(
            operation, path, codec.key, suffix, read_size, delete_source, stop_flag
        )
        if outcome.ok:
            succeeded.append(outcome.output_path)
        else:
            failures.append(outcome)

    logger.info(
        "%s en %s: %d correctos, %d fallidos",
        operation.value,
        host,
        len(succeeded),
        len(failures),
    )
    return Summary(
        host=host,
        key=codec.key.to_base64(),
        succeeded_paths=succeeded,
        failures=failures,
    )
