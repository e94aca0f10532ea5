# --------------------------------------------------------------
# File: test_batch.py
# Description: Pruebas del procesamiento por lotes y del aislamiento de fallos.
# --------------------------------------------------------------

import logging
import threading

import pytest

from filecrypt.batch import Operation, run_batch
from filecrypt.errors import ConfigurationError


def _make_files(tmp_path, names):
    paths = []
    for name in names:
        path = tmp_path / name
        path.write_bytes(f"contenido de {name}".encode())
        paths.append(path)
    return paths


def test_partial_failure_isolation(tmp_path, key, caplog):
    """Un archivo ilegible en medio del lote no aborta el resto.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        key (str): Clave Base64 del fixture compartido.
        caplog (pytest.LogCaptureFixture): Captura del registro de diagnóstico.

    Returns:
        None: Las aserciones validan éxitos, fallos y ausencia de salida parcial.
    """
    first, third = _make_files(tmp_path, ["uno.txt", "tres.txt"])
    unreadable = tmp_path / "dos.txt"
    unreadable.mkdir()

    with caplog.at_level(logging.WARNING, logger="filecrypt.batch"):
        summary = run_batch(
            Operation.ENCRYPT,
            [first, unreadable, third],
            key,
            ".crypto",
            host="equipo-1",
        )

    assert summary.host == "equipo-1"
    assert summary.key == key
    assert summary.succeeded_paths == [str(first) + ".crypto", str(third) + ".crypto"]
    assert [failure.path for failure in summary.failures] == [str(unreadable)]
    assert summary.failures[0].error_kind == "io"
    assert not (tmp_path / "dos.txt.crypto").exists()
    assert str(unreadable) in caplog.text


def test_batch_roundtrip_preserves_order(tmp_path, key):
    """Cifra y descifra un lote conservando el orden de entrada."""
    files = _make_files(tmp_path, ["b.txt", "a.txt", "c.txt"])
    originals = [path.read_bytes() for path in files]

    encrypted = run_batch(Operation.ENCRYPT, files, key, ".crypto", host="h")
    assert encrypted.succeeded_paths == [str(path) + ".crypto" for path in files]
    for path in files:
        path.unlink()

    decrypted = run_batch("decrypt", encrypted.succeeded_paths, key, ".crypto", host="h")
    assert decrypted.succeeded_paths == [str(path) for path in files]
    assert decrypted.failures == []
    assert [path.read_bytes() for path in files] == originals


def test_suffix_guards_are_reported_per_file(tmp_path, key):
    plain, = _make_files(tmp_path, ["plain.txt"])
    done, = _make_files(tmp_path, ["done.txt.crypto"])

    summary = run_batch(Operation.ENCRYPT, [done, plain], key, ".crypto", host="h")
    assert summary.succeeded_paths == [str(plain) + ".crypto"]
    assert summary.failures[0].error_kind == "already_processed"

    summary = run_batch(Operation.DECRYPT, [plain], key, ".crypto", host="h")
    assert summary.succeeded_paths == []
    assert summary.failures[0].error_kind == "not_encrypted"
    assert not summary.failures[0].ok


def test_invalid_key_aborts_before_any_file(tmp_path):
    files = _make_files(tmp_path, ["a.txt"])
    with pytest.raises(ConfigurationError):
        run_batch(Operation.ENCRYPT, files, "AAAA", ".crypto", host="h")
    assert not (tmp_path / "a.txt.crypto").exists()


def test_cancelled_batch_reports_remaining_files(tmp_path, key):
    """Con la señal activada ningún archivo se procesa y todos constan como cancelados."""
    files = _make_files(tmp_path, ["a.txt", "b.txt"])
    stop = threading.Event()
    stop.set()

    summary = run_batch(Operation.ENCRYPT, files, key, ".crypto", host="h", stop_flag=stop)
    assert summary.succeeded_paths == []
    assert [failure.error_kind for failure in summary.failures] == ["cancelled", "cancelled"]
    assert not (tmp_path / "a.txt.crypto").exists()


def test_invalid_path_does_not_abort_batch(tmp_path, key):
    """Una ruta con un byte nulo falla sola; los archivos posteriores se procesan.

    Returns:
        None: Las aserciones validan el fallo aislado y el éxito del resto.
    """
    good, = _make_files(tmp_path, ["bueno.txt"])
    bad = str(tmp_path / "b\x00.txt")

    summary = run_batch(Operation.ENCRYPT, [bad, good], key, ".crypto", host="h")
    assert summary.succeeded_paths == [str(good) + ".crypto"]
    assert [failure.path for failure in summary.failures] == [bad]
    assert summary.failures[0].error_kind == "io"
