# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar la configuración y crear archivos.
# --------------------------------------------------------------

import importlib
from typing import Iterator

import pytest

from filecrypt.keygen import generate_key


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch) -> Iterator[None]:
    """Fija las variables FILECRYPT_* y recarga filecrypt.config para cada prueba.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    monkeypatch.setenv("FILECRYPT_KEY_BITS", "256")
    monkeypatch.setenv("FILECRYPT_SUFFIX", ".crypto")
    monkeypatch.setenv("FILECRYPT_READ_SIZE", "16")
    monkeypatch.setenv("FILECRYPT_DELETE_SOURCE", "false")
    monkeypatch.setenv("FILECRYPT_HOST_ID", "test-host")
    monkeypatch.setenv("FILECRYPT_LOG_LEVEL", "DEBUG")

    import filecrypt.config as config_module

    importlib.reload(config_module)

    yield


@pytest.fixture
def key() -> str:
    """Clave AES-256 aleatoria en Base64."""
    return generate_key(256)


@pytest.fixture
def plain_file(tmp_path):
    """Archivo en claro de tamaño no alineado a bloque."""
    path = tmp_path / "notes.txt"
    path.write_bytes(b"datos de prueba que ocupan varios bloques AES" * 3)
    return path
