# --------------------------------------------------------------
# File: keygen.py
# Description: Generación de claves simétricas aleatorias.
# --------------------------------------------------------------
"""Generador de claves AES codificadas en Base64."""

import os

from filecrypt.errors import ConfigurationError
from filecrypt.models import SymmetricKey

SUPPORTED_BITS = (128, 192, 256)


def generate_key_material(bit_length: int) -> SymmetricKey:
    """Genera una clave aleatoria con el CSPRNG del sistema.

    Args:
        bit_length (int): Tamaño en bits (128, 192 o 256).

    Returns:
        SymmetricKey: Clave inmutable recién generada.

    Raises:
        ConfigurationError: Si el tamaño no es aceptado por AES.

    """

    if isinstance(bit_length, bool) or bit_length not in SUPPORTED_BITS:
        raise ConfigurationError(
            f"tamaño de clave no soportado: {bit_length!r} (usa 128, 192 o 256)"
        )
    return SymmetricKey.from_bytes(os.urandom(bit_length // 8))


def generate_key(bit_length: int) -> str:
    """Genera una clave aleatoria y la devuelve en Base64."""

    return generate_key_material(bit_length).to_base64()
