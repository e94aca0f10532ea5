# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública de utilidades de cifrado de archivos del paquete filecrypt.
# --------------------------------------------------------------
"""Inicializa el paquete `filecrypt` y documenta sus módulos principales."""

__all__ = [
    "batch",
    "codec",
    "config",
    "errors",
    "keygen",
    "models",
    "pipeline",
]
