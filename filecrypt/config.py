# --------------------------------------------------------------
# File: config.py
# Description: Parámetros de ejecución leídos del entorno y de un fichero .env.
# --------------------------------------------------------------
"""Valores por defecto del llamador; el núcleo nunca lee el entorno directamente."""

import os
import socket

from dotenv import load_dotenv

load_dotenv()

KEY_BITS = os.getenv("FILECRYPT_KEY_BITS", "256")
SUFFIX = os.getenv("FILECRYPT_SUFFIX", ".crypto")
READ_SIZE = os.getenv("FILECRYPT_READ_SIZE", "16")
DELETE_SOURCE = os.getenv("FILECRYPT_DELETE_SOURCE", "false").strip().lower() in {
    "1",
    "true",
    "yes",
    "on",
}
HOST_ID = os.getenv("FILECRYPT_HOST_ID") or socket.gethostname()
LOG_LEVEL = os.getenv("FILECRYPT_LOG_LEVEL", "INFO").upper()
