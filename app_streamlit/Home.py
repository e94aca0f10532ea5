# --------------------------------------------------------------
# File: Home.py
# Description: Define la página principal de Streamlit con el resumen del flujo.
# --------------------------------------------------------------

import streamlit as st

from api.services import configure_logging
from filecrypt import config

configure_logging()

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="File Crypt", page_icon="🔐", layout="centered")

# Presenta el nombre del producto y su propósito general.
st.title("🔐 File Crypt")
st.write(
    "Cifrado de archivos en reposo con AES-CBC: cada archivo lleva su propio IV "
    "en la cabecera y se renombra con un sufijo."
)
st.caption(f"Equipo: {config.HOST_ID} · Sufijo por defecto: {config.SUFFIX}")
st.info("Primero ve a **Generar Clave** y guarda la clave: sin ella no podrás descifrar.")
st.warning("AES-CBC no detecta manipulaciones: este cifrado no ofrece integridad.")
