# --------------------------------------------------------------
# File: 2_Cifrar_y_Descifrar.py
# Description: Cifra o descifra rutas locales por lotes y muestra el resumen.
# --------------------------------------------------------------

from typing import List

import streamlit as st

from api.services import configure_logging, decrypt_files, encrypt_files
from filecrypt import config
from filecrypt.errors import ConfigurationError

configure_logging()


def parse_paths(text: str) -> List[str]:
    """Convierte el texto del formulario en una lista de rutas.

    Args:
        text (str): Una ruta por línea; se ignoran las líneas vacías.

    Returns:
        List[str]: Rutas en el orden introducido.
    """
    return [line.strip() for line in text.splitlines() if line.strip()]


st.title("🗂️ Cifrar y descifrar")

key_b64 = st.text_input(
    "Clave (Base64)",
    value=st.session_state.get("key_b64", ""),
    type="password",
)
suffix = st.text_input("Sufijo", value=config.SUFFIX)
paths = parse_paths(st.text_area("Rutas de archivos (una por línea)"))
delete_source = st.checkbox(
    "Eliminar el archivo en claro tras cifrarlo",
    value=config.DELETE_SOURCE,
)

col_enc, col_dec = st.columns(2)
encrypt_clicked = col_enc.button("Cifrar", disabled=not (key_b64 and paths))
decrypt_clicked = col_dec.button("Descifrar", disabled=not (key_b64 and paths))

if encrypt_clicked or decrypt_clicked:
    try:
        if encrypt_clicked:
            summary = encrypt_files(paths, key_b64, suffix, delete_source=delete_source)
        else:
            summary = decrypt_files(paths, key_b64, suffix)
    except ConfigurationError as exc:
        st.error(str(exc))
    else:
        st.success(f"{len(summary.succeeded_paths)} de {len(paths)} archivos procesados.")
        st.markdown("### Archivos generados")
        st.json(summary.succeeded_paths)
        if summary.failures:
            st.markdown("### Fallos")
            st.table(
                [
                    {"ruta": item.path, "tipo": item.error_kind, "motivo": item.reason}
                    for item in summary.failures
                ]
            )
