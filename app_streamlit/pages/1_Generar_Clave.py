# --------------------------------------------------------------
# File: 1_Generar_Clave.py
# Description: Genera claves simétricas aleatorias desde Streamlit.
# --------------------------------------------------------------

import streamlit as st

from api.services import configure_logging, generate_key
from filecrypt.errors import ConfigurationError

configure_logging()

# Presenta el título general de la página.
st.title("🔑 Generar clave")

bits = st.selectbox("Tamaño de la clave (bits)", [256, 192, 128])

if st.button("Generar", key="btn_generate"):
    try:
        key_b64 = generate_key(int(bits))
    except ConfigurationError as exc:
        st.error(str(exc))
    else:
        # SECURITY: la clave solo se muestra; la custodia corresponde al usuario.
        st.session_state["key_b64"] = key_b64
        st.success(f"Clave AES-{bits} generada.")
        st.code(key_b64)
