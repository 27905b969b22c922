"""
App - Vista previa Streamlit de documentos de diálogo

Lista los documentos de un directorio (por defecto samples/), materializa el
seleccionado y lo renderiza. Los diagnósticos de la materialización se
muestran en un panel aparte.

Uso:
    streamlit run dialog_ui/app.py
"""

import sys
from pathlib import Path

import streamlit as st

# Ensure the project root is in the Python path when running directly with Streamlit
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dialog_core.utils import setup_logger, get_samples_dir
from dialog_core.config_loader import list_documents, load_settings
from dialog_core.builder import Materializer
from dialog_ui.preview import render_root
from samples.handlers import build_registry

logger = setup_logger(__name__)

SETTINGS_FILE = "materializer.yaml"


# ==============================================================================
# ESTADO DE SESIÓN
# ==============================================================================

def init_session_state():
    """Inicializa el estado de sesión de Streamlit."""
    if 'tap_events' not in st.session_state:
        st.session_state.tap_events = []


# ==============================================================================
# SELECCIÓN DE DOCUMENTO
# ==============================================================================

def render_sidebar(documents_dir: Path):
    """Renderiza el sidebar con el selector de documento."""
    st.sidebar.title("Vista previa de diálogos")
    st.sidebar.markdown("---")

    documents = [p for p in list_documents(documents_dir) if p.name != SETTINGS_FILE]
    if not documents:
        st.sidebar.error(f"No se encontraron documentos en {documents_dir}")
        return None

    selected = st.sidebar.selectbox(
        "Documento",
        options=documents,
        format_func=lambda p: p.name,
        key="selected_document",
    )

    if st.session_state.tap_events:
        with st.sidebar.expander("Eventos"):
            for event in st.session_state.tap_events:
                st.write(event)

    return selected


# ==============================================================================
# MAIN
# ==============================================================================

def main():
    st.set_page_config(page_title="Vista previa de diálogos", layout="centered")
    init_session_state()

    documents_dir = get_samples_dir()
    selected = render_sidebar(documents_dir)
    if selected is None:
        return

    diagnostics = []
    materializer = Materializer(
        settings=load_settings(documents_dir / SETTINGS_FILE),
        handlers=build_registry(),
        emit=diagnostics.append,
    )
    root = materializer.from_file(selected, data=st.session_state.tap_events)

    if root is None:
        st.error(f"No se pudo cargar {selected.name}")
        return

    render_root(root, key_prefix=selected.stem)

    if diagnostics:
        with st.expander(f"Diagnósticos ({len(diagnostics)})"):
            for message in diagnostics:
                st.warning(message)


if __name__ == "__main__":
    main()
