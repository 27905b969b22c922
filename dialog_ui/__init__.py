"""
UI - Vista previa de diálogos materializados

Consumidor de referencia del árbol que produce dialog_core, basado en
Streamlit.
"""

from .preview import render_root, render_section

__all__ = ["render_root", "render_section"]
