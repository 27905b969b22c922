"""
Preview - Controles Streamlit para diálogos materializados

Renderiza un árbol ``RootElement`` con controles Streamlit. Es un consumidor
de referencia del materializador: cada variante de elemento se traduce al
control más cercano disponible en Streamlit.

Igual que en los formularios de la plataforma, ``st.session_state`` es la
única fuente de verdad: el valor inicial de cada control se escribe una sola
vez bajo su ``key`` y después el widget se renderiza sin ``value=``.
"""

from __future__ import annotations

from html import escape
from typing import Any, Optional

import streamlit as st

from dialog_core.utils import setup_logger
from dialog_core.schema_models import (
    BooleanElement,
    BooleanImageElement,
    EntryElement,
    MultilineElement,
    RootElement,
    Section,
    StringElement,
    StyledMultilineElement,
    StyledStringElement,
    TextAlignment,
)

logger = setup_logger(__name__)


def _element_key(section_index: int, element_index: int, key_prefix: Optional[str] = None) -> str:
    """Clave de sesión estable para un elemento."""
    base = f"dialog_{section_index}_{element_index}"
    return f"{key_prefix}__{base}" if key_prefix else base


def _init_state(key: str, value: Any) -> None:
    # Solo se inicializa la primera vez
    if key not in st.session_state:
        st.session_state[key] = value


def render_boolean(element: BooleanElement | BooleanImageElement, key: str) -> Any:
    """Renderiza un interruptor (con imagen del estado actual si la tiene)."""
    _init_state(key, element.value)

    if isinstance(element, BooleanImageElement):
        image = element.on_image if st.session_state[key] else element.off_image
        st.image(image.data or image.path, width=32)

    return st.toggle(label=element.caption, key=key)


def render_entry(element: EntryElement, key: str) -> Any:
    """Renderiza un campo de entrada de texto o contraseña."""
    _init_state(key, element.value or "")

    return st.text_input(
        label=element.caption,
        placeholder=element.placeholder or "",
        type="password" if element.is_password else "default",
        key=key,
    )


def _styled_html(element: StyledStringElement) -> str:
    """Construye el HTML de una celda con estilo."""
    styles = []
    if element.text_color is not None:
        c = element.text_color
        styles.append(f"color: rgba({c.r}, {c.g}, {c.b}, {c.a / 255:.3f})")
    if element.background_color is not None:
        c = element.background_color
        styles.append(f"background-color: rgba({c.r}, {c.g}, {c.b}, {c.a / 255:.3f})")
    if element.background_uri is not None:
        styles.append(f"background-image: url('{escape(element.background_uri)}')")
    if element.font is not None:
        styles.append(f"font-family: '{escape(element.font.name)}'; font-size: {element.font.size}px")
    if element.alignment is not None:
        styles.append(f"text-align: {element.alignment.value}")

    body = escape(element.caption)
    if element.value:
        body += f" <span style='opacity: 0.6'>{escape(element.value)}</span>"

    return f"<div style=\"{'; '.join(styles)}\">{body}</div>"


def render_text(element: Any, key: str) -> None:
    """Renderiza cualquiera de las variantes de texto."""
    if isinstance(element, StyledStringElement):
        st.markdown(_styled_html(element), unsafe_allow_html=True)
    elif isinstance(element, MultilineElement):
        st.text(f"{element.caption}\n{element.value or ''}")
    else:
        text = f"**{element.caption}** {element.value or ''}".strip()
        if element.alignment is TextAlignment.CENTER:
            st.markdown(f"<div style='text-align: center'>{escape(text)}</div>", unsafe_allow_html=True)
        else:
            st.markdown(text)

    if element.on_tap is not None:
        if st.button("Abrir", key=f"{key}__tap"):
            if not element.on_tap():
                logger.info(f"Manejador no disponible: {element.on_tap.reference}")

    if getattr(element, "on_accessory_tap", None) is not None:
        if st.button("Detalle", key=f"{key}__accessory"):
            element.on_accessory_tap()


def render_section(section: Section, section_index: int, key_prefix: Optional[str] = None) -> None:
    """Renderiza una sección con cabecera, elementos y pie."""
    if section.header:
        st.subheader(section.header)

    for i, element in enumerate(section.elements):
        key = _element_key(section_index, i, key_prefix)

        if isinstance(element, (BooleanElement, BooleanImageElement)):
            render_boolean(element, key)
        elif isinstance(element, EntryElement):
            render_entry(element, key)
        elif isinstance(element, (StringElement, MultilineElement, StyledStringElement, StyledMultilineElement)):
            render_text(element, key)
        else:
            logger.warning(f"Elemento sin representación: {type(element).__name__}")

    if section.footer:
        st.caption(section.footer)


def render_root(root: RootElement, key_prefix: Optional[str] = None) -> None:
    """Renderiza el diálogo completo."""
    if root.title:
        st.header(root.title)

    for i, section in enumerate(root.sections):
        render_section(section, i, key_prefix)
        if i < len(root.sections) - 1:
            st.divider()
