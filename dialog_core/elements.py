"""
Elements - Materialización de elementos individuales

Construye un elemento de dominio a partir de un registro del documento según
su etiqueta ``type``:

    - "bool" / "boolean"    → BooleanElement o BooleanImageElement
    - "entry" / "password"  → EntryElement
    - "string"              → una de las variantes de texto

Para la familia de texto se elige la variante más ligera que soporte todos
los atributos pedidos: StringElement / MultilineElement si no hay ningún
atributo de estilo, StyledStringElement / StyledMultilineElement en otro caso.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from dialog_core.utils import setup_logger, scalar_text
from dialog_core.value_view import get_string, get_boolean, has_key
from dialog_core.handlers import HandlerRegistry, parse_handler_reference
from dialog_core.resources import ImageLoader, ResourceResolver, load_image_file
from dialog_core.decoders import (
    DiagnosticSink,
    FontResolver,
    FALLBACK_FONT_SIZE,
    SYSTEM_FONT_NAME,
    SYSTEM_FONT_SIZE,
    parse_color,
    resolve_font,
    to_accessory,
    to_alignment,
    to_autocapitalization,
    to_autocorrection,
    to_cell_style,
    to_font,
    to_keyboard_type,
    to_line_break_mode,
    to_return_key_type,
)
from dialog_core.schema_models import (
    BooleanElement,
    BooleanImageElement,
    CellAccessory,
    CellStyle,
    Color,
    Element,
    EntryElement,
    Font,
    LineBreakMode,
    MultilineElement,
    StringElement,
    StyledMultilineElement,
    StyledStringElement,
    TapHandler,
    TextAlignment,
)

logger = setup_logger(__name__)


# ==============================================================================
# CONTEXTO DE MATERIALIZACIÓN
# ==============================================================================

@dataclass
class MaterializeContext:
    """Colaboradores externos que usan los cargadores de elementos."""
    resources: ResourceResolver = field(default_factory=ResourceResolver)
    handlers: Optional[HandlerRegistry] = None
    data: Any = None
    load_image: ImageLoader = load_image_file
    resolve_font: FontResolver = resolve_font
    system_font_size: float = SYSTEM_FONT_SIZE
    fallback_font: Font = field(
        default_factory=lambda: Font(name=SYSTEM_FONT_NAME, size=FALLBACK_FONT_SIZE)
    )
    emit: DiagnosticSink = logger.warning

    def font(self, text: str) -> Font:
        return to_font(text, self.system_font_size, self.resolve_font, self.fallback_font, self.emit)


# ==============================================================================
# INTERRUPTORES
# ==============================================================================

def load_boolean(record: Dict[str, Any], ctx: MaterializeContext) -> Element:
    """
    Crea un interruptor.

    Si las rutas "on" y "off" existen y ambas imágenes se cargan, devuelve la
    variante con imágenes; en otro caso el interruptor simple.
    """
    caption = get_string(record, "caption") or ""
    value = get_boolean(record, "value")
    on_path = ctx.resources.expand_path(get_string(record, "on"))
    off_path = ctx.resources.expand_path(get_string(record, "off"))

    if on_path is not None and off_path is not None:
        on_image = ctx.load_image(on_path)
        off_image = ctx.load_image(off_path)

        if on_image is not None and off_image is not None:
            return BooleanImageElement(caption=caption, value=value,
                                       on_image=on_image, off_image=off_image)

        ctx.emit(f"No se pudieron cargar las imágenes {on_path!r} / {off_path!r}, se usa un interruptor simple")

    return BooleanElement(caption=caption, value=value)


# ==============================================================================
# CAMPOS DE ENTRADA
# ==============================================================================

def load_entry(record: Dict[str, Any], ctx: MaterializeContext, is_password: bool = False) -> Element:
    """
    Crea un campo de entrada.

    Solo se decodifican los atributos presentes; los ausentes quedan a None
    para que el toolkit aplique sus valores por defecto.
    """
    element = EntryElement(
        caption=get_string(record, "caption") or "",
        value=get_string(record, "value"),
        placeholder=get_string(record, "placeholder"),
        is_password=is_password,
    )

    if has_key(record, "keyboard"):
        element.keyboard_type = to_keyboard_type(get_string(record, "keyboard"), ctx.emit)
    if has_key(record, "return-key"):
        element.return_key_type = to_return_key_type(get_string(record, "return-key"), ctx.emit)
    if has_key(record, "capitalization"):
        element.autocapitalization = to_autocapitalization(get_string(record, "capitalization"), ctx.emit)
    if has_key(record, "autocorrect"):
        element.autocorrection = to_autocorrection(record["autocorrect"])

    return element


def load_password(record: Dict[str, Any], ctx: MaterializeContext) -> Element:
    return load_entry(record, ctx, is_password=True)


# ==============================================================================
# FAMILIA DE TEXTO
# ==============================================================================

@dataclass
class TextAttributes:
    """Atributos acumulados al recorrer un registro "string"."""
    caption: Optional[str] = None
    value: Optional[str] = None
    style: CellStyle = CellStyle.VALUE1
    on_tap: Optional[TapHandler] = None
    on_accessory_tap: Optional[TapHandler] = None
    lines: Optional[int] = None
    accessory: Optional[CellAccessory] = None
    text_color: Optional[Color] = None
    line_break_mode: Optional[LineBreakMode] = None
    font: Optional[Font] = None
    subtitle_font: Optional[Font] = None
    alignment: Optional[TextAlignment] = None
    background_color: Optional[Color] = None
    background_uri: Optional[str] = None

    @property
    def is_styled(self) -> bool:
        """True si algún atributo solo lo soporta la variante con estilo."""
        return (self.font is not None
                or self.style is not CellStyle.VALUE1
                or self.subtitle_font is not None
                or self.line_break_mode is not None
                or self.text_color is not None
                or self.accessory is not None
                or self.on_accessory_tap is not None
                or self.background_color is not None
                or self.background_uri is not None)


def _set_caption(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    attrs.caption = text


def _set_value(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    attrs.value = text


def _set_background(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    if not text:
        return
    # Color y URI son representaciones excluyentes del mismo campo
    if text.startswith('#'):
        attrs.background_color = parse_color(text, ctx.emit)
        attrs.background_uri = None
    else:
        attrs.background_uri = ctx.resources.to_uri(text)
        attrs.background_color = None


def _set_style(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    attrs.style = to_cell_style(text, ctx.emit)


def _set_on_tap(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    tap = parse_handler_reference(text, ctx.handlers, ctx.data)
    if tap is not None:
        attrs.on_tap = tap


def _set_on_accessory_tap(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    tap = parse_handler_reference(text, ctx.handlers, ctx.data)
    if tap is not None:
        attrs.on_accessory_tap = tap


def _set_lines(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    try:
        attrs.lines = int(text)
    except ValueError:
        logger.debug(f"Número de líneas ignorado: {text!r}")


def _set_accessory(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    attrs.accessory = to_accessory(text, ctx.emit)


def _set_text_color(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    attrs.text_color = parse_color(text, ctx.emit)


def _set_line_break(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    attrs.line_break_mode = to_line_break_mode(text, ctx.emit)


def _set_font(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    attrs.font = ctx.font(text)


def _set_subtitle_font(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    attrs.subtitle_font = ctx.font(text)


def _set_alignment(attrs: TextAttributes, text: str, ctx: MaterializeContext) -> None:
    attrs.alignment = to_alignment(text, ctx.emit)


TEXT_FIELDS: Dict[str, Callable[[TextAttributes, str, MaterializeContext], None]] = {
    "caption": _set_caption,
    "value": _set_value,
    "background": _set_background,
    "style": _set_style,
    "ontap": _set_on_tap,
    "onaccessorytap": _set_on_accessory_tap,
    "lines": _set_lines,
    "accessory": _set_accessory,
    "textcolor": _set_text_color,
    "linebreak": _set_line_break,
    "font": _set_font,
    "subtitlefont": _set_subtitle_font,
    "alignment": _set_alignment,
}


def scan_text_attributes(record: Dict[str, Any], ctx: MaterializeContext) -> TextAttributes:
    """
    Recorre las claves conocidas del registro y decodifica cada atributo.

    Las claves desconocidas y los valores nulos se ignoran. Un valor lista o
    diccionario en una clave conocida lanza TypeError.
    """
    attrs = TextAttributes()

    for key, raw in record.items():
        setter = TEXT_FIELDS.get(key)
        if setter is None:
            continue

        text = scalar_text(raw)
        if text is None:
            continue

        setter(attrs, text, ctx)

    return attrs


def select_text_variant(attrs: TextAttributes) -> Element:
    """
    Elige la variante de texto a partir de los atributos presentes.

    Reglas:
        - Sin atributos de estilo: StringElement, o MultilineElement si se
          pidió explícitamente ``lines = 0``.
        - Con algún atributo de estilo: StyledMultilineElement si ``lines`` es
          positivo, StyledStringElement en otro caso.
    """
    caption = attrs.caption if attrs.caption is not None else ""

    if not attrs.is_styled:
        light_cls = MultilineElement if attrs.lines == 0 else StringElement
        return light_cls(
            caption=caption,
            value=attrs.value,
            alignment=attrs.alignment,
            on_tap=attrs.on_tap,
        )

    styled_fields = dict(
        caption=caption,
        value=attrs.value,
        style=attrs.style,
        alignment=attrs.alignment,
        on_tap=attrs.on_tap,
        on_accessory_tap=attrs.on_accessory_tap,
        font=attrs.font,
        subtitle_font=attrs.subtitle_font,
        text_color=attrs.text_color,
        accessory=attrs.accessory,
        line_break_mode=attrs.line_break_mode,
        background_color=attrs.background_color,
        background_uri=attrs.background_uri,
    )

    if attrs.lines is not None and attrs.lines > 0:
        return StyledMultilineElement(lines=attrs.lines, **styled_fields)
    return StyledStringElement(**styled_fields)


def load_string(record: Dict[str, Any], ctx: MaterializeContext) -> Element:
    """Crea el elemento de texto más ligero que soporta los atributos del registro."""
    return select_text_variant(scan_text_attributes(record, ctx))


# ==============================================================================
# DESPACHO POR TIPO
# ==============================================================================

ELEMENT_LOADERS: Dict[str, Callable[[Dict[str, Any], MaterializeContext], Element]] = {
    "bool": load_boolean,
    "boolean": load_boolean,
    "entry": load_entry,
    "password": load_password,
    "string": load_string,
}


def materialize_element(record: Dict[str, Any], index: int, ctx: MaterializeContext) -> Optional[Element]:
    """
    Materializa un registro según su etiqueta ``type``.

    Args:
        record: Registro del elemento
        index: Posición en el array "elements" (para diagnósticos)
        ctx: Contexto de materialización

    Returns:
        El elemento, o None si el tipo es desconocido
    """
    element_type = get_string(record, "type")
    loader = ELEMENT_LOADERS.get(element_type) if element_type is not None else None

    if loader is None:
        raw = json.dumps(record, ensure_ascii=False, default=str)
        ctx.emit(f"El elemento json en {index} tiene un tipo desconocido {element_type!r}, json {raw}")
        return None

    return loader(record, ctx)
