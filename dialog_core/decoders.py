"""
Decoders - Conversión de escalares a valores de dominio

Funciones puras que convierten un string (o booleano) del documento en un
valor estricto: color, fuente, alineación, modo de corte de línea,
tipos de teclado, etc.

Ninguna función lanza excepciones por entradas mal formadas: emiten un
diagnóstico a través de ``emit`` (por defecto el logger del módulo) y
devuelven un valor de reserva documentado.
"""

import math
import re
from enum import Enum
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from dialog_core.utils import setup_logger
from dialog_core.schema_models import (
    AutocapitalizationType,
    AutocorrectionType,
    CellAccessory,
    CellStyle,
    Color,
    Font,
    KeyboardType,
    LineBreakMode,
    ReturnKeyType,
    TextAlignment,
)

logger = setup_logger(__name__)

DiagnosticSink = Callable[[str], None]
FontResolver = Callable[[str, float], Optional[Font]]

E = TypeVar("E", bound=Enum)

SYSTEM_FONT_SIZE = 14.0
FALLBACK_FONT_SIZE = 12.0
SYSTEM_FONT_NAME = "System"


def _emit(emit: Optional[DiagnosticSink], message: str) -> None:
    (emit or logger.warning)(message)


# ==============================================================================
# COLORES
# ==============================================================================

_COLOR_PATTERN = re.compile(r"#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")


def parse_color(text: Optional[str], emit: Optional[DiagnosticSink] = None) -> Color:
    """
    Decodifica un color hexadecimal.

    Formatos aceptados: #rgb, #rgba, #rrggbb y #rrggbbaa (sin distinguir
    mayúsculas). Las formas cortas duplican cada dígito (``f`` → ``ff``).

    Args:
        text: Texto del color
        emit: Sumidero de diagnósticos

    Returns:
        Color decodificado, o negro opaco si el formato no es válido
    """
    if not isinstance(text, str) or not _COLOR_PATTERN.fullmatch(text):
        _emit(emit, f"Especificación de color desconocida {text!r}, se esperaba #rgb, #rgba, #rrggbb o #rrggbbaa")
        return Color.black()

    digits = text[1:]

    if len(digits) in (3, 4):
        channels = [int(d, 16) for d in digits]
        channels = [c << 4 | c for c in channels]
    else:
        channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]

    if len(channels) == 3:
        channels.append(255)

    r, g, b, a = channels
    return Color(r=r, g=g, b=b, a=a)


# ==============================================================================
# FUENTES
# ==============================================================================

_SIZE_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")


def resolve_font(name: str, size: float, known_fonts: Optional[list] = None) -> Optional[Font]:
    """
    Búsqueda de fuentes por defecto.

    Acepta cualquier nombre no vacío; si se indica ``known_fonts`` solo
    acepta los nombres de esa lista.
    """
    if not name or not name.strip():
        return None
    if known_fonts is not None and name not in known_fonts:
        return None
    return Font(name=name, size=size)


def to_font(text: str,
            system_font_size: float = SYSTEM_FONT_SIZE,
            resolve: Optional[FontResolver] = None,
            fallback: Optional[Font] = None,
            emit: Optional[DiagnosticSink] = None) -> Font:
    """
    Decodifica una fuente con formato ``Nombre[-TAMAÑO]``.

    El tamaño es lo que sigue al último guion. Si falta, no es numérico o no
    es positivo se usa ``system_font_size``. Si el nombre no se resuelve se
    devuelve la fuente de sistema de reserva (tamaño 12).

    Ejemplo:
        >>> to_font("Helvetica-14")
        Font(name='Helvetica', size=14.0)
    """
    resolve = resolve or resolve_font
    if fallback is None:
        fallback = Font(name=SYSTEM_FONT_NAME, size=FALLBACK_FONT_SIZE)

    name = text
    size = 0.0

    q = text.rfind("-")
    if q != -1:
        name = text[:q]
        size_text = text[q + 1:]
        size = float(size_text) if _SIZE_PATTERN.fullmatch(size_text) else 0.0
        if not math.isfinite(size) or size <= 0:
            _emit(emit, f"Tamaño de fuente no válido {size_text!r} en {text!r}, se usa {system_font_size}")
            size = 0.0

    if size <= 0:
        size = system_font_size

    font = resolve(name, size)
    if font is None:
        _emit(emit, f"Fuente desconocida {name!r}, se usa la fuente de sistema")
        return fallback
    return font


# ==============================================================================
# ENUMERACIONES
# ==============================================================================

def _lookup(table: Dict[str, E], token: Optional[str], default: E, label: str,
            emit: Optional[DiagnosticSink]) -> E:
    """Busca un token en una tabla cerrada; si no existe emite diagnóstico."""
    if token in table:
        return table[token]

    valid = ", ".join(table)
    _emit(emit, f"Valor de {label} desconocido {token!r}, valores válidos: {valid}")
    return default


def _table(enum_cls: Type[E]) -> Dict[str, E]:
    return {member.value: member for member in enum_cls}


KEYBOARD_TYPES = _table(KeyboardType)
RETURN_KEY_TYPES = _table(ReturnKeyType)
AUTOCAPITALIZATION_TYPES = _table(AutocapitalizationType)
LINE_BREAK_MODES = _table(LineBreakMode)
CELL_STYLES = _table(CellStyle)
TEXT_ALIGNMENTS = _table(TextAlignment)
# "none" no es un token del documento: la ausencia de accesorio se expresa omitiendo la clave
ACCESSORIES = {k: v for k, v in _table(CellAccessory).items() if v is not CellAccessory.NONE}


def to_keyboard_type(token: Optional[str], emit: Optional[DiagnosticSink] = None) -> KeyboardType:
    return _lookup(KEYBOARD_TYPES, token, KeyboardType.DEFAULT, "teclado", emit)


def to_return_key_type(token: Optional[str], emit: Optional[DiagnosticSink] = None) -> ReturnKeyType:
    return _lookup(RETURN_KEY_TYPES, token, ReturnKeyType.DEFAULT, "tecla de retorno", emit)


def to_autocapitalization(token: Optional[str],
                          emit: Optional[DiagnosticSink] = None) -> AutocapitalizationType:
    return _lookup(AUTOCAPITALIZATION_TYPES, token, AutocapitalizationType.SENTENCES,
                   "capitalización", emit)


def to_line_break_mode(token: Optional[str], emit: Optional[DiagnosticSink] = None) -> LineBreakMode:
    return _lookup(LINE_BREAK_MODES, token, LineBreakMode.CLIP, "modo de corte de línea", emit)


def to_cell_style(token: Optional[str], emit: Optional[DiagnosticSink] = None) -> CellStyle:
    return _lookup(CELL_STYLES, token, CellStyle.DEFAULT, "estilo de celda", emit)


def to_alignment(token: Optional[str], emit: Optional[DiagnosticSink] = None) -> TextAlignment:
    return _lookup(TEXT_ALIGNMENTS, token, TextAlignment.LEFT, "alineación", emit)


def to_accessory(token: Optional[str], emit: Optional[DiagnosticSink] = None) -> CellAccessory:
    return _lookup(ACCESSORIES, token, CellAccessory.NONE, "accesorio", emit)


def to_autocorrection(value: Any) -> AutocorrectionType:
    """
    Decodifica la autocorrección.

    Acepta un booleano (True → YES, False → NO) o un string ("yes" → YES,
    cualquier otro → NO). Cualquier otro tipo deja el valor DEFAULT.
    """
    if isinstance(value, bool):
        return AutocorrectionType.YES if value else AutocorrectionType.NO
    if isinstance(value, str):
        return AutocorrectionType.YES if value == "yes" else AutocorrectionType.NO
    return AutocorrectionType.DEFAULT
