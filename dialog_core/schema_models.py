"""
Schema Models - Modelos Pydantic del árbol materializado

Define los valores de dominio (colores, fuentes, imágenes, enumeraciones),
las variantes de elemento, las secciones, el elemento raíz y la
configuración del materializador.
"""

from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


# ==============================================================================
# VALORES DE DOMINIO
# ==============================================================================

class Color(BaseModel):
    """Color RGBA con canales de 8 bits."""
    r: int = Field(ge=0, le=255, description="Canal rojo")
    g: int = Field(ge=0, le=255, description="Canal verde")
    b: int = Field(ge=0, le=255, description="Canal azul")
    a: int = Field(255, ge=0, le=255, description="Opacidad")

    @classmethod
    def black(cls) -> "Color":
        return cls(r=0, g=0, b=0, a=255)

    @property
    def hex(self) -> str:
        """Representación #rrggbbaa."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"


class Font(BaseModel):
    """Fuente resuelta: nombre y tamaño en puntos."""
    name: str = Field(description="Nombre de la fuente")
    size: float = Field(gt=0, description="Tamaño en puntos")


class ImageAsset(BaseModel):
    """Imagen cargada desde disco."""
    path: str = Field(description="Ruta absoluta o relativa de la imagen")
    data: bytes = Field(default=b"", repr=False, description="Contenido binario")


# ==============================================================================
# ENUMERACIONES
# ==============================================================================

class KeyboardType(str, Enum):
    DEFAULT = "default"
    ASCII_CAPABLE = "ascii"
    NUMBERS_AND_PUNCTUATION = "numbers-and-punctuation"
    URL = "url"
    NUMBER_PAD = "numbers"
    NAME_PHONE_PAD = "name"
    EMAIL_ADDRESS = "email"
    DECIMAL_PAD = "decimal"
    TWITTER = "twitter"


class ReturnKeyType(str, Enum):
    DEFAULT = "default"
    GO = "go"
    GOOGLE = "google"
    JOIN = "join"
    NEXT = "next"
    ROUTE = "route"
    SEARCH = "search"
    SEND = "send"
    YAHOO = "yahoo"
    DONE = "done"
    EMERGENCY_CALL = "emergencycall"


class AutocapitalizationType(str, Enum):
    NONE = "none"
    WORDS = "words"
    SENTENCES = "sentences"
    ALL_CHARACTERS = "all"


class AutocorrectionType(str, Enum):
    """Tri-estado: DEFAULT significa "no especificado"."""
    DEFAULT = "default"
    NO = "no"
    YES = "yes"


class LineBreakMode(str, Enum):
    WORD_WRAP = "word-wrap"
    CHARACTER_WRAP = "character-wrap"
    CLIP = "clip"
    HEAD_TRUNCATION = "head-truncation"
    TAIL_TRUNCATION = "tail-truncation"
    MIDDLE_TRUNCATION = "middle-truncation"


class CellStyle(str, Enum):
    DEFAULT = "default"
    VALUE1 = "value1"
    VALUE2 = "value2"
    SUBTITLE = "subtitle"


class TextAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class CellAccessory(str, Enum):
    NONE = "none"
    DISCLOSURE_INDICATOR = "disclosure-indicator"
    DETAIL_DISCLOSURE_BUTTON = "detail-disclosure"
    CHECKMARK = "checkmark"


# ==============================================================================
# REFERENCIAS A MANEJADORES
# ==============================================================================

class TapHandler(BaseModel):
    """
    Referencia diferida a un manejador ``<tipo>.<miembro>``.

    La resolución ocurre al invocar, no al decodificar: el registro y el
    contexto se enlazan al crear la referencia y se consultan en cada llamada.
    Si el manejador no existe la llamada no hace nada.
    """
    reference: str = Field(description="Nombre cualificado del manejador")

    _registry: Any = PrivateAttr(default=None)
    _context: Any = PrivateAttr(default=None)

    @property
    def type_name(self) -> str:
        return self.reference.rpartition('.')[0]

    @property
    def member(self) -> str:
        return self.reference.rpartition('.')[2]

    def __call__(self) -> bool:
        if self._registry is None:
            return False
        return self._registry.invoke(self.reference, self._context)


# ==============================================================================
# ELEMENTOS
# ==============================================================================

class Element(BaseModel):
    """Base común: todo elemento tiene un caption (nunca None)."""
    caption: str = Field("", description="Texto visible del elemento")


class BooleanElement(Element):
    kind: Literal["boolean"] = "boolean"
    value: bool = False


class BooleanImageElement(Element):
    """Interruptor con imágenes para los estados encendido/apagado."""
    kind: Literal["boolean_image"] = "boolean_image"
    value: bool = False
    on_image: ImageAsset
    off_image: ImageAsset


class EntryElement(Element):
    """
    Campo de entrada de texto.

    Los atributos de teclado a None dejan intactos los valores por defecto
    del toolkit que consuma el árbol.
    """
    kind: Literal["entry"] = "entry"
    value: Optional[str] = None
    placeholder: Optional[str] = None
    is_password: bool = False
    keyboard_type: Optional[KeyboardType] = None
    return_key_type: Optional[ReturnKeyType] = None
    autocapitalization: Optional[AutocapitalizationType] = None
    autocorrection: AutocorrectionType = AutocorrectionType.DEFAULT


class StringElement(Element):
    """Variante ligera de una línea."""
    kind: Literal["string"] = "string"
    value: Optional[str] = None
    alignment: Optional[TextAlignment] = None
    on_tap: Optional[TapHandler] = None


class MultilineElement(Element):
    """Variante ligera que ajusta el texto en varias líneas."""
    kind: Literal["multiline"] = "multiline"
    value: Optional[str] = None
    alignment: Optional[TextAlignment] = None
    on_tap: Optional[TapHandler] = None


class StyledStringElement(Element):
    """Variante con estilo: transporta todos los atributos decodificados."""
    kind: Literal["styled_string"] = "styled_string"
    value: Optional[str] = None
    style: CellStyle = CellStyle.VALUE1
    alignment: Optional[TextAlignment] = None
    on_tap: Optional[TapHandler] = None
    on_accessory_tap: Optional[TapHandler] = None
    font: Optional[Font] = None
    subtitle_font: Optional[Font] = None
    text_color: Optional[Color] = None
    accessory: Optional[CellAccessory] = None
    line_break_mode: Optional[LineBreakMode] = None
    background_color: Optional[Color] = None
    background_uri: Optional[str] = None


class StyledMultilineElement(StyledStringElement):
    kind: Literal["styled_multiline"] = "styled_multiline"
    lines: int = Field(0, ge=0, description="Número de líneas visibles")


AnyElement = Annotated[
    Union[
        BooleanElement,
        BooleanImageElement,
        EntryElement,
        StringElement,
        MultilineElement,
        StyledStringElement,
        StyledMultilineElement,
    ],
    Field(discriminator="kind"),
]


# ==============================================================================
# SECCIONES Y RAÍZ
# ==============================================================================

class Section(BaseModel):
    """Sección con cabecera y pie opcionales y elementos ordenados."""
    header: Optional[str] = Field(None, description="Texto de cabecera")
    footer: Optional[str] = Field(None, description="Texto de pie")
    elements: List[AnyElement] = Field(default_factory=list)


class RootElement(BaseModel):
    """Raíz del árbol materializado."""
    title: str = Field("", description="Título del diálogo")
    sections: List[Section] = Field(default_factory=list)


# ==============================================================================
# CONFIGURACIÓN DEL MATERIALIZADOR
# ==============================================================================

class MaterializerSettings(BaseModel):
    """
    Configuración inyectada por la aplicación anfitriona.

    base_path sustituye al directorio de la aplicación para las rutas ``~/``;
    si no se indica, se resuelve una sola vez a partir del script principal.
    """
    base_path: Optional[str] = Field(None, description="Directorio base para rutas ~/")
    system_font_size: float = Field(14.0, gt=0, description="Tamaño de texto por defecto")
    fallback_font_size: float = Field(12.0, gt=0, description="Tamaño de la fuente de sistema de reserva")
    system_font_name: str = Field("System", description="Nombre de la fuente de sistema")
    known_fonts: Optional[List[str]] = Field(None, description="Fuentes disponibles; None acepta cualquiera")

    model_config = ConfigDict(extra="ignore")
