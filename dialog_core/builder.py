"""
Builder - Construcción del árbol de secciones y del elemento raíz

Recorre el array "sections" del documento, y dentro de cada sección el array
"elements", delegando cada registro en el materializador de elementos.

Los fallos se contienen en la unidad más pequeña: un registro que falla no
impide procesar sus hermanos. El resultado es un árbol nuevo en cada llamada;
el documento de entrada no se modifica.
"""

from functools import partial
from pathlib import Path
from typing import Any, List, Optional, Union

from dialog_core.utils import setup_logger
from dialog_core.value_view import get_array, get_string
from dialog_core.config_loader import load_document
from dialog_core.handlers import HandlerRegistry
from dialog_core.resources import ImageLoader, ResourceResolver, load_image_file
from dialog_core import decoders
from dialog_core.decoders import DiagnosticSink, FontResolver
from dialog_core.elements import MaterializeContext, materialize_element
from dialog_core.schema_models import Font, MaterializerSettings, RootElement, Section

logger = setup_logger(__name__)


class Materializer:
    """
    Compilador documento → árbol de elementos.

    Args:
        settings: Configuración del anfitrión (directorio base, fuentes)
        handlers: Registro de manejadores para "ontap" / "onaccessorytap"
        resources: Resolutor de rutas; por defecto se crea desde ``settings``
        load_image: Cargador de imágenes para los interruptores
        resolve_font: Búsqueda de fuentes de la plataforma
        emit: Sumidero de diagnósticos (por defecto ``logger.warning``)
    """

    def __init__(self,
                 settings: Optional[MaterializerSettings] = None,
                 handlers: Optional[HandlerRegistry] = None,
                 resources: Optional[ResourceResolver] = None,
                 load_image: ImageLoader = load_image_file,
                 resolve_font: Optional[FontResolver] = None,
                 emit: Optional[DiagnosticSink] = None):
        self.settings = settings or MaterializerSettings()
        self.handlers = handlers if handlers is not None else HandlerRegistry()
        self.resources = resources or ResourceResolver.from_settings(self.settings)
        self.load_image = load_image
        self.resolve_font = resolve_font or partial(decoders.resolve_font,
                                                    known_fonts=self.settings.known_fonts)
        self.emit = emit or logger.warning

    def _context(self, data: Any) -> MaterializeContext:
        return MaterializeContext(
            resources=self.resources,
            handlers=self.handlers,
            data=data,
            load_image=self.load_image,
            resolve_font=self.resolve_font,
            system_font_size=self.settings.system_font_size,
            fallback_font=Font(name=self.settings.system_font_name,
                               size=self.settings.fallback_font_size),
            emit=self.emit,
        )

    def from_json(self, json: Any, data: Any = None) -> Optional[RootElement]:
        """
        Materializa un documento ya parseado.

        Args:
            json: Documento raíz (diccionario)
            data: Contexto que recibirán los manejadores al invocarse

        Returns:
            RootElement, o None si el documento es nulo o no es un diccionario
        """
        if json is None:
            return None
        if not isinstance(json, dict):
            self.emit(f"Se esperaba un objeto json en la raíz, se recibió {type(json).__name__}")
            return None

        ctx = self._context(data)
        root = RootElement(title=get_string(json, "title") or "")
        root.sections.extend(load_sections(get_array(json, "sections"), ctx))

        logger.debug(f"Diálogo materializado: {root.title!r} ({len(root.sections)} secciones)")
        return root

    def from_file(self, path: Union[str, Path], data: Any = None) -> Optional[RootElement]:
        """Carga un documento JSON o YAML desde disco y lo materializa."""
        return self.from_json(load_document(Path(path)), data)


# ==============================================================================
# SECCIONES
# ==============================================================================

def load_sections(array: Optional[List[Any]], ctx: MaterializeContext) -> List[Section]:
    """
    Construye las secciones en el orden del array.

    Los registros de sección que no son diccionarios se descartan con un
    diagnóstico.
    """
    sections: List[Section] = []
    if array is None:
        return sections

    for i, json_section in enumerate(array):
        if not isinstance(json_section, dict):
            ctx.emit(f"La sección json en {i} no es un objeto, se ignora: {json_section!r}")
            continue

        section = Section(
            header=get_string(json_section, "header"),
            footer=get_string(json_section, "footer"),
        )
        section.elements.extend(load_section_elements(get_array(json_section, "elements"), ctx))
        sections.append(section)

    return sections


def load_section_elements(array: Optional[List[Any]], ctx: MaterializeContext) -> list:
    """
    Materializa los elementos de una sección conservando el orden.

    Un registro que lanza una excepción se diagnostica y se descarta sin
    afectar a los demás.
    """
    elements = []
    if array is None:
        return elements

    for i, json_element in enumerate(array):
        if not isinstance(json_element, dict):
            logger.debug(f"Elemento {i} ignorado: no es un objeto json")
            continue

        try:
            element = materialize_element(json_element, i, ctx)
        except Exception as e:
            ctx.emit(f"Error procesando el elemento json en {i}: {json_element!r}, excepción {e!r}")
            logger.debug("Detalle del error", exc_info=True)
            continue

        if element is not None:
            elements.append(element)

    return elements


# ==============================================================================
# FUNCIONES DE CONVENIENCIA
# ==============================================================================

def from_json(json: Any, data: Any = None, **kwargs) -> Optional[RootElement]:
    """
    Materializa un documento con un Materializer creado al vuelo.

    Los argumentos extra se pasan al constructor de Materializer.
    """
    return Materializer(**kwargs).from_json(json, data)


def from_file(path: Union[str, Path], data: Any = None, **kwargs) -> Optional[RootElement]:
    """Carga y materializa un documento desde disco."""
    return Materializer(**kwargs).from_file(path, data)
