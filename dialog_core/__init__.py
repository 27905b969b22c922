"""
Dialog Core - Núcleo del materializador de diálogos

Convierte un documento genérico (JSON / YAML ya parseado) en un árbol de
modelos de presentación tipados, eligiendo para cada registro la variante
de elemento más ligera que soporte los atributos pedidos.

Módulos:
    - value_view: Acceso tolerante a fallos sobre el documento
    - decoders: Colores, fuentes y enumeraciones
    - resources: Expansión de rutas ~/ y carga de imágenes
    - handlers: Registro de manejadores para "ontap"
    - elements: Materialización de elementos y selección de variante
    - builder: Secciones y elemento raíz
    - config_loader: Carga de documentos y configuración
    - schema_models: Modelos Pydantic del árbol
    - utils: Utilidades generales

Versión: 1.0.0 (20261018)
"""

__version__ = "1.0.0"
__release_date__ = "20261018"

from .builder import Materializer, from_json, from_file
from .handlers import HandlerRegistry
from .schema_models import MaterializerSettings, RootElement, Section

__all__ = [
    "Materializer",
    "from_json",
    "from_file",
    "HandlerRegistry",
    "MaterializerSettings",
    "RootElement",
    "Section",
]
