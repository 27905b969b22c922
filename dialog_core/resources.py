"""
Resources - Resolución de rutas y carga de imágenes

Expande las rutas simbólicas del documento (``~/`` significa "relativo al
directorio de la aplicación") y carga imágenes para los interruptores.

El directorio base se resuelve una única vez por resolutor, aunque se use
desde varios hilos.
"""

import threading
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urlsplit

from dialog_core.utils import setup_logger, get_app_base_path
from dialog_core.schema_models import ImageAsset, MaterializerSettings

logger = setup_logger(__name__)

ImageLoader = Callable[[str], Optional[ImageAsset]]

HOME_PREFIX = "~/"


class ResourceResolver:
    """
    Expande rutas ``~/`` contra un directorio base calculado de forma perezosa.

    Args:
        base_path_provider: Función que devuelve el directorio base. Se invoca
            como máximo una vez.
    """

    def __init__(self, base_path_provider: Callable[[], str] = get_app_base_path):
        self._provider = base_path_provider
        self._base_path: Optional[str] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: MaterializerSettings) -> "ResourceResolver":
        """
        Crea un resolutor a partir de la configuración del anfitrión.

        Un ``base_path`` relativo se resuelve contra el directorio de trabajo.
        """
        if settings.base_path:
            base_path = settings.base_path
            if not Path(base_path).is_absolute():
                base_path = str(Path(base_path).resolve())
            return cls(lambda: base_path)
        return cls()

    @property
    def base_path(self) -> str:
        if self._base_path is None:
            with self._lock:
                if self._base_path is None:
                    self._base_path = self._provider()
                    logger.debug(f"Directorio base de recursos: {self._base_path}")
        return self._base_path

    def expand_path(self, path: Optional[str]) -> Optional[str]:
        """
        Expande una ruta del documento.

        Args:
            path: Ruta tal cual aparece en el documento (puede ser None)

        Returns:
            ``<base>/<resto>`` si la ruta empieza por ``~/``; en otro caso la
            misma ruta sin cambios
        """
        if path is not None and path.startswith(HOME_PREFIX):
            return str(Path(self.base_path) / path[len(HOME_PREFIX):])
        return path

    def to_uri(self, text: str) -> str:
        """
        Convierte una referencia de recurso en URI.

        Los textos con esquema (``http:``, ``file:``, ...) se devuelven tal cual;
        las rutas ``~/`` y absolutas se convierten en URI ``file://``.

        Raises:
            ValueError: si el texto no es una URI ni una ruta absoluta
        """
        # esquema de una sola letra: unidad de Windows ("C:/...")
        if len(urlsplit(text).scheme) > 1:
            return text

        expanded = Path(self.expand_path(text))
        if not expanded.is_absolute():
            raise ValueError(f"Referencia de recurso no válida (se esperaba una URI absoluta): {text!r}")
        return expanded.as_uri()


# ==============================================================================
# CARGA DE IMÁGENES
# ==============================================================================

def load_image_file(path: str) -> Optional[ImageAsset]:
    """
    Carga una imagen desde disco (lectura bloqueante).

    Args:
        path: Ruta ya expandida

    Returns:
        ImageAsset con el contenido o None si no se puede leer
    """
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        logger.debug(f"No se pudo cargar la imagen {path}: {e}")
        return None

    return ImageAsset(path=path, data=data)
