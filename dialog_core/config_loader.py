"""
Config Loader - Carga de documentos y configuración desde disco

Funciones para cargar documentos de diálogo (JSON o YAML) y la
configuración del materializador. La carga es un envoltorio fino: el
materializador solo recibe el árbol de valores ya parseado.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from dialog_core.utils import setup_logger
from dialog_core.schema_models import MaterializerSettings

logger = setup_logger(__name__)

DOCUMENT_SUFFIXES = ('.json', '.yaml', '.yml')


# ==============================================================================
# CARGA DE ARCHIVOS YAML GENÉRICOS
# ==============================================================================

def load_yaml_config(filepath: Path) -> Optional[Dict[str, Any]]:
    """
    Carga un archivo YAML genérico.

    Args:
        filepath: Path al archivo YAML

    Returns:
        Diccionario con el contenido o None si hay error
    """
    if not filepath.exists():
        logger.warning(f"Archivo no encontrado: {filepath}")
        return None

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        logger.debug(f"YAML cargado: {filepath.name}")
        return data

    except Exception as e:
        logger.error(f"Error cargando YAML {filepath}: {e}")
        return None


# ==============================================================================
# CARGA DE DOCUMENTOS DE DIÁLOGO
# ==============================================================================

def load_document(filepath: Path) -> Optional[Any]:
    """
    Carga un documento de diálogo.

    Los archivos ``.json`` se leen con el módulo json; el resto se trata
    como YAML (superconjunto de JSON).

    Args:
        filepath: Path al documento

    Returns:
        Árbol de valores parseado o None si hay error
    """
    if filepath.suffix.lower() != '.json':
        return load_yaml_config(filepath)

    if not filepath.exists():
        logger.warning(f"Archivo no encontrado: {filepath}")
        return None

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)

        logger.debug(f"JSON cargado: {filepath.name}")
        return data

    except Exception as e:
        logger.error(f"Error cargando JSON {filepath}: {e}")
        return None


def list_documents(directory: Path) -> List[Path]:
    """
    Lista los documentos de diálogo de un directorio.

    Args:
        directory: Directorio a explorar

    Returns:
        Paths ordenados por nombre de los archivos .json / .yaml / .yml
    """
    if not directory.is_dir():
        logger.warning(f"Directorio de documentos no encontrado: {directory}")
        return []

    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in DOCUMENT_SUFFIXES and not p.name.startswith(('_', '.'))
    )


# ==============================================================================
# CARGA DE CONFIGURACIÓN DEL MATERIALIZADOR
# ==============================================================================

def load_settings(filepath: Path) -> MaterializerSettings:
    """
    Carga la configuración del materializador.

    Acepta la configuración en la raíz del YAML o bajo la clave
    ``materializer``. Si el archivo no existe o no es válido se usan los
    valores por defecto.

    Args:
        filepath: Path al YAML de configuración

    Returns:
        MaterializerSettings validado
    """
    data = load_yaml_config(filepath)

    if not data:
        logger.info("Usando configuración por defecto del materializador")
        return MaterializerSettings()

    if isinstance(data, dict) and isinstance(data.get('materializer'), dict):
        data = data['materializer']

    try:
        settings = MaterializerSettings(**data)
    except Exception as e:
        logger.warning(f"Configuración no válida en {filepath}: {e}")
        return MaterializerSettings()

    # Las rutas relativas se resuelven contra el directorio del archivo
    if settings.base_path and not Path(settings.base_path).is_absolute():
        settings.base_path = str((filepath.parent / settings.base_path).resolve())

    logger.info(f"Configuración cargada: {filepath.name}")
    return settings
