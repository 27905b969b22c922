"""
Utils - Utilidades generales del materializador

Funciones auxiliares para logging, resolución del directorio base de la
aplicación y coerción de escalares del documento.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Configura y devuelve un logger con formato estándar.

    Args:
        name: Nombre del logger
        level: Nivel de logging (default: INFO)

    Returns:
        Logger configurado
    """
    logger = logging.getLogger(name)

    # Evitar duplicar handlers si ya existe
    if logger.handlers:
        return logger

    logger.setLevel(level)

    # Handler para consola
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Formato del log
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    return logger


def get_project_root() -> Path:
    """
    Obtiene el directorio raíz del proyecto.

    Returns:
        Path al directorio raíz (donde están dialog_core/ y samples/)
    """
    # Desde este archivo (dialog_core/utils.py), subir un nivel
    return Path(__file__).resolve().parent.parent


def get_samples_dir() -> Path:
    """
    Obtiene el directorio de documentos de ejemplo.

    Returns:
        Path al directorio samples/
    """
    return get_project_root() / "samples"


def get_app_base_path() -> str:
    """
    Obtiene el directorio base de la aplicación anfitriona.

    Equivale al directorio del script principal (``__main__``). En sesiones
    interactivas, donde no existe tal script, se usa el directorio de trabajo.

    Returns:
        Path absoluto del directorio base como string
    """
    main_module = sys.modules.get('__main__')
    main_file = getattr(main_module, '__file__', None)

    if main_file:
        return str(Path(main_file).resolve().parent)

    return os.getcwd()


def scalar_text(value: Any) -> Optional[str]:
    """
    Convierte un escalar del documento en texto.

    Args:
        value: Valor genérico (str, bool, número o None)

    Returns:
        Texto equivalente o None si el valor es nulo

    Raises:
        TypeError: si el valor es una lista o un diccionario
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    # bool antes que int: bool es subclase de int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)

    raise TypeError(f"Se esperaba un escalar, se recibió {type(value).__name__}: {value!r}")
