"""
Value View - Acceso tolerante a fallos sobre el documento genérico

El documento de entrada es el árbol de valores que producen ``json.load`` o
``yaml.safe_load``: diccionarios, listas, strings, números, booleanos y None.
Estas funciones nunca modifican el documento ni lanzan excepciones.

Asimetría intencionada:
    - get_string / get_array / get_record devuelven None si la clave falta
      o el valor es de otro tipo (opcionalidad comprobable con ``is None``).
    - get_boolean devuelve False en cualquier caso que no sea un booleano real.
"""

from typing import Any, Dict, List, Optional


def has_key(record: Any, key: str) -> bool:
    """Indica si el registro es un diccionario que contiene la clave."""
    return isinstance(record, dict) and key in record


def get_string(record: Any, key: str) -> Optional[str]:
    """
    Obtiene un valor string del registro.

    Args:
        record: Registro (diccionario) del documento
        key: Clave a consultar

    Returns:
        El string si existe y es de tipo string, None en otro caso
    """
    if has_key(record, key):
        value = record[key]
        if isinstance(value, str):
            return value
    return None


def get_array(record: Any, key: str) -> Optional[List[Any]]:
    """
    Obtiene un valor lista del registro.

    Args:
        record: Registro (diccionario) del documento
        key: Clave a consultar

    Returns:
        La lista si existe y es de tipo lista, None en otro caso
    """
    if has_key(record, key):
        value = record[key]
        if isinstance(value, list):
            return value
    return None


def get_record(record: Any, key: str) -> Optional[Dict[str, Any]]:
    """Obtiene un sub-registro (diccionario) o None."""
    if has_key(record, key):
        value = record[key]
        if isinstance(value, dict):
            return value
    return None


def get_boolean(record: Any, key: str) -> bool:
    """
    Obtiene un booleano del registro con semántica "por defecto False".

    Nunca falla: claves ausentes, valores de otro tipo (incluidos 0/1 y
    "true") o registros que no son diccionarios devuelven False.
    """
    if not has_key(record, key):
        return False

    value = record[key]
    if isinstance(value, bool):
        return value
    return False
