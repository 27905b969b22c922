"""
Handlers - Registro de manejadores para eventos de pulsación

La aplicación anfitriona registra, antes de materializar, los callables que
el documento puede referenciar con cadenas ``<tipo>.<miembro>`` (por ejemplo
``"Settings.Account.on_logout"``). Las referencias se resuelven al invocar:
un manejador que no existe es una operación nula, nunca un error.

Uso:
    >>> registry = HandlerRegistry()
    >>> @registry.handler("Settings.on_about")
    ... def on_about(context):
    ...     print("about", context)
"""

from typing import Any, Callable, Dict, Optional

from dialog_core.utils import setup_logger
from dialog_core.schema_models import TapHandler

logger = setup_logger(__name__)

HandlerFunc = Callable[[Any], Any]


class HandlerRegistry:
    """Tabla de manejadores indexada por nombre cualificado."""

    def __init__(self):
        self._handlers: Dict[str, HandlerFunc] = {}
        self._types: Dict[str, Any] = {}

    def register(self, reference: str, func: HandlerFunc) -> None:
        """Registra un callable bajo un nombre cualificado completo."""
        self._handlers[reference] = func

    def handler(self, reference: str) -> Callable[[HandlerFunc], HandlerFunc]:
        """Decorador equivalente a ``register``."""
        def decorator(func: HandlerFunc) -> HandlerFunc:
            self.register(reference, func)
            return func
        return decorator

    def register_type(self, type_name: str, owner: Any) -> None:
        """
        Registra un objeto (clase o módulo) cuyos miembros se buscan por nombre.

        ``<type_name>.<miembro>`` se resuelve a ``getattr(owner, miembro)``,
        incluidos los miembros con prefijo ``_``.
        """
        self._types[type_name] = owner

    def resolve(self, reference: str) -> Optional[HandlerFunc]:
        """
        Resuelve una referencia a un callable.

        Returns:
            El callable o None si el tipo o el miembro no existen
        """
        if reference in self._handlers:
            return self._handlers[reference]

        type_name, sep, member = reference.rpartition('.')
        if not sep:
            return None

        owner = self._types.get(type_name)
        if owner is None:
            return None

        func = getattr(owner, member, None)
        if not callable(func):
            return None
        return func

    def invoke(self, reference: str, context: Any = None) -> bool:
        """
        Invoca el manejador con el contexto del anfitrión.

        Returns:
            True si se encontró y ejecutó el manejador, False si no existe
        """
        func = self.resolve(reference)
        if func is None:
            logger.debug(f"Manejador no encontrado: {reference}")
            return False

        func(context)
        return True

    def __contains__(self, reference: str) -> bool:
        return self.resolve(reference) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandlerRegistry):
            return NotImplemented
        return self._handlers == other._handlers and self._types == other._types


def parse_handler_reference(text: str, registry: Optional[HandlerRegistry],
                            context: Any = None) -> Optional[TapHandler]:
    """
    Convierte una cadena del documento en una referencia diferida.

    Las cadenas sin ``.`` no producen manejador.

    Args:
        text: Cadena ``<tipo>.<miembro>``
        registry: Registro donde se resolverá al invocar
        context: Argumento que recibirá el manejador

    Returns:
        TapHandler enlazado o None
    """
    if '.' not in text:
        return None

    tap = TapHandler(reference=text)
    tap._registry = registry
    tap._context = context
    return tap
