"""
Handlers de ejemplo para samples/settings.json

El contexto que recibe cada manejador es la lista de eventos de la sesión.
"""

from dialog_core.handlers import HandlerRegistry


class SettingsHandlers:
    """Manejadores referenciados como ``Samples.Settings.<miembro>``."""

    @staticmethod
    def on_about(context):
        context.append("about")

    @staticmethod
    def on_support(context):
        context.append("support")


def build_registry() -> HandlerRegistry:
    """Crea el registro con los manejadores de ejemplo."""
    registry = HandlerRegistry()
    registry.register_type("Samples.Settings", SettingsHandlers)
    return registry
