"""Excepciones del bot de carreras.

Solo ConfigurationError detiene el proceso; el resto se registra y el
pipeline continúa con un valor de respaldo.
"""


class CarrerasBotError(Exception):
    """Base de todos los errores del bot."""


class ConfigurationError(CarrerasBotError):
    """Faltan credenciales o destinatarios al arrancar."""


class NavigationError(CarrerasBotError):
    """Timeout o fallo al navegar a una página."""


class ExtractionError(CarrerasBotError):
    """El DOM no tenía la forma esperada."""


class DeliveryError(CarrerasBotError):
    """Fallo al enviar el email."""
