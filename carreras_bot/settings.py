"""Configuración de entorno, validada una sola vez al arrancar."""

import os
from dataclasses import dataclass, field
from typing import Mapping

import config
from carreras_bot.errors import ConfigurationError

REQUIRED_VARS = ("GMAIL_ADDRESS", "GMAIL_APP_PASSWORD", "RECIPIENT_EMAILS")


@dataclass(frozen=True)
class Settings:
    sender: str
    password: str
    recipients: list[str] = field(default_factory=list)
    target_url: str = config.TARGET_URL
    payment_channel: str = config.PAYMENT_CHANNEL
    interval_minutes: int = config.CHECK_INTERVAL_MINUTES
    max_concurrent_pages: int = config.MAX_CONCURRENT_PAGES
    output_file: str | None = None


def parse_recipients(raw: str | None) -> list[str]:
    """'a@x.com, b@y.com' -> ['a@x.com', 'b@y.com']"""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _int_option(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} debe ser un entero: {raw!r}") from e
    if value < 1:
        raise ConfigurationError(f"{name} debe ser mayor que 0: {value}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Lee las variables de entorno y falla si falta alguna obligatoria.

    Se llama una vez en main() antes de programar cualquier ejecución;
    el resto del código recibe el Settings resultante.
    """
    if environ is None:
        environ = os.environ

    sender = environ.get("GMAIL_ADDRESS", "").strip()
    password = environ.get("GMAIL_APP_PASSWORD", "").strip()
    recipients = parse_recipients(environ.get("RECIPIENT_EMAILS"))

    missing = [
        name for name, value in zip(REQUIRED_VARS, (sender, password, recipients))
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Faltan variables de entorno obligatorias: {', '.join(missing)}"
        )

    return Settings(
        sender=sender,
        password=password,
        recipients=recipients,
        target_url=environ.get("TARGET_URL", "").strip() or config.TARGET_URL,
        payment_channel=environ.get("PAYMENT_CHANNEL", "").strip() or config.PAYMENT_CHANNEL,
        interval_minutes=_int_option(
            environ, "CHECK_INTERVAL_MINUTES", config.CHECK_INTERVAL_MINUTES),
        max_concurrent_pages=_int_option(
            environ, "MAX_CONCURRENT_PAGES", config.MAX_CONCURRENT_PAGES),
        output_file=environ.get("OUTPUT_FILE", "").strip() or None,
    )
