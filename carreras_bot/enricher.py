"""Enriquecimiento de eventos con la disponibilidad de cada enlace de inscripción."""

from dataclasses import dataclass
from functools import partial

from playwright.async_api import Error as PlaywrightError

import config
from carreras_bot.batching import run_in_windows
from carreras_bot.browser import new_page
from carreras_bot.classifier import classify
from carreras_bot.errors import CarrerasBotError, ExtractionError, NavigationError
from carreras_bot.models import (
    AvailabilityRecord,
    RaceEvent,
    RegistrationLink,
    error_record,
    unknown_record,
)


@dataclass
class LinkCheck:
    """Resultado de visitar un enlace.

    record=None y error=None significa que la página cargó pero no tenía
    región de información.
    """
    link: RegistrationLink
    record: AvailabilityRecord | None = None
    error: CarrerasBotError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def _block_heavy_resources(route):
    if route.request.resource_type in config.BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


async def check_link(page, link: RegistrationLink) -> LinkCheck:
    try:
        await page.goto(link.url, wait_until="networkidle",
                        timeout=config.NAVIGATION_TIMEOUT_MS)
    except PlaywrightError as e:
        return LinkCheck(link, error=NavigationError(f"{link.url}: {e}"))

    # un fallo leyendo o clasificando la región cuenta como "sin señal"
    try:
        info = await page.query_selector(config.INFO_SELECTOR)
        if info is None:
            return LinkCheck(link)
        markup = await info.inner_html()
        record = classify(markup, link.type, link.url)
    except Exception as e:
        return LinkCheck(link, error=ExtractionError(f"{link.url}: {e}"))

    return LinkCheck(link, record=record)


async def _collect_records(browser, links: list[RegistrationLink]) -> list[AvailabilityRecord]:
    page = await new_page(browser)
    try:
        await page.route("**/*", _block_heavy_resources)
        records = []
        for link in links:
            print(f"[Enricher] visitando: {link.url}")
            check = await check_link(page, link)
            if not check.ok:
                print(f"[Enricher] advertencia: {type(check.error).__name__}: {check.error}")
            elif check.record is not None:
                records.append(check.record)
        return records
    finally:
        await page.close()


async def enrich_event(browser, event: RaceEvent) -> RaceEvent:
    """Adjunta la lista de disponibilidad al evento.

    Los eventos sin enlaces http se devuelven sin tocar. Nunca propaga
    errores: en el peor caso deja un único registro de error.
    """
    links = event.checkable_links
    if not links:
        print(f"[Enricher] sin enlaces válidos: {event.title}")
        return event

    try:
        records = await _collect_records(browser, links)
    except Exception as e:
        print(f"[Error] disponibilidad de '{event.title}' fallida: {e}")
        event.availability = [error_record()]
        return event

    if not records:
        records.append(unknown_record())
    event.availability = records
    print(f"[Enricher] {event.title}: {len(records)} registros")
    return event


async def enrich_events(browser, events: list[RaceEvent],
                        max_concurrent: int = config.MAX_CONCURRENT_PAGES) -> list[RaceEvent]:
    return await run_in_windows(events, partial(enrich_event, browser), max_concurrent)
