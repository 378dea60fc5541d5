"""Scraping del listado de carreraspanama.com

La página se renderiza con Playwright y se parsea con BeautifulSoup.
"""

import asyncio
import re

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeout
from bs4 import BeautifulSoup

import config
from carreras_bot.browser import new_page
from carreras_bot.models import RaceEvent, RegistrationLink

DATE_PATTERN = re.compile(r"\d{2}/\d{2}/\d{4}")

IMAGE_SELECTORS = [(".thumb img", "src")]
LINK_SELECTORS = [("h4 a", "href"), (".thumb a", "href")]


async def scrape_listing(browser, url: str = config.TARGET_URL) -> list[RaceEvent]:
    """Carga el listado y extrae los eventos.

    Devuelve una lista vacía si todos los intentos fallan; el llamador no
    distingue entre "sin eventos" y "página rota".
    """
    for attempt in range(1, config.MAX_RETRIES + 2):
        try:
            print(f"[Scraper] intento {attempt}/{config.MAX_RETRIES + 1}")
            html = await _render(browser, url)
        except PlaywrightError as e:
            if attempt <= config.MAX_RETRIES:
                print(f"[Scraper] falló, reintento en {config.RETRY_DELAY_SEC}s: {e}")
                await asyncio.sleep(config.RETRY_DELAY_SEC)
                continue
            print(f"[Error] scraping fallido tras {attempt} intentos: {e}")
            return []

        if html is None:
            return []
        try:
            return parse_listing(html)
        except Exception as e:
            print(f"[Error] extracción del listado fallida: {e}")
            return []
    return []


async def _render(browser, url: str) -> str | None:
    """Navega y espera las tarjetas. None si nunca aparecen."""
    page = await new_page(browser)
    try:
        print(f"[Scraper] cargando página: {url}")
        await page.goto(url, wait_until="networkidle",
                        timeout=config.NAVIGATION_TIMEOUT_MS)
        try:
            await page.wait_for_selector(config.LISTING_SELECTOR,
                                         timeout=config.LISTING_TIMEOUT_MS)
        except PlaywrightTimeout:
            print("[Scraper] advertencia: el listado no apareció a tiempo")
            return None
        html = await page.content()
    finally:
        await page.close()

    print(f"[Scraper] HTML recibido ({len(html):,} caracteres)")
    return html


def parse_listing(html: str) -> list[RaceEvent]:
    soup = BeautifulSoup(html, "html.parser")
    cards = soup.select(config.LISTING_SELECTOR)

    if not cards:
        print("[Scraper] advertencia: no se encontraron tarjetas de eventos.")
        _dump_debug_html(html)
        return []

    events = [_extract_event(card) for card in cards]
    print(f"[Scraper] {len(events)} eventos extraídos")
    return events


def _extract_event(card) -> RaceEvent:
    title_el = card.select_one("h4")
    title = title_el.get_text(strip=True) if title_el else ""

    # Fecha en formato DD/MM/YYYY dentro de .news-meta
    date = config.NO_DATE
    meta_el = card.select_one(".news-meta li")
    if meta_el:
        match = DATE_PATTERN.search(meta_el.get_text())
        if match:
            date = match.group(0)

    registration_links = [
        RegistrationLink(type=a.get_text(strip=True), url=a.get("href") or "#")
        for a in card.select(".buy-ticket a.btn")
    ]

    return RaceEvent(
        title=title or config.NO_TITLE,
        date=date,
        link=_first_attr(card, LINK_SELECTORS) or "#",
        image_url=_first_attr(card, IMAGE_SELECTORS),
        registration_links=registration_links,
    )


def _first_attr(card, candidates: list[tuple[str, str]]) -> str:
    for selector, attr in candidates:
        el = card.select_one(selector)
        if el and el.get(attr):
            return el[attr]
    return ""


def _dump_debug_html(html: str):
    try:
        with open(config.DEBUG_HTML_PATH, "w", encoding="utf-8") as f:
            f.write(html)
        print(f"[Scraper] HTML de depuración guardado: {config.DEBUG_HTML_PATH}")
    except OSError as e:
        print(f"[Scraper] no se pudo guardar el HTML de depuración: {e}")
