"""Clasificación de disponibilidad de una región #informacion.

Tres reglas evaluadas en orden; la primera que declara "agotado" termina
la evaluación:

1. markup_rule: el HTML crudo contiene "Inscripciones:" y una palabra de agotado
2. status_element_rule: el texto de `.in-stock strong`
3. full_text_rule: búsqueda de palabras clave en todo el texto

El estado final es el primero que alguna regla haya producido. Si ninguna
regla declara agotado, el registro queda disponible.
"""

from dataclasses import dataclass
from typing import Callable

from bs4 import BeautifulSoup

import config
from carreras_bot.models import AvailabilityRecord

PRICE_SELECTORS = [".price ins", "span.in-stock"]
STATUS_SELECTOR = ".in-stock strong"


@dataclass
class Region:
    markup: str
    soup: BeautifulSoup

    @property
    def text(self) -> str:
        return self.soup.get_text(" ", strip=True)

    @classmethod
    def parse(cls, markup: str) -> "Region":
        return cls(markup=markup, soup=BeautifulSoup(markup, "html.parser"))


@dataclass
class Verdict:
    status: str | None = None
    sold_out: bool = False


Rule = Callable[[Region], Verdict | None]


def _contains_any(text: str, keywords: list[str]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def markup_rule(region: Region) -> Verdict | None:
    markup = region.markup.lower()
    if (config.REGISTRATIONS_MARKER.lower() in markup
            and _contains_any(markup, config.SOLD_OUT_KEYWORDS)):
        return Verdict(status=config.SOLD_OUT_LABEL, sold_out=True)
    return None


def status_element_rule(region: Region) -> Verdict | None:
    status_el = region.soup.select_one(STATUS_SELECTOR)
    if not status_el:
        return None
    status = status_el.get_text(strip=True)
    if not status:
        return None
    return Verdict(status=status, sold_out=status == config.SOLD_OUT_LABEL)


def full_text_rule(region: Region) -> Verdict | None:
    text = region.text
    if _contains_any(text, config.SOLD_OUT_KEYWORDS):
        return Verdict(status=config.SOLD_OUT_LABEL, sold_out=True)
    if _contains_any(text, config.AVAILABLE_KEYWORDS):
        return Verdict(status=config.AVAILABLE_LABEL)
    return None


RULES: list[Rule] = [markup_rule, status_element_rule, full_text_rule]


def evaluate_rules(region: Region, rules: list[Rule] = RULES) -> Verdict:
    """Combina las reglas según su precedencia."""
    result = Verdict()
    for rule in rules:
        verdict = rule(region)
        if verdict is None:
            continue
        if result.status is None:
            result.status = verdict.status
        if verdict.sold_out:
            result.sold_out = True
            break
    return result


def extract_price(region: Region) -> str | None:
    for selector in PRICE_SELECTORS:
        el = region.soup.select_one(selector)
        if el:
            price = el.get_text(strip=True)
            if price:
                return price
    return None


def extract_notes(region: Region) -> list[str]:
    notes = []
    for p in region.soup.find_all("p"):
        text = p.get_text(strip=True)
        if not text:
            continue
        if config.REGISTRATIONS_MARKER in text or text.startswith(config.PRICE_PREFIX):
            continue
        notes.append(text)
    return notes


def classify(markup: str, link_type: str | None = None,
             url: str | None = None) -> AvailabilityRecord:
    region = Region.parse(markup)
    verdict = evaluate_rules(region)
    return AvailabilityRecord(
        is_available=not verdict.sold_out,
        type=link_type,
        price=extract_price(region),
        registration_status=verdict.status,
        additional_info=extract_notes(region),
        url=url,
    )
