"""Una ejecución completa del bot.

1. Scraping del listado de carreras
2. Disponibilidad de cada enlace de inscripción (por ventanas)
3. Email si hay inscripciones con el canal de pago configurado
"""

import asyncio
import csv
import os
import time
from datetime import datetime

import config
from carreras_bot.browser import browser_session
from carreras_bot.enricher import enrich_events
from carreras_bot.mailer import find_matches, notify
from carreras_bot.models import RaceEvent, save_events
from carreras_bot.scraper import scrape_listing
from carreras_bot.settings import Settings


def _log_run(run_date: str, events_found: int, matches: int, email_sent: bool,
             duration_sec: float, note: str = "", path: str | None = None):
    """Guarda el registro de la ejecución en CSV."""
    path = path or config.RUN_LOG_PATH
    write_header = not os.path.exists(path)
    with open(path, "a", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        if write_header:
            writer.writerow([
                "date", "events_found", "matches", "email_sent",
                "duration_sec", "note",
            ])
        writer.writerow([
            run_date, events_found, matches, email_sent,
            f"{duration_sec:.1f}", note,
        ])
    print(f"[Usage] registro guardado: {path}")


async def run_pipeline(settings: Settings) -> list[RaceEvent]:
    start_time = time.time()
    now = datetime.now().strftime("%Y-%m-%d %H:%M")

    print(f"=== Bot de carreras ({now}) ===\n")

    # 1. Listado
    print("--- Paso 1: listado de eventos ---")
    async with browser_session() as browser:
        events = await scrape_listing(browser, settings.target_url)

    if not events:
        print("[Pipeline] advertencia: no se encontraron eventos.")
        _log_run(now, 0, 0, False, time.time() - start_time, note="no-events")
        return []

    # 2. Disponibilidad
    print(f"\n--- Paso 2: disponibilidad de {len(events)} eventos ---")
    async with browser_session() as browser:
        events = await enrich_events(browser, events, settings.max_concurrent_pages)

    if settings.output_file:
        try:
            save_events(events, settings.output_file)
        except OSError as e:
            print(f"[Error] no se pudo guardar {settings.output_file}: {e}")

    # 3. Email
    print("\n--- Paso 3: notificación ---")
    matches = find_matches(events, settings.payment_channel)
    email_sent = await asyncio.to_thread(notify, events, settings)

    duration_sec = time.time() - start_time
    _log_run(now, len(events), len(matches), email_sent, duration_sec)

    print(f"\n=== Bot de carreras terminado ({duration_sec:.1f}s) ===")
    return events
