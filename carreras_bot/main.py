"""Punto de entrada del bot de carreras

Cada 15 minutos:
1. Scraping del listado de carreraspanama.com
2. Disponibilidad de los enlaces de inscripción
3. Email si hay inscripciones con el canal de pago configurado
"""

import argparse
import asyncio
import dataclasses
import sys

from dotenv import load_dotenv

from carreras_bot.errors import ConfigurationError
from carreras_bot.pipeline import run_pipeline
from carreras_bot.runner import PeriodicRunner
from carreras_bot.settings import load_settings


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="carreras-bot")
    parser.add_argument("--once", action="store_true",
                        help="Ejecuta el pipeline una sola vez y termina.")
    parser.add_argument("--output", metavar="PATH",
                        help="Guarda los eventos enriquecidos en un JSON.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    load_dotenv()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"[Error] configuración inválida: {e}")
        return 1

    if args.output:
        settings = dataclasses.replace(settings, output_file=args.output)

    if args.once:
        asyncio.run(run_pipeline(settings))
        return 0

    runner = PeriodicRunner(settings, run_pipeline)
    try:
        asyncio.run(runner.serve())
    except KeyboardInterrupt:
        print("[Runner] detenido por el usuario")
    return 0


if __name__ == "__main__":
    sys.exit(main())
