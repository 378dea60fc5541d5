"""Ejecución periódica del pipeline con a lo sumo una ejecución en curso."""

import asyncio
import traceback
from datetime import datetime
from typing import Awaitable, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from carreras_bot.settings import Settings

Job = Callable[[Settings], Awaitable[object]]


class PeriodicRunner:
    def __init__(self, settings: Settings, job: Job):
        self.settings = settings
        self.job = job
        self._lock = asyncio.Lock()
        self.skipped = 0

    @property
    def running(self) -> bool:
        return self._lock.locked()

    async def tick(self) -> bool:
        """Ejecuta el job una vez. False si se omitió o falló."""
        if self._lock.locked():
            self.skipped += 1
            print("[Runner] advertencia: la ejecución anterior sigue en curso, se omite este ciclo")
            return False

        async with self._lock:
            try:
                await self.job(self.settings)
            except Exception as e:
                print(f"[Error] ejecución fallida: {e}")
                traceback.print_exc()
                return False
        return True

    def schedule(self, scheduler: AsyncIOScheduler) -> None:
        # el lock decide qué ciclos se omiten
        scheduler.add_job(
            self.tick,
            "interval",
            minutes=self.settings.interval_minutes,
            next_run_time=datetime.now(),
            max_instances=2,
            coalesce=True,
        )

    async def serve(self) -> None:
        scheduler = AsyncIOScheduler()
        self.schedule(scheduler)
        scheduler.start()
        print(f"[Runner] programado cada {self.settings.interval_minutes} minutos")
        try:
            await asyncio.Event().wait()
        finally:
            scheduler.shutdown(wait=False)
