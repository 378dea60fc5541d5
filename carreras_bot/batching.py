"""Ejecución por ventanas de tamaño fijo.

Cada ventana corre en paralelo y se espera completa antes de iniciar la
siguiente, así nunca hay más de `size` pestañas abiertas a la vez.
"""

import asyncio
from typing import Awaitable, Callable, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def run_in_windows(items: Sequence[T],
                         worker: Callable[[T], Awaitable[R]],
                         size: int) -> list[R]:
    if size < 1:
        raise ValueError(f"el tamaño de ventana debe ser >= 1: {size}")

    results: list[R] = []
    for start in range(0, len(items), size):
        window = items[start:start + size]
        # gather conserva el orden de entrada
        results.extend(await asyncio.gather(*(worker(item) for item in window)))
        print(f"[Batch] procesados {len(results)} de {len(items)}")
    return results
