"""Sesión de navegador compartida por una pasada de scraping o de enriquecimiento."""

from contextlib import asynccontextmanager

from playwright.async_api import async_playwright

import config


@asynccontextmanager
async def browser_session():
    """Lanza Chromium headless y lo cierra siempre, incluso si hay error."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=True,
            args=["--no-sandbox", "--disable-setuid-sandbox"],
        )
        print("[Browser] navegador iniciado")
        try:
            yield browser
        finally:
            await browser.close()
            print("[Browser] navegador cerrado")


async def new_page(browser):
    return await browser.new_page(locale="es-PA", user_agent=config.USER_AGENT)
