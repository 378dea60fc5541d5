import asyncio

import pytest
from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError

import config


class DummyElement:
    def __init__(self, markup, should_raise=None):
        self._markup = markup
        self._should_raise = should_raise

    async def inner_html(self):
        if self._should_raise:
            raise self._should_raise
        return self._markup


class DummyPage:
    """Página falsa: `site` mapea url -> html o url -> excepción a lanzar."""

    def __init__(self, browser, site):
        self.browser = browser
        self.site = site
        self.url = None
        self.visited = []
        self.routes = []
        self.route_handlers = []
        self.closed = False
        self.wait_for_selector_should_raise = browser.wait_for_selector_should_raise

    async def goto(self, url, wait_until=None, timeout=None):
        self.visited.append(url)
        if self.browser.goto_delay:
            await asyncio.sleep(self.browser.goto_delay)
        target = self.site.get(url)
        if isinstance(target, Exception):
            raise target
        self.url = url

    async def wait_for_selector(self, selector, timeout=None):
        if self.wait_for_selector_should_raise:
            raise self.wait_for_selector_should_raise

    async def content(self):
        return self.site.get(self.url, "")

    async def query_selector(self, selector):
        soup = BeautifulSoup(self.site.get(self.url, ""), "html.parser")
        el = soup.select_one(selector)
        if el is None:
            return None
        if self.url in self.browser.broken_regions:
            return DummyElement("", should_raise=PlaywrightError("Element is not attached to the DOM"))
        return DummyElement(el.decode_contents())

    async def route(self, pattern, handler):
        self.routes.append(pattern)
        self.route_handlers.append(handler)

    async def close(self):
        self.closed = True
        self.browser.open_pages -= 1


class DummyBrowser:
    def __init__(self, site=None, goto_delay=0, wait_for_selector_should_raise=None,
                 broken_regions=()):
        self.site = site or {}
        self.broken_regions = set(broken_regions)
        self.goto_delay = goto_delay
        self.wait_for_selector_should_raise = wait_for_selector_should_raise
        self.pages = []
        self.open_pages = 0
        self.max_open_pages = 0

    async def new_page(self, **kwargs):
        page = DummyPage(self, self.site)
        self.pages.append(page)
        self.open_pages += 1
        self.max_open_pages = max(self.max_open_pages, self.open_pages)
        return page


@pytest.fixture
def dummy_browser():
    return DummyBrowser


@pytest.fixture(autouse=True)
def no_side_files(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "RETRY_DELAY_SEC", 0)
    monkeypatch.setattr(config, "DEBUG_HTML_PATH", str(tmp_path / "debug_page.html"))
    monkeypatch.setattr(config, "RUN_LOG_PATH", str(tmp_path / "usage_log.csv"))


LISTING_HTML = """
<html><body>
<div id="eventos2"><div><div><div><div>
  <div class="col-lg-4 col-md-6">
    <div>
      <div class="thumb"><a href="https://carreraspanama.com/evento-a"><img src="https://img/a.jpg"></a></div>
      <h4><a href="https://carreraspanama.com/evento-a"> Carrera A </a></h4>
      <ul class="news-meta"><li>Fecha: 12/03/2026</li></ul>
      <div class="buy-ticket">
        <a class="btn" href="https://tickets.example/a">PAGAR CON YAPPY</a>
      </div>
    </div>
  </div>
  <div class="col-lg-4 col-md-6">
    <div>
      <h4>Carrera B</h4>
      <ul class="news-meta"><li>Próximamente</li></ul>
      <div class="buy-ticket">
        <a class="btn" href="#">PRÓXIMAMENTE</a>
      </div>
    </div>
  </div>
</div></div></div></div></div>
</body></html>
"""


@pytest.fixture
def listing_html():
    return LISTING_HTML
