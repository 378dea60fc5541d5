import csv
from contextlib import asynccontextmanager
from unittest.mock import patch

import pytest

import config
from carreras_bot.main import main
from carreras_bot.models import read_events
from carreras_bot.pipeline import run_pipeline
from carreras_bot.settings import Settings

CHANNEL = "PAY WITH CHANNEL"

LISTING = f"""
<div id="eventos2"><div><div><div><div>
  <div class="col-lg-4 col-md-6"><div>
    <div class="thumb"><img src="https://img/a.jpg"></div>
    <h4><a href="https://carreraspanama.com/a">Evento A</a></h4>
    <ul class="news-meta"><li>05/04/2026</li></ul>
    <div class="buy-ticket"><a class="btn" href="https://t.example/a">{CHANNEL}</a></div>
  </div></div>
  <div class="col-lg-4 col-md-6"><div>
    <h4>Evento B</h4>
    <div class="buy-ticket"><a class="btn" href="#">{CHANNEL}</a></div>
  </div></div>
</div></div></div></div></div>
"""

INFO_A = '<div id="informacion"><p>Cupos Disponibles</p></div>'


@pytest.fixture
def settings(tmp_path):
    return Settings(
        sender="bot@gmail.com",
        password="x",
        recipients=["uno@example.com"],
        target_url="https://carreras.test/",
        payment_channel=CHANNEL,
        output_file=str(tmp_path / "eventos.json"),
    )


@pytest.fixture
def fake_session(dummy_browser):
    browser = dummy_browser(site={
        "https://carreras.test/": LISTING,
        "https://t.example/a": INFO_A,
    })

    @asynccontextmanager
    async def session():
        yield browser

    with patch("carreras_bot.pipeline.browser_session", session):
        yield browser


@pytest.mark.asyncio
async def test_end_to_end_single_digest(settings, fake_session):
    with patch("carreras_bot.mailer.send_email") as send:
        events = await run_pipeline(settings)

    a, b = events
    assert len(a.availability) == 1
    assert a.availability[0].is_available is True
    assert a.availability[0].type == CHANNEL
    assert b.availability is None

    send.assert_called_once()
    _, _, plain, html = send.call_args.args
    assert "Evento A" in html and "https://t.example/a" in html
    assert "Evento B" not in html and "Evento B" not in plain

    assert read_events(settings.output_file) == events

    with open(config.RUN_LOG_PATH, encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["events_found"] == "2"
    assert rows[0]["matches"] == "1"
    assert rows[0]["email_sent"] == "True"


@pytest.mark.asyncio
async def test_no_events_skips_enrichment_and_email(settings, dummy_browser):
    browser = dummy_browser(site={"https://carreras.test/": "<html></html>"})

    @asynccontextmanager
    async def session():
        yield browser

    with patch("carreras_bot.pipeline.browser_session", session), \
            patch("carreras_bot.mailer.send_email") as send:
        assert await run_pipeline(settings) == []

    send.assert_not_called()


def test_main_aborts_without_configuration(monkeypatch, capsys):
    for name in ("GMAIL_ADDRESS", "GMAIL_APP_PASSWORD", "RECIPIENT_EMAILS"):
        monkeypatch.delenv(name, raising=False)

    with patch("carreras_bot.main.load_dotenv"), \
            patch("carreras_bot.main.PeriodicRunner") as runner:
        assert main([]) == 1

    runner.assert_not_called()
    assert "GMAIL_ADDRESS" in capsys.readouterr().out
