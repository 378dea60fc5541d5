"""Aviso por Gmail SMTP cuando hay inscripciones disponibles con el canal de pago"""

import smtplib
from html import escape
from dataclasses import dataclass
from datetime import date as Date
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import config
from carreras_bot.errors import DeliveryError
from carreras_bot.models import AvailabilityRecord, RaceEvent
from carreras_bot.settings import Settings


@dataclass
class Match:
    event: RaceEvent
    record: AvailabilityRecord
    url: str


def find_matches(events: list[RaceEvent], channel: str) -> list[Match]:
    """Eventos con un registro disponible cuyo tipo es exactamente `channel`."""
    matches = []
    for event in events:
        record = next(
            (r for r in event.availability or []
             if r.type == channel and r.is_available),
            None,
        )
        if record is None:
            continue
        url = record.url
        if not url:
            link = next((lk for lk in event.registration_links if lk.type == channel), None)
            url = link.url if link else event.link
        matches.append(Match(event=event, record=record, url=url))
    return matches


def notify(events: list[RaceEvent], settings: Settings, today: str | None = None) -> bool:
    """Envía el resumen si corresponde. Devuelve True si se envió un email."""
    matches = find_matches(events, settings.payment_channel)
    if not matches:
        print(f"[Mailer] sin eventos disponibles con {settings.payment_channel}, no se envía")
        return False

    today = today or Date.today().strftime("%d/%m/%Y")
    subject = config.EMAIL_SUBJECT.format(date=today, channel=settings.payment_channel)
    try:
        send_email(settings, subject,
                   _build_plain_text(matches, settings.payment_channel),
                   _build_html(matches, settings.payment_channel))
    except DeliveryError as e:
        print(f"[Error] envío de email fallido: {e}")
        return False
    return True


def send_email(settings: Settings, subject: str, plain: str, html: str) -> None:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{config.SENDER_NAME} <{settings.sender}>"
    msg["To"] = ", ".join(settings.recipients)

    msg.attach(MIMEText(plain, "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))

    try:
        with smtplib.SMTP_SSL(config.SMTP_HOST, config.SMTP_PORT) as server:
            server.login(settings.sender, settings.password)
            server.sendmail(settings.sender, settings.recipients, msg.as_string())
    except (smtplib.SMTPException, OSError) as e:
        raise DeliveryError(str(e)) from e

    print(f"[Mailer] email enviado -> {', '.join(settings.recipients)}")


def _build_plain_text(matches: list[Match], channel: str) -> str:
    lines = [f"== Disponibles con {channel} ({len(matches)}) ==\n"]
    for m in matches:
        lines.append(f"- {m.event.title}")
        lines.append(f"  Fecha: {m.event.date}")
        lines.append(f"  Precio: {m.record.price or config.NO_PRICE}")
        lines.append(f"  Inscripción: {m.url}")
        lines.append("")
    lines.append(f"Página: {config.TARGET_URL}")
    return "\n".join(lines)


def _build_html(matches: list[Match], channel: str) -> str:
    parts = [f'''
    <div style="margin-bottom:20px;padding:12px 16px;background:#fff0f0;border-left:4px solid #ff6b6b;border-radius:4px;font-size:14px;color:#555;">
        <strong>{len(matches)}</strong> eventos con pago {escape(channel)} disponible
    </div>''']

    for m in matches:
        parts.append(_event_card_html(m, channel))

    parts.append(f'''
    <div style="margin-top:20px;text-align:center;">
        <a href="{config.TARGET_URL}" style="display:inline-block;padding:10px 24px;background:#ff6b6b;color:white;text-decoration:none;border-radius:6px;font-weight:bold;">Ver todas las carreras</a>
    </div>''')

    return _wrap_html("\n".join(parts))


def _event_card_html(match: Match, channel: str) -> str:
    event = match.event
    title = escape(event.title)
    price = escape(match.record.price or config.NO_PRICE)
    status = escape(match.record.registration_status or config.AVAILABLE_LABEL)
    parts = ['''
    <div style="margin:20px 0;background:#ffffff;border-radius:10px;overflow:hidden;box-shadow:0 2px 8px rgba(0,0,0,0.1);">''']

    if event.image_url:
        parts.append(f'<img src="{escape(event.image_url)}" alt="{title}" style="width:100%;display:block;">')

    parts.append(f'''
        <div style="padding:20px;">
            <h2 style="font-size:20px;margin:0 0 10px;">{title}</h2>
            <p style="color:#ff6b6b;margin:0 0 15px;">Fecha: {escape(event.date)}</p>
            <a href="{escape(match.url)}" style="display:inline-block;padding:10px 20px;background:#ff6b6b;color:white;text-decoration:none;border-radius:5px;font-weight:bold;">{escape(channel)}</a>
            <div style="margin-top:15px;padding:10px;background:#f9f9f9;border-radius:5px;">
                <p style="margin:5px 0;">Precio: {price}</p>
                <p style="margin:5px 0;color:#2ecc71;font-weight:bold;">{status}</p>
            </div>
        </div>''')

    parts.append('</div>')
    return "\n".join(parts)


def _wrap_html(content: str) -> str:
    return f'''<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family:Arial,sans-serif;max-width:600px;margin:0 auto;padding:20px;line-height:1.6;color:#333;">
<div style="background:#ff6b6b;color:white;padding:20px 30px;border-radius:10px;margin-bottom:30px;text-align:center;">
    <h1 style="margin:0;font-size:24px;">¡Inscripciones disponibles!</h1>
    <p style="margin:5px 0 0;opacity:0.9;">Revisión automática de carreraspanama.com</p>
</div>
<div style="padding:0 10px;">
{content}
</div>
<div style="margin-top:40px;padding:15px;background:#f8f9fa;border-radius:8px;text-align:center;color:#888;font-size:13px;">
    Email generado automáticamente por el bot de carreras.
</div>
</body>
</html>'''
