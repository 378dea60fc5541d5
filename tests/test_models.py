import json

from carreras_bot.models import (
    AvailabilityRecord,
    RaceEvent,
    RegistrationLink,
    dump_events,
    load_events,
    read_events,
    save_events,
)


def _enriched_events():
    return [
        RaceEvent(
            title="Maratón de Panamá",
            date="14/12/2026",
            link="https://carreraspanama.com/maraton",
            image_url="https://img/maraton.jpg",
            registration_links=[
                RegistrationLink("PAGAR CON YAPPY", "https://t.example/yappy"),
                RegistrationLink("PRÓXIMAMENTE", "#"),
            ],
            availability=[
                AvailabilityRecord(
                    is_available=True,
                    type="PAGAR CON YAPPY",
                    price="$45.00",
                    registration_status="Disponibles",
                    additional_info=["Entrega de kits el sábado."],
                ),
            ],
        ),
        RaceEvent(title="Carrera sin enlaces"),
    ]


def test_dump_and_load_round_trip():
    events = _enriched_events()

    assert load_events(dump_events(events)) == events


def test_json_layout_uses_camel_case_and_omits_missing():
    data = json.loads(dump_events(_enriched_events()))

    first, second = data
    assert set(first) == {"title", "date", "link", "imageUrl", "registrationLinks", "availability"}
    assert first["availability"][0]["isAvailable"] is True
    assert first["availability"][0]["registrationStatus"] == "Disponibles"
    assert "availability" not in second


def test_dump_keeps_non_ascii_text():
    assert "Maratón de Panamá" in dump_events(_enriched_events())


def test_save_and_read_file(tmp_path):
    path = tmp_path / "eventos.json"
    events = _enriched_events()

    save_events(events, str(path))

    assert path.read_text(encoding="utf-8").startswith("[\n  {")
    assert read_events(str(path)) == events


def test_checkable_links():
    event = RaceEvent(registration_links=[
        RegistrationLink("A", "https://ok"),
        RegistrationLink("B", "#"),
        RegistrationLink("C", "/relative"),
        RegistrationLink("D", "http://ok-too"),
    ])

    assert [link.type for link in event.checkable_links] == ["A", "D"]
