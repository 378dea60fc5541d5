"""Modelos de datos de eventos y su serialización JSON."""

import json
from dataclasses import dataclass, field

import config


@dataclass
class RegistrationLink:
    type: str
    url: str

    @property
    def is_checkable(self) -> bool:
        return self.url != "#" and self.url.startswith("http")

    def to_dict(self) -> dict:
        return {"type": self.type, "url": self.url}

    @classmethod
    def from_dict(cls, data: dict) -> "RegistrationLink":
        return cls(type=data.get("type", ""), url=data.get("url", "#"))


@dataclass
class AvailabilityRecord:
    is_available: bool = True
    type: str | None = None
    price: str | None = None
    registration_status: str | None = None
    additional_info: list[str] | None = None
    # enlace de inscripción del que salió el registro
    url: str | None = None

    def to_dict(self) -> dict:
        """Claves camelCase; se omiten los opcionales vacíos."""
        d = {
            "type": self.type,
            "price": self.price,
            "registrationStatus": self.registration_status,
            "isAvailable": self.is_available,
            "additionalInfo": self.additional_info,
            "url": self.url,
        }
        return {k: v for k, v in d.items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict) -> "AvailabilityRecord":
        return cls(
            is_available=bool(data["isAvailable"]),
            type=data.get("type"),
            price=data.get("price"),
            registration_status=data.get("registrationStatus"),
            additional_info=data.get("additionalInfo"),
            url=data.get("url"),
        )


def unknown_record() -> AvailabilityRecord:
    """Registro sintético cuando no se extrajo ninguna señal."""
    return AvailabilityRecord(is_available=False, registration_status=config.UNKNOWN_LABEL)


def error_record() -> AvailabilityRecord:
    return AvailabilityRecord(is_available=False, registration_status=config.ERROR_LABEL)


@dataclass
class RaceEvent:
    title: str = config.NO_TITLE
    date: str = config.NO_DATE
    link: str = "#"
    image_url: str = ""
    registration_links: list[RegistrationLink] = field(default_factory=list)
    # None hasta que corre el enriquecimiento
    availability: list[AvailabilityRecord] | None = None

    @property
    def checkable_links(self) -> list[RegistrationLink]:
        return [link for link in self.registration_links if link.is_checkable]

    def to_dict(self) -> dict:
        d = {
            "title": self.title,
            "date": self.date,
            "link": self.link,
            "imageUrl": self.image_url,
            "registrationLinks": [link.to_dict() for link in self.registration_links],
        }
        if self.availability is not None:
            d["availability"] = [record.to_dict() for record in self.availability]
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "RaceEvent":
        availability = data.get("availability")
        return cls(
            title=data.get("title", config.NO_TITLE),
            date=data.get("date", config.NO_DATE),
            link=data.get("link", "#"),
            image_url=data.get("imageUrl", ""),
            registration_links=[
                RegistrationLink.from_dict(item)
                for item in data.get("registrationLinks", [])
            ],
            availability=(
                None if availability is None
                else [AvailabilityRecord.from_dict(item) for item in availability]
            ),
        )


def dump_events(events: list[RaceEvent]) -> str:
    return json.dumps([e.to_dict() for e in events], indent=2, ensure_ascii=False)


def load_events(text: str) -> list[RaceEvent]:
    return [RaceEvent.from_dict(item) for item in json.loads(text)]


def save_events(events: list[RaceEvent], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_events(events))
    print(f"[Storage] {len(events)} eventos guardados: {path}")


def read_events(path: str) -> list[RaceEvent]:
    with open(path, encoding="utf-8") as f:
        return load_events(f.read())
