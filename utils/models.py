# utils/models.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Service:
    id: int
    name: str
    description: str
    price: Decimal
    duration: int  # minutes

    @classmethod
    def from_dict(cls, data: dict) -> "Service":
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            # str() first so 150000.1 does not turn into a binary float artefact
            price=Decimal(str(data.get("price") or 0)),
            duration=int(data.get("duration") or 0),
        )


@dataclass(frozen=True)
class BookingRequest:
    name: str
    phone: str
    email: str
    service_id: int
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    message: str = ""

    REQUIRED = ("name", "phone", "email", "service", "date", "time")

    @classmethod
    def from_form(cls, form: dict) -> "BookingRequest":
        """Raises ValueError if the service field is not an integer id."""
        return cls(
            name=form.get("name"),
            phone=form.get("phone"),
            email=form.get("email"),
            service_id=int(form.get("service")),
            date=form.get("date"),
            time=form.get("time"),
            message=form.get("message") or "",
        )

    def to_payload(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ContactRequest:
    name: str
    email: str
    subject: str
    message: str

    REQUIRED = ("name", "email", "subject", "message")

    @classmethod
    def from_form(cls, form: dict) -> "ContactRequest":
        return cls(
            name=form.get("name"),
            email=form.get("email"),
            subject=form.get("subject"),
            message=form.get("message"),
        )

    def to_payload(self) -> dict:
        return asdict(self)


def missing_fields(form: dict, required) -> list[str]:
    return [name for name in required if not form.get(name)]
