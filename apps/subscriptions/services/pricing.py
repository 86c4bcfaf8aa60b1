"""Tariff lookup over ``settings.CANTEEN_PRICING``."""

from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings

from apps.subscriptions.exceptions import InvalidDurationError


@dataclass(frozen=True)
class Tariff:
    duration: int
    price: Decimal
    type: str


def list_tariffs() -> list[Tariff]:
    """All configured tariffs, shortest first."""
    return [
        Tariff(duration=duration, price=Decimal(entry['price']), type=entry['type'])
        for duration, entry in sorted(settings.CANTEEN_PRICING.items())
    ]


def get_tariff(duration: int) -> Tariff:
    """
    Resolve a subscription duration (days) to its tariff.

    Raises:
        InvalidDurationError: If no tariff exists for this duration
    """
    entry = settings.CANTEEN_PRICING.get(duration)
    if entry is None:
        allowed = ', '.join(str(d) for d in sorted(settings.CANTEEN_PRICING))
        raise InvalidDurationError(
            f"Durée invalide : {duration} jours. Durées proposées : {allowed}."
        )
    return Tariff(duration=duration, price=Decimal(entry['price']), type=entry['type'])
