"""Meals services - QR scan admission and meal history."""

from .admission import AdmissionDecision, admit, canteen_day
from .meal_history import get_meal_history

__all__ = [
    'AdmissionDecision',
    'admit',
    'canteen_day',
    'get_meal_history',
]
