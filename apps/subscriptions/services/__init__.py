"""
Subscriptions services - Business logic layer.

This package contains the subscription lifecycle:
- Tariff lookup
- Expiry reconciliation (shared by scans, purchases and the sweeper)
- Purchase
- Periodic expiration sweep
- Subscription history
"""

from .pricing import Tariff, get_tariff, list_tariffs
from .state_machine import (
    ExpiryOutcome,
    reconcile_expiry,
    expire_if_lapsed,
    create_placeholder_subscription,
)
from .purchase import PurchaseResult, purchase_subscription
from .sweeper import ExpirationSweeper, SweepLock, SweepReport
from .subscription_lookup import get_student_subscriptions

__all__ = [
    # Pricing
    'Tariff',
    'get_tariff',
    'list_tariffs',
    # State machine
    'ExpiryOutcome',
    'reconcile_expiry',
    'expire_if_lapsed',
    'create_placeholder_subscription',
    # Purchase
    'PurchaseResult',
    'purchase_subscription',
    # Sweeper
    'ExpirationSweeper',
    'SweepLock',
    'SweepReport',
    # Lookup
    'get_student_subscriptions',
]
