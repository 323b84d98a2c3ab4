"""
Lending request state machine and cost arithmetic.

Every lifecycle operation goes through ``ensure_transition`` so the allowed
moves live in one table. Amounts are ``Decimal`` quantized to cents.
"""
import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from app.models.enums import LendingStatus
from app.utils.errors import InvalidState

S = LendingStatus

ALLOWED_TRANSITIONS = {
    S.PENDING: {S.ACCEPTED, S.REJECTED, S.CANCELLED},
    S.ACCEPTED: {S.ACTIVE, S.COMPLETED, S.CANCELLED, S.DISPUTED},
    S.ACTIVE: {S.COMPLETED, S.DISPUTED},
    S.REJECTED: set(),
    S.COMPLETED: set(),
    S.CANCELLED: set(),
    S.DISPUTED: set(),
}

TERMINAL = {s for s, targets in ALLOWED_TRANSITIONS.items() if not targets}

# statuses in which the request holds the item
HOLDS_ITEM = {S.ACCEPTED, S.ACTIVE}

LATE_FEE_MULTIPLIER = Decimal("1.5")
CENT = Decimal("0.01")
SECONDS_PER_DAY = 24 * 60 * 60


def can_transition(current, target) -> bool:
    return S(target) in ALLOWED_TRANSITIONS.get(S(current), set())


def sources_for(target) -> list[str]:
    """Statuses from which ``target`` is reachable."""
    return [s.value for s, targets in ALLOWED_TRANSITIONS.items() if S(target) in targets]


def ensure_transition(current, target, message: str | None = None):
    if not can_transition(current, target):
        raise InvalidState(
            message or f"Cannot move request from {S(current).value} to {S(target).value}"
        )


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def _ceil_days(later: datetime, earlier: datetime) -> int:
    return math.ceil((later - earlier).total_seconds() / SECONDS_PER_DAY)


def rental_days(start: datetime, end: datetime) -> int:
    return _ceil_days(end, start)


def total_cost(start: datetime, end: datetime, daily_rate) -> Decimal:
    return _money(Decimal(rental_days(start, end)) * Decimal(str(daily_rate)))


def late_fee(end: datetime, actual_return: datetime, daily_rate) -> tuple[int, Decimal]:
    """(late_days, fee); both zero for on-time returns."""
    if actual_return <= end:
        return 0, _money(0)
    days = _ceil_days(actual_return, end)
    return days, _money(Decimal(days) * Decimal(str(daily_rate)) * LATE_FEE_MULTIPLIER)
