import logging

from .config import UNLOCK_COST_POINTS
from .errors import InsufficientPoints, InvalidInput
from .logging_setup import get_logger
from .models import TrackedApp, UnlockPolicy, UnlockResult
from .notification_gate import NotificationGate
from .points import PointsBalance
from .utils import parse_positive_int


class UnlockEconomy:
    """Spends points to unlock a tracked app.

    When the requested minutes exceed what is left of the limit, the limit
    becomes the requested amount and usage starts over. Otherwise the
    requested minutes are taken off the usage. Either way the app is
    unlocked, the cost is debited and its notification flags are cleared.
    """

    def __init__(
        self,
        gate: NotificationGate,
        logger: logging.Logger | None = None,
        cost: int = UNLOCK_COST_POINTS,
    ):
        self._gate = gate
        self._logger = get_logger(logger)
        self.cost = int(cost)

    def request_unlock(self, app: TrackedApp, requested_minutes, points: PointsBalance) -> UnlockResult:
        minutes = parse_positive_int(requested_minutes)
        if minutes is None:
            raise InvalidInput(f"unlock minutes must be a positive whole number, got {requested_minutes!r}")
        if not points.can_afford(self.cost):
            raise InsufficientPoints(points.balance, self.cost)

        remaining = app.remaining
        if minutes > remaining:
            policy = UnlockPolicy.NEW_LIMIT
            new_limit, new_used = minutes, 0
        else:
            policy = UnlockPolicy.USAGE_REDUCED
            new_limit, new_used = app.time_limit, max(0, app.time_used - minutes)

        points_left = points.debit(self.cost)
        app.time_limit = new_limit
        app.time_used = new_used
        app.is_locked = False
        self._gate.clear_flags(app.id)

        self._logger.info(
            f"App unlocked name={app.name} policy={policy.value} minutes={minutes} "
            f"used={app.time_used} limit={app.time_limit} points_left={points_left}"
        )
        return UnlockResult(policy=policy, app=app.snapshot(), points_left=points_left)
