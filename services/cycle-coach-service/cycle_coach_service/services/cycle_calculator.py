from datetime import date, datetime, timedelta

from ..schemas.cycle import CyclePhase, CycleStatus
from ..schemas.profile import UserProfile

DEFAULT_CYCLE_LENGTH = 28

# Fixed 28-day scheme; days past 28 in longer cycles fall through to Follicular.
_PHASE_RANGES = (
    (1, 5, CyclePhase.menstrual),
    (6, 13, CyclePhase.follicular),
    (14, 16, CyclePhase.ovulatory),
    (17, 28, CyclePhase.luteal),
)


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def phase_for_day(cycle_day: int) -> CyclePhase:
    for first, last, phase in _PHASE_RANGES:
        if first <= cycle_day <= last:
            return phase
    return CyclePhase.follicular


def current_phase(
    last_period_date: date | datetime,
    cycle_length: int = DEFAULT_CYCLE_LENGTH,
    today: date | datetime | None = None,
) -> tuple[CyclePhase, int]:
    """Return the phase and 1-based cycle day for ``today``.

    A last period date in the future wraps with floor-mod, so the cycle day
    always stays within ``[1, cycle_length]``.
    """
    if cycle_length < 1:
        raise ValueError(f"cycle_length must be >= 1, got {cycle_length}")

    today = _as_date(today) if today is not None else date.today()
    days_since = (today - _as_date(last_period_date)).days
    cycle_day = days_since % cycle_length + 1
    return phase_for_day(cycle_day), cycle_day


def predict_next_period(last_period_date: date | datetime, cycle_length: int = DEFAULT_CYCLE_LENGTH) -> date:
    return _as_date(last_period_date) + timedelta(days=cycle_length)


def cycle_status(profile: UserProfile, today: date | datetime | None = None) -> CycleStatus:
    today = _as_date(today) if today is not None else date.today()
    cycle_length = profile.average_cycle_length
    phase, cycle_day = current_phase(profile.last_period_date, cycle_length, today)
    next_period = predict_next_period(profile.last_period_date, cycle_length)
    return CycleStatus(
        phase=phase,
        cycle_day=cycle_day,
        cycle_length=cycle_length,
        next_period_date=next_period,
        days_until_next_period=(next_period - today).days,
    )
