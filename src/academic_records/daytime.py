from __future__ import annotations

from academic_records.models import DayPeriod
from academic_records.patterns import (
    DAY_CODE,
    DAY_CODES,
    DAY_TIME_SHAPE,
    REMOTE_LABEL,
    REMOTE_TOKEN,
)

MORNING = "Mañana"
AFTERNOON = "Tarde"
EVENING = "Noche"
NO_SCHEDULE = "Sin horario"
UNKNOWN = "Desconocido"

REMOTE = DayPeriod(day=REMOTE_LABEL, period=NO_SCHEDULE)
UNKNOWN_SLOT = DayPeriod(day=UNKNOWN, period=UNKNOWN)


def classify_period(start_hour: int) -> str:
    if start_hour < 12:
        return MORNING
    if start_hour < 19:
        return AFTERNOON
    return EVENING


def decode_day_time(token: str) -> list[DayPeriod]:
    """Expand "MaVi12a14" into one (day, period) per day code.

    "A distancia" yields the single REMOTE marker; anything that is not a
    day/time token yields [].
    """
    token = token.strip()
    if REMOTE_TOKEN.match(token):
        return [REMOTE]
    m = DAY_TIME_SHAPE.match(token)
    if m is None:
        return []
    period = classify_period(int(m.group("start")))
    days = DAY_CODE.findall(m.group("days"))
    return [DayPeriod(day=DAY_CODES[code], period=period) for code in days]
