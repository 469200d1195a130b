from academic_records.daytime import REMOTE, classify_period, decode_day_time
from academic_records.models import DayPeriod


def test_single_day_token():
    assert decode_day_time("Lu08a12") == [DayPeriod("Lunes", "Mañana")]


def test_composite_token_shares_period():
    assert decode_day_time("MaVi12a14") == [
        DayPeriod("Martes", "Tarde"),
        DayPeriod("Viernes", "Tarde"),
    ]


def test_three_days():
    days = [p.day for p in decode_day_time("LuMiVi19a23")]
    assert days == ["Lunes", "Miércoles", "Viernes"]


def test_all_day_codes():
    tokens = ["Lu08a12", "Ma14a18", "Mi19a23", "Ju08a12", "Vi14a18", "Sa19a23"]
    expected = [
        ("Lunes", "Mañana"),
        ("Martes", "Tarde"),
        ("Miércoles", "Noche"),
        ("Jueves", "Mañana"),
        ("Viernes", "Tarde"),
        ("Sábado", "Noche"),
    ]
    assert [(p.day, p.period) for t in tokens for p in decode_day_time(t)] == expected


def test_remote_token_is_case_and_whitespace_insensitive():
    assert decode_day_time("A distancia") == [REMOTE]
    assert decode_day_time("  a   DISTANCIA ") == [REMOTE]
    assert decode_day_time("Adistancia") == [REMOTE]
    assert REMOTE.day == "A distancia"
    assert REMOTE.period == "Sin horario"


def test_unrecognized_tokens_decode_to_nothing():
    assert decode_day_time("Do08a12") == []
    assert decode_day_time("Lu0812") == []
    assert decode_day_time("") == []


def test_period_boundaries():
    assert classify_period(8) == "Mañana"
    assert classify_period(11) == "Mañana"
    assert classify_period(12) == "Tarde"
    assert classify_period(18) == "Tarde"
    assert classify_period(19) == "Noche"
    assert classify_period(22) == "Noche"
