from __future__ import annotations

import re
import unicodedata

# ---------- Text normalization ----------


def normalize_text(s: str) -> str:
    s = s.replace("\xa0", " ").replace("\u202f", " ").replace("\u200b", "")
    s = s.replace("\u2013", "-").replace("\u2014", "-").replace("\u2212", "-")
    return s


def fold(s: str) -> str:
    """Lowercase and drop accents, for accent-tolerant keyword matching."""
    decomposed = unicodedata.normalize("NFKD", s)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def collapse_ws(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip()


# ---------- Transcript anchors ----------

# {Nro}{Origen}{PlanCode 5 digits}{remainder}
RECORD_START = re.compile(
    r"^(?P<nro>\d+)"
    r"(?P<origin>Promoci[oó]n|Equivalencia|Examen|Aprobado|Regular)"
    r"(?P<plan>\d{5})"
    r"(?P<rest>.*)$",
    re.IGNORECASE,
)

DATE = re.compile(r"\d{2}/\d{2}/\d{4}")

# Acta is the run of digits (optionally with a slash) glued before the date.
NAME_ACTA = re.compile(r"^(?P<name>.*?)(?P<acta>[0-9][0-9/]*)$", re.DOTALL)

GRADE = re.compile(r"\d+")

# ---------- Offering anchors ----------

DAY_CODES = {
    "Lu": "Lunes",
    "Ma": "Martes",
    "Mi": "Miércoles",
    "Ju": "Jueves",
    "Vi": "Viernes",
    "Sa": "Sábado",
}

REMOTE_LABEL = "A distancia"

_DAY_ALT = "|".join(DAY_CODES)

# Located inside a line. Any run of title-case two-letter codes is accepted
# here (the decoder checks the codes); uppercase subject names never match.
DAY_TIME_TOKEN = re.compile(r"(?P<token>(?:[A-Z][a-z])+\d{1,2}a\d{1,2})")

# Remote marker only counts right after a commission, so "A DISTANCIA" inside
# a subject name is not taken for it.
REMOTE_MARKER = re.compile(r"(?:(?<=\d)|(?<=\d\s)|(?<=\)))(?P<token>(?i:a\s*distancia))")

# Full shape of a day/time token, used by the decoder.
DAY_TIME_SHAPE = re.compile(
    rf"^(?P<days>(?:{_DAY_ALT})+)(?P<start>\d{{1,2}})a(?P<end>\d{{1,2}})$"
)
DAY_CODE = re.compile(_DAY_ALT)

REMOTE_TOKEN = re.compile(r"^a\s*distancia$", re.IGNORECASE)

# 4-digit plan code directly followed by a letter: start of a subject header.
SUBJECT_START = re.compile(r"^(?P<code>\d{4})(?P<description>[^\W\d_].*)$")

_NOT_OFFERED = r"\(?no\s*ofertad[ao]\)?"
_COMMISSION = rf"(?P<commission>\d+(?:\s*{_NOT_OFFERED})?|{_NOT_OFFERED})"

NOT_OFFERED = re.compile(_NOT_OFFERED, re.IGNORECASE)

# {code}{description}{commission} before the day/time token.
OFFERING_PREFIX = re.compile(
    rf"^(?P<code>\d{{4}})(?P<description>[^\W\d_].*?)\s*{_COMMISSION}$",
    re.IGNORECASE,
)

# Prefix of a merged-cell row: just the commission.
BARE_COMMISSION = re.compile(rf"^{_COMMISSION}$", re.IGNORECASE)

# Wrapped description tail followed by the commission: "INFORMACION1300".
CONTINUED_PREFIX = re.compile(
    rf"^(?P<description>[^\W\d_].*?)\s*{_COMMISSION}$",
    re.IGNORECASE,
)

BARE_PLAN_CODE = re.compile(r"^\d{4}$")

URL_PAT = re.compile(r"(?i)(https?://|www\.|\.php\b|\.aspx?\b|\.html?\b)")


def find_date(s: str) -> re.Match[str] | None:
    return DATE.search(s)


def find_day_time(s: str) -> re.Match[str] | None:
    """Locate the day/time token; a day code wins over a remote marker."""
    m = DAY_TIME_TOKEN.search(s)
    if m is not None:
        return m
    # The last marker is the one glued to the commission.
    remotes = list(REMOTE_MARKER.finditer(s))
    return remotes[-1] if remotes else None
