"""Course offering ("Oferta de Materias") segmentation.

Rows look like {PlanCode 4 digits}{Description}{Commission}{DayTime} {Modality} {Location}
with no delimiters, and the PDF table uses merged cells: after the first
commission of a subject, the following rows only carry {Commission}{DayTime}...
so the last header seen is carried forward.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from academic_records.config import Settings
from academic_records.daytime import REMOTE, UNKNOWN_SLOT, decode_day_time
from academic_records.extract import PdfSource, extract_text
from academic_records.models import (
    OfferingHeaderState,
    ParsedOfferingSlot,
    ParseReport,
    Skipped,
    normalize_plan_code,
)
from academic_records.patterns import (
    BARE_COMMISSION,
    BARE_PLAN_CODE,
    CONTINUED_PREFIX,
    NOT_OFFERED,
    OFFERING_PREFIX,
    REMOTE_LABEL,
    SUBJECT_START,
    URL_PAT,
    collapse_ws,
    find_day_time,
)
from academic_records.preprocess import OFFERING_NOISE, preprocess

logger = logging.getLogger(__name__)

OFFERING_KIND = "Oferta de Materias"

UNKNOWN_MODALITY = "Desconocida"
UNKNOWN_LOCATION = "Desconocida"

# Checked in order: "semipresencial" contains "presencial".
MODALITIES = (
    ("semipresencial", "Semipresencial"),
    ("presencial", "Presencial"),
    ("virtual", "Virtual"),
    ("a distancia", REMOTE_LABEL),
    ("remota", REMOTE_LABEL),
)

CAMPUSES = (
    ("san justo", "San Justo"),
    ("gonzalez catan", "González Catán"),
    ("ramos mejia", "Ramos Mejía"),
    ("laferrere", "Laferrere"),
    ("campus virtual", "Campus Virtual"),
)

_ACCENTS = {"a": "[aá]", "e": "[eé]", "i": "[ií]", "o": "[oó]", "u": "[uúü]", "n": "[nñ]"}


def _keyword_pattern(keyword: str) -> str:
    # Cells are sometimes fused, so spaces inside a keyword are optional.
    return "".join(r"\s*" if ch == " " else _ACCENTS.get(ch, re.escape(ch)) for ch in keyword)


_MODALITY_RES = [
    (re.compile(_keyword_pattern(k), re.IGNORECASE), label) for k, label in MODALITIES
]
_CAMPUS_RES = [
    (re.compile(_keyword_pattern(k), re.IGNORECASE), label) for k, label in CAMPUSES
]
_CAMPUS_SUFFIX_RES = [
    re.compile(r"\s*" + _keyword_pattern(k) + r"\s*$", re.IGNORECASE) for k, _label in CAMPUSES
]


def clean_description(description: str) -> str:
    """Collapse whitespace and drop a trailing campus name."""
    out = collapse_ws(description)
    for rx in _CAMPUS_SUFFIX_RES:
        stripped = rx.sub("", out)
        if stripped and stripped != out:
            out = stripped
            break
    return out


def classify_suffix(suffix: str) -> tuple[str, str]:
    """Return (modality, location) from the text after the day/time token."""
    location, rest = UNKNOWN_LOCATION, suffix
    for rx, label in _CAMPUS_RES:
        m = rx.search(suffix)
        if m is not None:
            # "Campus Virtual" names a place, not the modality.
            location, rest = label, suffix[: m.start()] + " " + suffix[m.end() :]
            break
    modality = next((label for rx, label in _MODALITY_RES if rx.search(rest)), UNKNOWN_MODALITY)
    return modality, location


def _resolve_header(prefix: str, state: OfferingHeaderState) -> tuple[str, str, str] | None:
    full = OFFERING_PREFIX.match(prefix)
    if full is not None:
        return (
            normalize_plan_code(full.group("code")),
            clean_description(full.group("description")),
            collapse_ws(full.group("commission")),
        )

    bare = BARE_COMMISSION.match(prefix)
    if bare is not None and state.known:
        # Merged cell: same subject as the previous row.
        return state.plan_code, state.description, collapse_ws(bare.group("commission"))

    if state.pending:
        cont = CONTINUED_PREFIX.match(prefix)
        if cont is not None:
            continued = f"{state.pending_description} {cont.group('description')}"
            description = clean_description(continued)
            return state.pending_code, description, collapse_ws(cont.group("commission"))

    return None


def _header_line(line: str, state: OfferingHeaderState) -> None:
    m = SUBJECT_START.match(line)
    code = normalize_plan_code(m.group("code"))
    description = clean_description(m.group("description"))
    state.set_header(code, description, pending=True)
    logger.debug("Header %s %r", code, description)


def _continuation_line(line: str, state: OfferingHeaderState) -> None:
    if BARE_PLAN_CODE.match(line) or URL_PAT.search(line):
        return
    description = clean_description(f"{state.pending_description} {line}")
    state.pending_description = description
    state.description = description
    logger.debug("Description continued: %r", description)


def step_offering(line: str, state: OfferingHeaderState) -> list[ParsedOfferingSlot | Skipped]:
    """Consume one line, updating the carried header state in place."""
    token_m = find_day_time(line)

    if token_m is None:
        if SUBJECT_START.match(line):
            _header_line(line, state)
        elif state.pending:
            _continuation_line(line, state)
        return []

    token = token_m.group("token")
    prefix = line[: token_m.start()].strip()
    suffix = line[token_m.end() :].strip()

    resolved = _resolve_header(prefix, state)
    if resolved is None:
        return [Skipped(reason="offering row without a subject header", excerpt=line)]
    plan_code, description, commission = resolved
    state.set_header(plan_code, description)

    if NOT_OFFERED.search(commission):
        logger.debug("Commission not offered: %s %s", plan_code, commission)
        return []

    modality, location = classify_suffix(suffix)
    pairs = decode_day_time(token)
    if pairs == [REMOTE] and modality == UNKNOWN_MODALITY:
        modality = REMOTE_LABEL
    if not pairs:
        logger.debug("Unrecognized day/time token %r in %r", token, line)
        pairs = [UNKNOWN_SLOT]

    return [
        ParsedOfferingSlot(
            plan_code=plan_code,
            description=description,
            day_label=p.day,
            period_label=p.period,
            commission=commission,
            modality=modality,
            location=location,
            raw_token=token,
        )
        for p in pairs
    ]


def segment_offering(lines: Iterable[str]) -> Iterator[ParsedOfferingSlot | Skipped]:
    state = OfferingHeaderState()
    for line in lines:
        yield from step_offering(line, state)


def parse_offering_lines(lines: Iterable[str]) -> ParseReport[ParsedOfferingSlot]:
    report: ParseReport[ParsedOfferingSlot] = ParseReport()
    for outcome in segment_offering(lines):
        if isinstance(outcome, Skipped):
            logger.warning("Skipping %s", outcome)
            report.skipped.append(outcome)
        else:
            report.records.append(outcome)
    logger.info("Offering: %d slots, %d skipped", len(report.records), len(report.skipped))
    return report


def parse_offering_text(text: str) -> list[ParsedOfferingSlot]:
    return parse_offering_lines(preprocess(text, OFFERING_NOISE)).records


def parse_offering_pdf(
    source: PdfSource, settings: Settings | None = None
) -> ParseReport[ParsedOfferingSlot]:
    """Extract and parse an offering PDF; raises InvalidDocumentError if unreadable."""
    text = extract_text(source, OFFERING_KIND, settings)
    return parse_offering_lines(preprocess(text, OFFERING_NOISE))
