"""Transcript ("Historia Académica") segmentation.

The extracted text has no field delimiters. A record looks like

    {Nro}{Origen}{PlanCode 5 digits}{Name}{Acta}{DD/MM/YYYY}{Grade?}

either on one line or wrapped: the first line carries up to the plan code,
name fragments follow, and the last line carries acta + date + grade.
The start anchor (digits, origin keyword, 5-digit code) and the date are the
only reliable cut points.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from academic_records.config import Settings
from academic_records.extract import PdfSource, extract_text
from academic_records.models import (
    ParsedTranscriptRecord,
    ParseReport,
    Skipped,
    TailParts,
    TranscriptRecordBlock,
    normalize_plan_code,
)
from academic_records.patterns import GRADE, NAME_ACTA, RECORD_START, collapse_ws, find_date, fold
from academic_records.preprocess import TRANSCRIPT_NOISE, preprocess

logger = logging.getLogger(__name__)

TRANSCRIPT_KIND = "Historia Académica"
EQUIVALENCY_STATUS = "EQUIVALENCIA"


def decode_tail(tail: str) -> TailParts | None:
    """Split "{acta}{date}{grade?}" using the date as anchor."""
    m = find_date(tail)
    if m is None:
        return None
    acta = tail[: m.start()].strip()
    after = tail[m.end() :].strip()
    grade = int(after) if after and GRADE.fullmatch(after) else None
    return TailParts(acta=acta, date=m.group(0), grade=grade)


def _open_block(line: str) -> TranscriptRecordBlock | None:
    m = RECORD_START.match(line)
    if m is None:
        return None
    block = TranscriptRecordBlock(
        nro=m.group("nro"),
        origin=m.group("origin"),
        plan_code=normalize_plan_code(m.group("plan")),
    )
    rest = m.group("rest")
    date = find_date(rest)
    if date is None:
        if rest.strip():
            block.name_lines.append(rest.strip())
        return block

    # Whole record on one line: {Name}{Acta}{Date}{Grade?}
    before = rest[: date.start()]
    split = NAME_ACTA.match(before)
    if split is not None:
        block.name_lines.append(split.group("name").strip())
        block.tail = split.group("acta") + rest[date.start() :]
    else:
        block.name_lines.append(before.strip())
        block.tail = rest[date.start() :]
    return block


def _discard(block: TranscriptRecordBlock) -> Skipped:
    return Skipped(
        reason=f"record {block.nro} ({block.plan_code}): no tail line found",
        excerpt=" ".join(block.name_lines) or None,
    )


def segment_transcript(lines: Iterable[str]) -> Iterator[TranscriptRecordBlock | Skipped]:
    """Yield closed blocks in document order, or Skipped for discarded ones."""
    current: TranscriptRecordBlock | None = None

    for line in lines:
        started = _open_block(line)
        if started is not None:
            if current is not None:
                yield _discard(current)
            if started.tail:
                logger.debug("Single-line record %s (%s)", started.nro, started.plan_code)
                yield started
                current = None
            else:
                current = started
            continue

        if current is None:
            logger.debug("Ignoring line outside a record: %r", line)
            continue

        if find_date(line) is not None:
            current.tail = line
            yield current
            current = None
        else:
            current.name_lines.append(line)

    if current is not None:
        yield _discard(current)


def decode_block(block: TranscriptRecordBlock) -> ParsedTranscriptRecord | Skipped:
    tail = decode_tail(block.tail)
    if tail is None:
        return Skipped(
            reason=f"record {block.nro} ({block.plan_code}): could not parse tail",
            excerpt=block.tail,
        )
    status = EQUIVALENCY_STATUS if fold(block.origin) == "equivalencia" else None
    return ParsedTranscriptRecord(
        plan_code=block.plan_code,
        name=collapse_ws(" ".join(block.name_lines)),
        date=tail.date,
        acta=tail.acta,
        grade=tail.grade,
        status=status,
    )


def parse_transcript_lines(lines: Iterable[str]) -> ParseReport[ParsedTranscriptRecord]:
    report: ParseReport[ParsedTranscriptRecord] = ParseReport()
    for item in segment_transcript(lines):
        outcome = item if isinstance(item, Skipped) else decode_block(item)
        if isinstance(outcome, Skipped):
            logger.warning("Skipping %s", outcome)
            report.skipped.append(outcome)
        else:
            report.records.append(outcome)
    logger.info(
        "Transcript: %d records, %d skipped", len(report.records), len(report.skipped)
    )
    return report


def parse_transcript_text(text: str) -> list[ParsedTranscriptRecord]:
    return parse_transcript_lines(preprocess(text, TRANSCRIPT_NOISE)).records


def parse_transcript_pdf(
    source: PdfSource, settings: Settings | None = None
) -> ParseReport[ParsedTranscriptRecord]:
    """Extract and parse a transcript PDF; raises InvalidDocumentError if unreadable."""
    text = extract_text(source, TRANSCRIPT_KIND, settings)
    return parse_transcript_lines(preprocess(text, TRANSCRIPT_NOISE))
