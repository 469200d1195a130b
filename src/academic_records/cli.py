from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from academic_records.config import Settings, load_settings
from academic_records.models import InvalidDocumentError, ParseReport
from academic_records.parse_offering import parse_offering_lines, parse_offering_pdf
from academic_records.parse_transcript import parse_transcript_lines, parse_transcript_pdf
from academic_records.preprocess import OFFERING_NOISE, TRANSCRIPT_NOISE, preprocess

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def run_file(path: Path, kind: str, settings: Settings) -> ParseReport:
    """Parse one input; .txt files are taken as already-extracted text."""
    if path.suffix.lower() == ".txt":
        text = path.read_text(encoding="utf-8")
        if kind == "transcript":
            return parse_transcript_lines(preprocess(text, TRANSCRIPT_NOISE))
        return parse_offering_lines(preprocess(text, OFFERING_NOISE))
    if kind == "transcript":
        return parse_transcript_pdf(path, settings)
    return parse_offering_pdf(path, settings)


def _format_record(kind: str, rec) -> str:
    if kind == "transcript":
        grade = rec.grade if rec.grade is not None else "none"
        line = f"  {rec.plan_code} - {rec.name} - {rec.date} - acta: {rec.acta} - grade: {grade}"
        if rec.status:
            line += f" [{rec.status}]"
        return line
    return (
        f"  {rec.plan_code} - {rec.description} - com. {rec.commission} - "
        f"{rec.day_label} {rec.period_label} - {rec.modality} - {rec.location}"
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="academic-records")
    parser.add_argument("kind", choices=["transcript", "offering"], help="Document type")
    parser.add_argument("inputs", nargs="+", help="PDF file(s), or .txt with extracted text")
    parser.add_argument("--json", action="store_true", help="Print records as JSON")
    parser.add_argument("--out", default=None, help="Optional JSON output path")
    parser.add_argument("--verbose", action="store_true", help="Debug logging and skipped rows")
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format=LOG_FORMAT,
    )

    status = 0
    payload: dict[str, list[dict[str, object]]] = {}
    for inp in args.inputs:
        p = Path(inp)
        base = p.name
        try:
            report = run_file(p, args.kind, settings)
        except InvalidDocumentError as exc:
            print(f"{base}: {exc}", file=sys.stderr)
            status = 2
            continue

        payload[base] = [rec.to_dict() for rec in report.records]
        if args.json:
            continue

        print(f"Results for {base}")
        if not report.records:
            print(" [no records detected]")
        for rec in report.records:
            print(_format_record(args.kind, rec))
        if args.verbose:
            for skipped in report.skipped:
                print(f"[verbose] skipped: {skipped}")
        print(f"Parsed {base} ({len(report.records)} {args.kind} records)")

    if args.json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    if args.out:
        out = json.dumps(payload, ensure_ascii=False, indent=2)
        Path(args.out).write_text(out, encoding="utf-8")

    return status


if __name__ == "__main__":
    sys.exit(main())
