from __future__ import annotations

import argparse
import re
from pathlib import Path
from typing import List, Optional, Pattern, Sequence, Set

from academic_records.extract import extract_pages
from academic_records.models import InvalidDocumentError
from academic_records.patterns import (
    BARE_COMMISSION,
    RECORD_START,
    SUBJECT_START,
    find_date,
    find_day_time,
)
from academic_records.preprocess import OFFERING_NOISE, TRANSCRIPT_NOISE, is_noise, split_lines


def parse_pages_arg(p: Optional[str]) -> Optional[Set[int]]:
    if not p:
        return None
    parts: List[int] = []
    for chunk in p.split(","):
        chunk_s = chunk.strip()
        if not chunk_s:
            continue
        if "-" in chunk_s:
            a, b = chunk_s.split("-", 1)
            try:
                a_i, b_i = int(a), int(b)
            except ValueError:
                continue
            start, end = (a_i, b_i) if a_i <= b_i else (b_i, a_i)
            parts.extend(range(start, end + 1))
        else:
            try:
                parts.append(int(chunk_s))
            except ValueError:
                continue
    return set(parts)


def classify_line(line: str, kind: str) -> str:
    """Name the anchor a line would trigger; mirrors the segmenters' checks."""
    noise = TRANSCRIPT_NOISE if kind == "transcript" else OFFERING_NOISE
    if is_noise(line, noise):
        return "noise"
    if kind == "transcript":
        start = RECORD_START.match(line)
        if start is not None:
            return "start+tail" if find_date(start.group("rest")) else "start"
        return "tail" if find_date(line) else "text"
    token = find_day_time(line)
    if token is not None:
        prefix = line[: token.start()].strip()
        return "row(merged)" if BARE_COMMISSION.match(prefix) else "row"
    if SUBJECT_START.match(line):
        return "header"
    return "text"


def dump_lines(
    pages: Sequence[str], kind: str, page_set: Optional[Set[int]], rx: Optional[Pattern[str]]
) -> None:
    for pidx, text in enumerate(pages, start=1):
        if page_set and pidx not in page_set:
            continue
        for line in split_lines(text):
            if rx and not rx.search(line):
                continue
            print(f"[page {pidx}] {classify_line(line, kind):<12} {line}")
        print("-" * 60)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(
        prog="academic-records-dump", description="Dump extracted lines with their classification"
    )
    ap.add_argument("kind", choices=["transcript", "offering"])
    ap.add_argument("source", help="Path to PDF (or .txt with extracted text)")
    ap.add_argument("--pages", help="Pages to include, e.g. 1-2,4", default=None)
    ap.add_argument("--grep", help="Regex to filter lines", default=None)
    args = ap.parse_args(argv)

    path = Path(args.source)
    if not path.exists():
        print("File not found:", path)
        return

    page_set = parse_pages_arg(args.pages)
    rx: Optional[Pattern[str]] = re.compile(args.grep, re.I) if args.grep else None

    if path.suffix.lower() == ".txt":
        pages = [path.read_text(encoding="utf-8")]
    else:
        try:
            pages = extract_pages(path, args.kind)
        except InvalidDocumentError as exc:
            print(exc)
            return
    dump_lines(pages, args.kind, page_set, rx)


if __name__ == "__main__":
    main()
