from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, TypeVar

T = TypeVar("T")


class InvalidDocumentError(Exception):
    """The PDF could not be read at all (corrupt, encrypted, not a PDF)."""

    def __init__(self, kind: str, path: Path | None = None, detail: str | None = None):
        self.kind = kind
        self.path = path
        self.detail = detail
        where = f" ({path})" if path is not None else ""
        msg = f"could not process document{where}: make sure it is a valid {kind} PDF"
        if detail:
            msg += f" [{detail}]"
        super().__init__(msg)


@dataclass(frozen=True)
class Skipped:
    """A row that was recognized but could not be turned into a record."""

    reason: str
    excerpt: str | None = None

    def __str__(self) -> str:
        if self.excerpt:
            excerpt = self.excerpt if len(self.excerpt) <= 80 else self.excerpt[:77] + "..."
            return f"{self.reason} > {excerpt}"
        return self.reason


@dataclass
class TranscriptRecordBlock:
    nro: str
    origin: str
    plan_code: str
    name_lines: list[str] = field(default_factory=list)
    tail: str = ""


@dataclass(frozen=True)
class TailParts:
    acta: str
    date: str
    grade: int | None


@dataclass(frozen=True)
class ParsedTranscriptRecord:
    plan_code: str
    name: str
    date: str  # DD/MM/YYYY
    acta: str
    grade: int | None = None
    status: str | None = None

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "planCode": self.plan_code,
            "name": self.name,
            "date": self.date,
            "grade": self.grade,
            "acta": self.acta,
        }
        if self.status is not None:
            out["status"] = self.status
        return out


@dataclass
class OfferingHeaderState:
    """Last subject header seen in an offering document (merged cells)."""

    plan_code: str | None = None
    description: str | None = None
    pending_code: str | None = None
    pending_description: str | None = None

    @property
    def known(self) -> bool:
        return self.plan_code is not None and self.description is not None

    @property
    def pending(self) -> bool:
        return self.pending_code is not None

    def set_header(self, plan_code: str, description: str, pending: bool = False) -> None:
        self.plan_code = plan_code
        self.description = description
        if pending:
            self.pending_code = plan_code
            self.pending_description = description
        else:
            self.clear_pending()

    def clear_pending(self) -> None:
        self.pending_code = None
        self.pending_description = None


@dataclass(frozen=True)
class DayPeriod:
    day: str
    period: str


@dataclass(frozen=True)
class ParsedOfferingSlot:
    plan_code: str
    description: str
    day_label: str
    period_label: str
    commission: str
    modality: str
    location: str
    raw_token: str

    def to_dict(self) -> dict[str, object]:
        return {
            "planCode": self.plan_code,
            "description": self.description,
            "dayLabel": self.day_label,
            "periodLabel": self.period_label,
            "commission": self.commission,
            "modality": self.modality,
            "location": self.location,
            "rawToken": self.raw_token,
        }


@dataclass
class ParseReport(Generic[T]):
    records: list[T] = field(default_factory=list)
    skipped: list[Skipped] = field(default_factory=list)


def normalize_plan_code(code: str) -> str:
    """Strip leading zeros; an all-zero code becomes "0"."""
    return code.strip().lstrip("0") or "0"
