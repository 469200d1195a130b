from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from academic_records.patterns import fold, normalize_text

logger = logging.getLogger(__name__)

# All noise patterns are matched against fold(line): lowercase, accents removed.
# "Nº" folds to "no", so column headers appear as "noorigen..." or "n°origen...".

_COMMON_NOISE = (
    re.compile(r"^pagina\s*\d+\s*(de|/)\s*\d+"),
    re.compile(r"^\d+\s+de\s+\d+$"),
    re.compile(r"^universidad\s+nacional\b"),
    re.compile(r"^ingenieria\s+en\b"),
    re.compile(r"^departamento\s+de\b"),
)

TRANSCRIPT_NOISE: tuple[re.Pattern[str], ...] = _COMMON_NOISE + (
    re.compile(r"^historia\s+academica\b"),
    re.compile(r"^alumno\s*:"),
    re.compile(r"^(nro\.?|numero|n[°o])\s*(de\s*)?documento"),
    re.compile(r"^n[°o]?\s*origen\s*codigo"),
    re.compile(r"^acta\s*/"),
    re.compile(r"^resolucion"),
    re.compile(r"^fecha\s*nota"),
    re.compile(r"^fecha\s+de\s+emision"),
)

OFFERING_NOISE: tuple[re.Pattern[str], ...] = _COMMON_NOISE + (
    re.compile(r"^oferta\s+de\s+materias\b"),
    re.compile(r"^codigo\s*descripcion"),
    re.compile(r"^(inicio|menu|salir|volver|imprimir|ayuda|mis\s+datos|cerrar\s+sesion)$"),
    re.compile(r"^(inscripciones|mis\s+inscripciones|consultas|tramites)\s*(\||>|$)"),
    # Browser print header: "19/10/2026, 10:32 ..."
    re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4},?\s+\d{1,2}:\d{2}"),
)


def split_lines(text: str) -> list[str]:
    """Split on any line break, trim, drop empty lines."""
    out: list[str] = []
    for raw in normalize_text(text).splitlines():
        line = raw.strip()
        if line:
            out.append(line)
    return out


def is_noise(line: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    folded = fold(line)
    return any(p.search(folded) for p in patterns)


def preprocess(text: str, patterns: Sequence[re.Pattern[str]] = TRANSCRIPT_NOISE) -> list[str]:
    lines = split_lines(text)
    kept = [line for line in lines if not is_noise(line, patterns)]
    dropped = len(lines) - len(kept)
    logger.debug("Preprocessed %d lines, dropped %d as boilerplate", len(lines), dropped)
    return kept
