from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    # pdfplumber character grouping tolerances
    x_tolerance: float = 3.0
    y_tolerance: float = 3.0


def load_settings() -> Settings:
    level = os.environ.get("ACADEMIC_RECORDS_LOG_LEVEL", "").strip().upper()
    x_tol = os.environ.get("ACADEMIC_RECORDS_X_TOLERANCE", "").strip()
    y_tol = os.environ.get("ACADEMIC_RECORDS_Y_TOLERANCE", "").strip()
    return Settings(
        log_level=level or Settings.log_level,
        x_tolerance=float(x_tol) if x_tol else Settings.x_tolerance,
        y_tolerance=float(y_tol) if y_tol else Settings.y_tolerance,
    )
