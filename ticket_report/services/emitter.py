"""Filename policy and persistence for rendered reports."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from ticket_report.config import settings

if TYPE_CHECKING:
    from ticket_report.services.pdf_generator import RenderedReport

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")
_FALLBACK_NAME = "Atendimento"


class ReportSaveError(Exception):
    """Rendered report could not be written to disk"""
    pass


def report_filename(code: Optional[str]) -> str:
    """``Relatorio_<code>.pdf``; ``Relatorio_Atendimento.pdf`` without a code."""
    name = _UNSAFE.sub("_", (code or "").strip()).strip("._")
    return f"Relatorio_{name or _FALLBACK_NAME}.pdf"


def save_report(report: "RenderedReport", directory: Union[str, Path, None] = None) -> Path:
    """Write *report* into *directory* (default ``settings.REPORT_OUTPUT_DIR``)."""
    target_dir = Path(directory or settings.REPORT_OUTPUT_DIR)
    path = target_dir / report.filename
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        path.write_bytes(report.content)
    except OSError as e:
        raise ReportSaveError(f"Cannot save report to {path}: {e}") from e

    logger.info(f"Report saved: {path} ({len(report.content)} bytes)")
    return path
