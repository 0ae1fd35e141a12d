import argparse
import asyncio
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from ticket_report.config import settings
from ticket_report.services import (
    ReportInput, ReportRenderError, ReportSaveError, generate_ticket_report, get_theme, save_report
)
from ticket_report.storage import TicketNotFoundError, TicketRepository, get_db, init_db
from ticket_report.storage.database import engine

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
logger = logging.getLogger(__name__)


def setup_logging(level: Optional[str] = None) -> None:
    """Console logging plus a rotating file log with one line per generated report"""
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT
    )

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    history_logger = logging.getLogger('ticket_report.history')
    history_logger.setLevel(logging.DEBUG)

    # File handler with rotation (10MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_dir / 'report_history.log',
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    history_logger.addHandler(file_handler)

    logger.debug(f"Report history logging configured: {log_dir / 'report_history.log'}")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ticket-report",
        description="Generate the PDF service report for a ticket.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--ticket-id", type=int,
        help="Load the ticket from the database",
    )
    source.add_argument(
        "--code",
        help="Load the ticket from the database by its code (e.g. CH-001)",
    )
    source.add_argument(
        "--input", type=Path,
        help="Read the ticket snapshot from a JSON file",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=None,
        help=f"Directory for the PDF (default: {settings.REPORT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--theme", choices=["minimal", "corporate"], default=None,
        help=f"Visual theme (default: {settings.REPORT_THEME})",
    )
    parser.add_argument(
        "--log-level", default=None,
        help=f"Logging level (default: {settings.LOG_LEVEL})",
    )
    return parser.parse_args(argv)


async def load_from_database(ticket_id: Optional[int] = None, code: Optional[str] = None) -> ReportInput:
    try:
        await init_db()
        async with get_db() as session:
            repo = TicketRepository(session)
            if code is not None:
                return await repo.load_report_input_by_code(code)
            return await repo.load_report_input(ticket_id)
    finally:
        await engine.dispose()


def load_from_file(path: Path) -> ReportInput:
    return ReportInput.model_validate_json(path.read_text(encoding="utf-8"))


async def main(args: argparse.Namespace) -> Path:
    """Resolve the ticket, render the report and save it; returns the file path"""
    if args.ticket_id is not None or args.code is not None:
        data = await load_from_database(args.ticket_id, args.code)
    else:
        data = load_from_file(args.input)

    theme = get_theme(args.theme or settings.REPORT_THEME)
    logger.info(f"Generating report for {data.code or 'ticket without code'} ({theme.name} theme)")

    report = await generate_ticket_report(data, theme=theme)
    return save_report(report, args.output_dir)


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    try:
        path = asyncio.run(main(args))
    except TicketNotFoundError as e:
        logger.error(str(e))
        return 1
    except (OSError, ValidationError) as e:
        logger.error(f"Cannot read ticket input: {e}")
        return 1
    except (ReportRenderError, ReportSaveError) as e:
        logger.error(f"Report generation failed: {e}")
        return 1

    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(run())
