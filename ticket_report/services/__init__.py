from .report_input import (
    ReportInput, ServiceType, TicketStatus, Client, Agent, Plan, Vehicle, Trailer,
    Photo, SupportAssignment
)
from .theme import Theme, BrandingConfig, MINIMAL, CORPORATE, get_theme
from .emitter import report_filename, save_report, ReportSaveError
from .pdf_generator import (
    generate_ticket_report, RenderedReport, PageRecord, ReportRenderError
)

__all__ = [
    "ReportInput", "ServiceType", "TicketStatus", "Client", "Agent", "Plan",
    "Vehicle", "Trailer", "Photo", "SupportAssignment",
    "Theme", "BrandingConfig", "MINIMAL", "CORPORATE", "get_theme",
    "report_filename", "save_report", "ReportSaveError",
    "generate_ticket_report", "RenderedReport", "PageRecord", "ReportRenderError",
]
