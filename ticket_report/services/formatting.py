"""Brazilian-Portuguese display formatting for report values.

The exact strings produced here are part of the document contract
(dates as ``dd/MM/yyyy às HH:mm``, money as ``R$ 0,00``).
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ticket_report.config import settings
from ticket_report.services.report_input import ServiceType, TicketStatus, Trailer

PLACEHOLDER = "-"

SERVICE_TYPE_LABELS: dict[str, str] = {
    ServiceType.ALARM.value: "Alarme",
    ServiceType.INVESTIGATION.value: "Averiguação",
    ServiceType.PRESERVATION.value: "Preservação",
    ServiceType.LOGISTICS_ESCORT.value: "Acompanhamento Logístico",
}

STATUS_LABELS: dict[str, str] = {
    TicketStatus.OPEN.value: "Aberto",
    TicketStatus.IN_PROGRESS.value: "Em Andamento",
    TicketStatus.FINISHED.value: "Finalizado",
    TicketStatus.CANCELLED.value: "Cancelado",
}

BODY_TYPE_LABELS: dict[str, str] = {
    "grade_baixa": "Grade Baixa",
    "grade_alta": "Grade Alta",
    "bau": "Baú",
    "sider": "Sider",
    "frigorifico": "Frigorífico",
    "container": "Contêiner",
    "prancha": "Prancha",
}

_CENT = Decimal("0.01")


def _local(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(ZoneInfo(settings.REPORT_TIMEZONE))


def format_datetime(dt: Optional[datetime]) -> str:
    if dt is None:
        return PLACEHOLDER
    return _local(dt).strftime("%d/%m/%Y às %H:%M")


def format_short_datetime(dt: Optional[datetime]) -> str:
    """Compact ``dd/MM HH:mm`` form used in table cells."""
    if dt is None:
        return PLACEHOLDER
    return _local(dt).strftime("%d/%m %H:%M")


def format_currency(value: Optional[Union[int, float, Decimal]]) -> str:
    if value is None:
        return "R$ 0,00"
    amount = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"R$ {amount:.2f}".replace(".", ",")


def format_km(value: Optional[Union[int, float, Decimal]]) -> str:
    if value is None:
        return PLACEHOLDER
    amount = Decimal(str(value))
    if amount == amount.to_integral_value():
        text = str(int(amount))
    else:
        text = format(amount.normalize(), "f").replace(".", ",")
    return f"{text} km"


def format_duration_short(minutes: Optional[int]) -> str:
    """``45 minutos``, ``1 hora``, ``2 horas`` or ``2h 5min``."""
    if minutes is None or minutes < 0:
        return PLACEHOLDER
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins} minutos"
    if mins == 0:
        return f"{hours} hora{'s' if hours > 1 else ''}"
    return f"{hours}h {mins}min"


def format_duration_long(minutes: Optional[int]) -> str:
    """``2 horas e 5 minutos`` style sentence."""
    if minutes is None or minutes < 0:
        return PLACEHOLDER
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins} minutos"
    hours_text = f"{hours} hora{'s' if hours > 1 else ''}"
    if mins == 0:
        return hours_text
    return f"{hours_text} e {mins} minuto{'s' if mins > 1 else ''}"


def format_coordinates(lat: Optional[float], lng: Optional[float]) -> str:
    if lat is None or lng is None:
        return PLACEHOLDER
    return f"{lat:.6f}, {lng:.6f}"


def service_type_label(value: Union[ServiceType, str]) -> str:
    key = value.value if isinstance(value, ServiceType) else value
    return SERVICE_TYPE_LABELS.get(key, key)


def status_label(value: Union[TicketStatus, str]) -> str:
    key = value.value if isinstance(value, TicketStatus) else value
    return STATUS_LABELS.get(key, key)


def body_type_label(body_type: Optional[str]) -> str:
    if not body_type:
        return PLACEHOLDER
    return BODY_TYPE_LABELS.get(body_type, body_type)


def format_trailer(trailer: Trailer) -> str:
    return f"{trailer.plate} ({body_type_label(trailer.body_type)})"


def format_tractor(plate: Optional[str], brand: Optional[str], model: Optional[str]) -> str:
    if not plate:
        return PLACEHOLDER
    text = plate
    if brand:
        text += f" - {brand}"
    if model:
        text += f" {model}"
    return text
