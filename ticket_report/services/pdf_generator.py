"""PDF service report generator.

Renders a resolved ticket snapshot (:class:`ReportInput`) into an A4 report:
one summary page, the event narrative (as many pages as the text needs)
and the photo record in a 2x2 grid, four photos per page.

Uses fpdf2. DejaVu Sans is embedded when available; otherwise the core
Helvetica font is used and text is folded to Latin-1.

Installation:
    pip install fpdf2 Pillow
    # Ubuntu/Debian: sudo apt install fonts-dejavu-core
    # Or place DejaVuSans.ttf + DejaVuSans-Bold.ttf into ticket_report/services/fonts/
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from fpdf import FPDF
from fpdf.errors import FPDFException

from ticket_report.clients.image_loader import ImageLoader, ImageLoadError, LoadedImage
from ticket_report.config import settings
from ticket_report.services.emitter import report_filename
from ticket_report.services.formatting import (
    PLACEHOLDER,
    format_coordinates,
    format_currency,
    format_datetime,
    format_duration_long,
    format_duration_short,
    format_km,
    format_short_datetime,
    format_tractor,
    format_trailer,
    service_type_label,
    status_label,
)
from ticket_report.services.metrics import (
    distance_km,
    elapsed_minutes,
    mobilized_agents,
    mobilized_summary,
    participant_costs,
    team_totals,
)
from ticket_report.services.report_input import ReportInput
from ticket_report.services.theme import BrandingConfig, Theme, get_theme
from ticket_report.utils import fit_rect_preserve_aspect, fit_text, fold_to_latin1, grid_slot
from ticket_report.utils.geometry import PHOTOS_PER_PAGE, photo_page_count

logger = logging.getLogger(__name__)

# Dedicated logger: one line per generated document
history_logger = logging.getLogger("ticket_report.history")

# ── Layout (millimetres, A4 portrait) ─────────────────────────────────────────

_MARGIN = 18.0
_HEADER_H = 28.0
_CONTENT_TOP = _HEADER_H + 8         # first baseline below the header
_FOOTER_OFFSET = 15.0                # footer rule sits this far above the page bottom
_TEXT_LIMIT_OFFSET = 35.0            # no narrative baseline below h - 35
_CARD_BOTTOM_OFFSET = 30.0

_SECTION_TITLE_H = 12.0
_ROW_H = 7.0
_LINE_H = 6.0
_TABLE_ROW_H = 6.0
_CARD_PAD = 4.0
_CARD_GAP = 8.0
_COL_GAP = 8.0

# Fixed card heights, sized for worst-case content (five rows, three trailers)
_SUMMARY_CARD_H = 52.0
_TEAM_CARD_H = 68.0

_LABEL_W = 28.0

_PHOTO_GAP_X = 12.0
_PHOTO_GAP_Y = 12.0
_PHOTO_ASPECT = 0.65
_CAPTION_H = 10.0
_PHOTO_INSET = 1.0

# Team table: Função, Agente, Chegada, Saída, Duração, KM, Custos
_TEAM_COLUMNS = ("Função", "Agente", "Chegada", "Saída", "Duração", "KM", "Custos")
_TEAM_WIDTHS = (20.0, 46.0, 22.0, 22.0, 20.0, 16.0, 20.0)

_IMAGE_UNAVAILABLE = "Imagem não disponível"

# ── Font discovery ────────────────────────────────────────────────────────────

_FONT_DIRS = [
    Path(__file__).parent / "fonts",
    Path("/usr/share/fonts/truetype/dejavu"),
    Path("/usr/share/fonts/TTF"),
    Path("/usr/share/fonts/dejavu"),
    Path.home() / ".fonts",
    Path.home() / "Library" / "Fonts",
]


def _font_dir(extra: Optional[str] = None) -> Optional[Path]:
    candidates = [Path(extra)] if extra else []
    for d in candidates + _FONT_DIRS:
        if (d / "DejaVuSans.ttf").is_file() and (d / "DejaVuSans-Bold.ttf").is_file():
            return d
    return None


class ReportRenderError(Exception):
    """The PDF drawing surface could not be created or serialised"""
    pass


# ── Generation record ─────────────────────────────────────────────────────────


@dataclass
class PhotoSlotRecord:
    index: int
    page: int
    col: int
    row: int
    loaded: bool


@dataclass
class PageRecord:
    """What was emitted on one page (kind, drawn strings, photo cells)."""
    number: int
    kind: str
    texts: list[str] = field(default_factory=list)
    photo_slots: list[PhotoSlotRecord] = field(default_factory=list)


@dataclass(frozen=True)
class RenderedReport:
    filename: str
    content: bytes
    pages: list[PageRecord]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def pages_of(self, kind: str) -> list[PageRecord]:
        return [p for p in self.pages if p.kind == kind]

    @property
    def texts(self) -> list[str]:
        return [t for p in self.pages for t in p.texts]


# ── PDF class ─────────────────────────────────────────────────────────────────


class _ReportPDF(FPDF):
    """A4 canvas with the report's drawing primitives.

    Primitives take explicit coordinates and return the next ``y``; they
    never add pages. Page breaks are decided by the composer only.
    """

    def __init__(
        self,
        theme: Theme,
        branding: BrandingConfig,
        generated_at: datetime,
        font_dir: Optional[str] = None,
    ) -> None:
        super().__init__("P", "mm", "A4")
        self.theme = theme
        self.branding = branding
        self._stamp = format_datetime(generated_at)
        self.creation_date = generated_at
        self.pages_log: list[PageRecord] = []

        fd = _font_dir(font_dir or settings.REPORT_FONT_DIR)
        if fd is not None:
            self.add_font("DV", "", str(fd / "DejaVuSans.ttf"))
            self.add_font("DV", "B", str(fd / "DejaVuSans-Bold.ttf"))
            self._family = "DV"
            self._unicode = True
        else:
            logger.info("DejaVu fonts not found, falling back to core Helvetica")
            self._family = "helvetica"
            self._unicode = False

        self.set_auto_page_break(False)
        self.alias_nb_pages()
        self.set_margins(_MARGIN, _MARGIN, _MARGIN)
        self.set_title("Relatório de Atendimento")
        self.set_author(branding.name)
        self.set_creator(branding.name)

    @property
    def pw(self) -> float:
        """Printable width (page minus margins)."""
        return self.w - self.l_margin - self.r_margin

    @property
    def text_limit(self) -> float:
        """Lowest baseline allowed for flowing text."""
        return self.h - _TEXT_LIMIT_OFFSET

    # ── state helpers ─────────────────────────────────────────────────────

    def new_page(self, kind: str) -> None:
        self.add_page()
        self.pages_log.append(PageRecord(number=self.page_no(), kind=kind))
        logger.debug(f"Page {self.page_no()} opened ({kind})")

    def _t(self, text: str) -> str:
        return text if self._unicode else fold_to_latin1(text)

    def _trace(self, text: str) -> None:
        if self.pages_log and text:
            self.pages_log[-1].texts.append(text)

    def _font(self, style: str, size: float, color: tuple[int, int, int]) -> None:
        self.set_font(self._family, style, size)
        self.set_text_color(*color)

    def _draw_text(self, x: float, y: float, text: str, align: str = "L") -> None:
        s = self._t(text)
        if align == "C":
            x -= self.get_string_width(s) / 2
        elif align == "R":
            x -= self.get_string_width(s)
        self.text(x, y, s)
        self._trace(text)

    def measure(self, text: str) -> float:
        return self.get_string_width(self._t(text))

    def wrap_lines(self, text: str, width: float) -> list[str]:
        """Split *text* into lines that fit *width* with the current font."""
        if not text:
            return []
        return self.multi_cell(width, _LINE_H, self._t(text), dry_run=True, output="LINES")

    # ── page chrome ───────────────────────────────────────────────────────

    def draw_header(
        self, page_width: float, margin: float, logo: Optional[LoadedImage]
    ) -> float:
        """Branding band at the top of the page; returns the height consumed."""
        th = self.theme
        band = th.header_style == "band"
        logo_size = 20.0
        logo_y = (_HEADER_H - logo_size) / 2

        if band:
            self.set_fill_color(*th.header_band)
            self.rect(0, 0, page_width, _HEADER_H, "F")
            self.set_fill_color(*th.accent)
            self.rect(0, _HEADER_H, page_width, 0.6, "F")

        text_x = margin
        if logo is not None:
            x, y, w, h = fit_rect_preserve_aspect(
                logo.width, logo.height, margin, logo_y, logo_size, logo_size
            )
            self.image(logo.as_stream(), x, y, w, h)
            text_x = margin + logo_size + 6

        name_color = th.accent if band else th.heading
        self._font("B", 11, name_color)
        self._draw_text(text_x, 13, fit_text(self.branding.name, page_width / 2 - text_x, self.measure))

        detail_color = (190, 190, 190) if band else th.label
        self._font("", 7, detail_color)
        if self.branding.phone_monitoring:
            self._draw_text(text_x, 18.5, f"Monitoramento 24h: {self.branding.phone_monitoring}")
        for i, line in enumerate(self.branding.contact_lines[:4]):
            self._draw_text(page_width - margin, 9 + 4.5 * i, line, align="R")

        if not band:
            self.set_draw_color(*th.separator)
            self.set_line_width(0.5)
            self.line(margin, _HEADER_H, page_width - margin, _HEADER_H)

        return _CONTENT_TOP

    def draw_footer(self, page_width: float, page_height: float) -> None:
        """Legal boilerplate plus the (only) time-dependent line."""
        th = self.theme
        footer_y = page_height - _FOOTER_OFFSET

        self.set_draw_color(*th.separator)
        self.set_line_width(0.5)
        self.line(_MARGIN, footer_y, page_width - _MARGIN, footer_y)

        self._font("", 7, th.muted)
        legal = fit_text(self.branding.legal_line, page_width - 2 * _MARGIN, self.measure)
        self._draw_text(page_width / 2, footer_y + 5, legal, align="C")
        self._draw_text(
            page_width / 2,
            footer_y + 9.5,
            f"Gerado em {self._stamp}  •  Página {self.page_no()}/{{nb}}",
            align="C",
        )

    def footer(self) -> None:
        self.draw_footer(self.w, self.h)

    # ── content primitives ────────────────────────────────────────────────

    def draw_page_title(self, title: str, subtitle: str, y: float) -> float:
        th = self.theme
        self._font("B", 16, th.heading)
        self._draw_text(self.w / 2, y, title, align="C")
        self._font("", 10, th.label)
        self._draw_text(self.w / 2, y + 7, subtitle, align="C")
        return y + 16

    def draw_card(self, x: float, y: float, w: float, h: float) -> None:
        """Rounded, bordered container with a stacked-offset drop shadow."""
        th = self.theme
        r = th.corner_radius
        self.set_fill_color(*th.shadow)
        for i in range(th.shadow_layers, 0, -1):
            offset = 0.4 * i
            self.rect(x + offset, y + offset, w, h, "F", round_corners=True, corner_radius=r)
        self.set_fill_color(*th.card_fill)
        self.set_draw_color(*th.card_border)
        self.set_line_width(0.3)
        self.rect(x, y, w, h, "DF", round_corners=True, corner_radius=r)

    def draw_section_title(self, title: str, x: float, y: float, width: float) -> float:
        th = self.theme
        label = title.upper()
        if th.title_style == "bar":
            self.set_fill_color(*th.heading)
            self.rect(x, y, width, 7, "F")
            self.set_fill_color(*th.accent)
            self.rect(x, y, 1.2, 7, "F")
            self._font("B", 9, th.title_text)
            self._draw_text(x + 3, y + 5, label)
        else:
            self._font("B", 9, th.title_text)
            self._draw_text(x, y + 5, label)
            self.set_draw_color(*th.separator)
            self.set_line_width(0.5)
            self.line(x, y + 7.5, x + width, y + 7.5)
        return y + _SECTION_TITLE_H

    def draw_label_value_row(
        self,
        label: str,
        value: Optional[str],
        x: float,
        y: float,
        label_width: float = 40,
        max_value_width: float = 80,
    ) -> float:
        th = self.theme
        self._font("", 8, th.label)
        self._draw_text(x, y, label)

        self._font("", 9, th.ink)
        shown = fit_text(value or PLACEHOLDER, max_value_width, self.measure)
        self._draw_text(x + label_width, y, shown)
        return y + _ROW_H

    def draw_table_row(
        self,
        cells: list[str],
        widths: tuple[float, ...],
        x: float,
        y: float,
        header: bool = False,
        bold: bool = False,
    ) -> float:
        th = self.theme
        if header:
            self.set_fill_color(*th.placeholder_fill)
            self.rect(x, y, sum(widths), _TABLE_ROW_H, "F")
            self._font("B", 7.5, th.label)
        else:
            self._font("B" if bold else "", 8, th.ink)

        cx = x
        for text, w in zip(cells, widths):
            shown = fit_text(text or PLACEHOLDER, w - 2, self.measure)
            self._draw_text(cx + 1, y + 4.2, shown)
            cx += w

        self.set_draw_color(*th.separator)
        self.set_line_width(0.2)
        self.line(x, y + _TABLE_ROW_H, x + sum(widths), y + _TABLE_ROW_H)
        return y + _TABLE_ROW_H

    def draw_photo(
        self,
        image: LoadedImage,
        x: float,
        y: float,
        w: float,
        h: float,
        number: int,
        caption: Optional[str],
    ) -> None:
        th = self.theme
        ix, iy, iw, ih = fit_rect_preserve_aspect(
            image.width,
            image.height,
            x + _PHOTO_INSET,
            y + _PHOTO_INSET,
            w - 2 * _PHOTO_INSET,
            h - 2 * _PHOTO_INSET,
        )
        self.image(image.as_stream(), ix, iy, iw, ih)

        self.set_draw_color(*th.separator)
        self.set_line_width(0.5)
        self.rect(x, y, w, h, "D")
        self._draw_badge(x, y, number)

        if caption:
            self._font("", 8, th.label)
            lines = self.wrap_lines(caption, w - 4)
            if lines:
                self._draw_text(x + w / 2, y + h + 6, lines[0], align="C")

    def draw_photo_placeholder(
        self, x: float, y: float, w: float, h: float, number: int
    ) -> None:
        th = self.theme
        self.set_fill_color(*th.placeholder_fill)
        self.set_draw_color(*th.separator)
        self.set_line_width(0.5)
        self.rect(x, y, w, h, "DF")
        self._draw_badge(x, y, number)
        self._font("", 9, th.muted)
        self._draw_text(x + w / 2, y + h / 2, _IMAGE_UNAVAILABLE, align="C")

    def _draw_badge(self, x: float, y: float, number: int) -> None:
        th = self.theme
        label = f"#{number}"
        self._font("B", 7, (255, 255, 255))
        bw = self.measure(label) + 3
        self.set_fill_color(*th.heading)
        self.rect(x + 2, y + 2, bw, 4.6, "F", round_corners=True, corner_radius=1)
        self._draw_text(x + 3.5, y + 5.3, label)


# ── Summary page ──────────────────────────────────────────────────────────────


def _city_state(data: ReportInput) -> str:
    parts = [p for p in (data.city, data.state) if p]
    return "/".join(parts) if parts else PLACEHOLDER


def _render_summary(pdf: _ReportPDF, data: ReportInput, logo: Optional[LoadedImage]) -> None:
    pdf.new_page("summary")
    y = pdf.draw_header(pdf.w, _MARGIN, logo)
    y = pdf.draw_page_title(
        "Relatório de Atendimento", service_type_label(data.service_type), y
    )

    col_w = (pdf.pw - _COL_GAP) / 2
    left_x = _MARGIN
    right_x = _MARGIN + col_w + _COL_GAP
    value_w = col_w - 2 * _CARD_PAD - _LABEL_W

    def card(title: str, x: float, top: float, rows: list[tuple[str, str]]) -> None:
        pdf.draw_card(x, top, col_w, _SUMMARY_CARD_H)
        ry = pdf.draw_section_title(title, x + _CARD_PAD, top + _CARD_PAD, col_w - 2 * _CARD_PAD)
        for label, value in rows:
            ry = pdf.draw_label_value_row(label, value, x + _CARD_PAD, ry, _LABEL_W, value_w)

    requester = [("Cliente:", data.client.name), ("Contato:", data.client.contact_phone or PLACEHOLDER)]
    if data.code:
        requester.append(("Processo:", data.code))
    requester += [("Plano:", data.plan.name), ("Status:", status_label(data.status))]

    location = [
        ("Cidade/UF:", _city_state(data)),
        ("Coordenadas:", format_coordinates(data.latitude, data.longitude)),
    ]

    timing = [
        ("Início:", format_datetime(data.start_datetime)),
        ("Término:", format_datetime(data.end_datetime)),
        ("Duração:", format_duration_short(elapsed_minutes(data.start_datetime, data.end_datetime))),
        ("KM Rodado:", format_km(distance_km(data.km_start, data.km_end))),
    ]

    v = data.vehicle
    vehicle = [("Descrição:", v.description)]
    if v.tractor_plate:
        vehicle.append(("Cavalo:", format_tractor(v.tractor_plate, v.tractor_brand, v.tractor_model)))
    for i, trailer in enumerate(v.trailers, start=1):
        vehicle.append((f"Carreta {i}:", format_trailer(trailer)))

    row1 = y
    row2 = row1 + _SUMMARY_CARD_H + _CARD_GAP
    card("Solicitante", left_x, row1, requester)
    card("Localização", right_x, row1, location)
    card("Data e Hora", left_x, row2, timing)
    card("Veículo", right_x, row2, vehicle)

    _render_team_card(pdf, data, row2 + _SUMMARY_CARD_H + _CARD_GAP)


def _render_team_card(pdf: _ReportPDF, data: ReportInput, top: float) -> None:
    x = _MARGIN
    inner_x = x + _CARD_PAD
    inner_w = pdf.pw - 2 * _CARD_PAD

    pdf.draw_card(x, top, pdf.pw, _TEAM_CARD_H)
    y = pdf.draw_section_title("Equipe Mobilizada", inner_x, top + _CARD_PAD, inner_w)
    y = pdf.draw_label_value_row(
        "Efetivo:", mobilized_summary(*mobilized_agents(data)), inner_x, y, _LABEL_W, inner_w - _LABEL_W
    )
    if data.operator_name:
        y = pdf.draw_label_value_row(
            "Operador:", data.operator_name, inner_x, y, _LABEL_W, inner_w - _LABEL_W
        )

    y -= 3
    y = pdf.draw_table_row(list(_TEAM_COLUMNS), _TEAM_WIDTHS, inner_x, y, header=True)
    rows = participant_costs(data)
    for row in rows:
        y = pdf.draw_table_row(
            [
                row.label,
                row.name,
                format_short_datetime(row.arrival),
                format_short_datetime(row.departure),
                format_duration_short(row.minutes),
                format_km(row.distance),
                format_currency(row.cost),
            ],
            _TEAM_WIDTHS,
            inner_x,
            y,
        )
    totals = team_totals(rows)
    pdf.draw_table_row(
        ["Total", "", "", "", "", format_km(totals.distance), format_currency(totals.cost)],
        _TEAM_WIDTHS,
        inner_x,
        y,
        bold=True,
    )


# ── Narrative pages ───────────────────────────────────────────────────────────


class _NarrativeFlow:
    """Running text cursor that opens continuation pages on overflow."""

    def __init__(self, pdf: _ReportPDF, logo: Optional[LoadedImage], card_top: float):
        self.pdf = pdf
        self.logo = logo
        self.x = _MARGIN + _CARD_PAD + 2
        self.width = pdf.pw - 2 * (_CARD_PAD + 2)
        self._open_card(card_top)
        self.y = card_top + _CARD_PAD

    def _open_card(self, top: float) -> None:
        bottom = self.pdf.h - _CARD_BOTTOM_OFFSET
        self.pdf.draw_card(_MARGIN, top, self.pdf.pw, bottom - top)

    def _break_page(self) -> None:
        pdf = self.pdf
        pdf.new_page("narrative")  # footer of the full page is drawn by add_page
        top = pdf.draw_header(pdf.w, _MARGIN, self.logo) + 2
        self._open_card(top)
        self.y = top + _CARD_PAD + 4

    def _body_font(self) -> None:
        self.pdf._font("", 10, self.pdf.theme.ink)

    def section(self, title: str) -> None:
        # keep a title together with at least one line of text
        if self.y + _SECTION_TITLE_H + _LINE_H > self.pdf.text_limit:
            self._break_page()
        self.y = self.pdf.draw_section_title(title, self.x - 2, self.y, self.width + 4)

    def paragraph(self, text: Optional[str]) -> None:
        self._body_font()
        lines = self.pdf.wrap_lines(text or "", self.width) or [PLACEHOLDER]
        self.y += 2
        for line in lines:
            if self.y > self.pdf.text_limit:
                self._break_page()
                self._body_font()
            self.pdf._draw_text(self.x, self.y, line)
            self.y += _LINE_H


def _render_narrative(pdf: _ReportPDF, data: ReportInput, logo: Optional[LoadedImage]) -> None:
    pdf.new_page("narrative")
    y = pdf.draw_header(pdf.w, _MARGIN, logo)
    service = service_type_label(data.service_type)
    y = pdf.draw_page_title("Descrição do Evento", f"Relato de Atendimento – {service}", y)

    minutes = elapsed_minutes(data.start_datetime, data.end_datetime)
    if minutes is not None and minutes >= 0:
        pdf._font("", 8, pdf.theme.muted)
        pdf._draw_text(pdf.w / 2, y - 2, f"Atendimento com duração de {format_duration_long(minutes)}", align="C")
        y += 3

    flow = _NarrativeFlow(pdf, logo, y)
    if data.summary:
        flow.section("Resumo")
        flow.paragraph(data.summary)
        flow.y += 4
    flow.section("Relatório Detalhado")
    flow.paragraph(data.detailed_report)


# ── Photo pages ───────────────────────────────────────────────────────────────


async def _render_photos(
    pdf: _ReportPDF,
    data: ReportInput,
    logo: Optional[LoadedImage],
    loader: ImageLoader,
) -> tuple[int, int]:
    """Emit ceil(N/4) photo pages; returns (loaded, failed) counts."""
    photos = data.photos
    total_pages = photo_page_count(len(photos))
    photo_w = (pdf.pw - _PHOTO_GAP_X) / 2
    photo_h = photo_w * _PHOTO_ASPECT
    cell_h = photo_h + _CAPTION_H + _PHOTO_GAP_Y
    loaded = failed = 0

    for page in range(total_pages):
        pdf.new_page("photos")
        y = pdf.draw_header(pdf.w, _MARGIN, logo)

        first = page * PHOTOS_PER_PAGE
        last = min(first + PHOTOS_PER_PAGE, len(photos))
        pdf._font("B", 16, pdf.theme.heading)
        pdf._draw_text(pdf.w / 2, y, "Registro Fotográfico", align="C")
        pdf._font("", 8, pdf.theme.muted)
        pdf._draw_text(
            pdf.w / 2,
            y + 7,
            f"Página {page + 1} de {total_pages}  •  Fotos {first + 1} a {last} de {len(photos)}",
            align="C",
        )
        grid_top = y + 18

        for i in range(first, last):
            photo = photos[i]
            slot = grid_slot(i)
            x = _MARGIN + slot.col * (photo_w + _PHOTO_GAP_X)
            py = grid_top + slot.row * cell_h

            try:
                image = await loader.fetch(photo.url)
            except ImageLoadError as e:
                logger.warning(f"Photo #{i + 1} unavailable ({photo.url}): {e}")
                pdf.draw_photo_placeholder(x, py, photo_w, photo_h, i + 1)
                ok = False
            else:
                pdf.draw_photo(image, x, py, photo_w, photo_h, i + 1, photo.caption)
                ok = True

            loaded += ok
            failed += not ok
            pdf.pages_log[-1].photo_slots.append(
                PhotoSlotRecord(index=i, page=slot.page, col=slot.col, row=slot.row, loaded=ok)
            )

    return loaded, failed


# ── Public interface ─────────────────────────────────────────────────────────


async def _load_logo(loader: ImageLoader, branding: BrandingConfig) -> Optional[LoadedImage]:
    if not branding.logo_path:
        return None
    try:
        return await loader.fetch(branding.logo_path)
    except ImageLoadError as e:
        logger.error(f"Error loading logo: {e}")
        return None


async def generate_ticket_report(
    data: ReportInput,
    *,
    branding: Optional[BrandingConfig] = None,
    theme: Optional[Theme] = None,
    loader: Optional[ImageLoader] = None,
    generated_at: Optional[datetime] = None,
    font_dir: Optional[str] = None,
) -> RenderedReport:
    """
    Render the service report PDF for one ticket.

    Photos are fetched one at a time, in document order. A photo that
    cannot be loaded becomes an "image unavailable" placeholder; no data
    problem aborts the document.

    Args:
        data: resolved ticket snapshot.
        branding: company identity (defaults to the configured settings).
        theme: visual variant (defaults to ``settings.REPORT_THEME``).
        loader: photo loader (defaults to a settings-configured ImageLoader).
        generated_at: timestamp printed in the footer and used as the PDF
            creation date. Fix it to get byte-identical output.
        font_dir: extra directory to look for DejaVu fonts in.

    Returns:
        RenderedReport with the filename, PDF bytes and per-page record.

    Raises:
        ReportRenderError: the PDF surface could not be created or written.
    """
    branding = branding or BrandingConfig.from_settings(settings)
    theme = theme or get_theme(settings.REPORT_THEME)
    loader = loader or ImageLoader()
    if generated_at is None:
        generated_at = datetime.now(ZoneInfo(settings.REPORT_TIMEZONE)).replace(microsecond=0)

    try:
        pdf = _ReportPDF(theme, branding, generated_at, font_dir=font_dir)
    except (FPDFException, OSError, RuntimeError) as e:
        raise ReportRenderError(f"Cannot create PDF surface: {e}") from e

    logo = await _load_logo(loader, branding)

    try:
        _render_summary(pdf, data, logo)
        _render_narrative(pdf, data, logo)
        loaded, failed = await _render_photos(pdf, data, logo, loader)
        content = bytes(pdf.output())
    except (FPDFException, OSError) as e:
        raise ReportRenderError(f"Cannot write PDF: {e}") from e

    filename = report_filename(data.code)
    history_logger.info(
        f"Report {filename}: {pdf.page_no()} pages, "
        f"{sum(p.kind == 'narrative' for p in pdf.pages_log)} narrative, "
        f"photos ok={loaded} failed={failed}, {len(content)} bytes"
    )
    return RenderedReport(filename=filename, content=content, pages=pdf.pages_log)
