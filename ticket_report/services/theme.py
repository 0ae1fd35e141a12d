"""Visual themes and tenant branding for the ticket report.

Both are plain configuration objects handed to the generator, so one
composer serves every tenant and every visual variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ticket_report.config import Settings

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Theme:
    name: str
    ink: RGB                # body text
    heading: RGB            # titles
    label: RGB              # field labels
    muted: RGB              # captions, footer
    separator: RGB          # rules and photo borders
    card_fill: RGB
    card_border: RGB
    shadow: RGB
    accent: RGB
    placeholder_fill: RGB
    title_text: RGB         # text drawn on top of a filled title bar
    header_style: str = "line"      # line | band
    title_style: str = "rule"       # rule | bar
    header_band: RGB = (255, 255, 255)
    corner_radius: float = 2.0
    shadow_layers: int = 2


# Clean monochromatic palette
MINIMAL = Theme(
    name="minimal",
    ink=(0, 0, 0),
    heading=(17, 24, 39),
    label=(75, 85, 99),
    muted=(156, 163, 175),
    separator=(229, 231, 235),
    card_fill=(255, 255, 255),
    card_border=(229, 231, 235),
    shadow=(243, 244, 246),
    accent=(59, 130, 246),
    placeholder_fill=(249, 250, 251),
    title_text=(17, 24, 39),
)

# Black + gold + white/gray
CORPORATE = Theme(
    name="corporate",
    ink=(40, 40, 40),
    heading=(22, 22, 22),
    label=(130, 130, 130),
    muted=(130, 130, 130),
    separator=(200, 200, 195),
    card_fill=(250, 250, 248),
    card_border=(200, 200, 195),
    shadow=(232, 232, 228),
    accent=(207, 171, 59),
    placeholder_fill=(245, 245, 242),
    title_text=(255, 255, 255),
    header_style="band",
    title_style="bar",
    header_band=(22, 22, 22),
    corner_radius=2.5,
    shadow_layers=3,
)

THEMES: dict[str, Theme] = {t.name: t for t in (MINIMAL, CORPORATE)}


def get_theme(name: str) -> Theme:
    try:
        return THEMES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown report theme {name!r}; expected one of {sorted(THEMES)}"
        ) from None


@dataclass(frozen=True)
class BrandingConfig:
    """Company identity printed in the header and footer of every page."""

    name: str
    cnpj: str
    address: str
    phone_commercial: str
    phone_monitoring: str = ""
    email: str = ""
    instagram: str = ""
    website: str = ""
    logo_path: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "BrandingConfig":
        return cls(
            name=settings.COMPANY_NAME,
            cnpj=settings.COMPANY_CNPJ,
            address=settings.COMPANY_ADDRESS,
            phone_commercial=settings.COMPANY_PHONE_COMMERCIAL,
            phone_monitoring=settings.COMPANY_PHONE_MONITORING,
            email=settings.COMPANY_EMAIL,
            instagram=settings.COMPANY_INSTAGRAM,
            website=settings.COMPANY_WEBSITE,
            logo_path=settings.COMPANY_LOGO_PATH,
        )

    @property
    def contact_lines(self) -> list[str]:
        """Right-aligned header block, one contact per line."""
        phone = f"Comercial: {self.phone_commercial}" if self.phone_commercial else ""
        return [line for line in (self.email, phone, self.website, self.instagram) if line]

    @property
    def legal_line(self) -> str:
        parts = [self.name]
        if self.cnpj:
            parts.append(f"CNPJ {self.cnpj}")
        if self.address:
            parts.append(self.address)
        return "  •  ".join(parts)
