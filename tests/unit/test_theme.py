import pytest

from ticket_report.config import Settings
from ticket_report.services.theme import CORPORATE, MINIMAL, BrandingConfig, get_theme


def test_get_theme_is_case_insensitive():
    assert get_theme("MINIMAL") is MINIMAL
    assert get_theme("corporate") is CORPORATE


def test_unknown_theme():
    with pytest.raises(ValueError, match="Unknown report theme"):
        get_theme("neon")


def test_variants_differ_only_in_configuration():
    assert MINIMAL.header_style == "line"
    assert CORPORATE.header_style == "band"
    assert CORPORATE.title_style == "bar"


def test_branding_from_settings():
    settings = Settings(COMPANY_NAME="ACME Escolta", COMPANY_WEBSITE="", COMPANY_LOGO_PATH="logo.png")
    branding = BrandingConfig.from_settings(settings)
    assert branding.name == "ACME Escolta"
    assert branding.logo_path == "logo.png"
    assert "ACME Escolta" in branding.legal_line


def test_contact_lines_skip_empty_parts(branding):
    assert branding.contact_lines == [
        "contato@fdgprontaresposta.com.br",
        "Comercial: (47) 99135-6830",
        "www.fdgprontaresposta.com.br",
    ]
    bare = BrandingConfig(name="X", cnpj="", address="", phone_commercial="123", instagram="@x")
    assert bare.contact_lines == ["Comercial: 123", "@x"]
    assert bare.legal_line == "X"


def test_legal_line(branding):
    assert branding.legal_line == (
        "FDG PRONTA RESPOSTA  •  CNPJ 59.355.128/0001-10  •  R. Dona Francisca, 801 - Joinville - SC"
    )
