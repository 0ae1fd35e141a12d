import pytest
from fpdf import FPDF

from ticket_report.utils import ELLIPSIS, fit_text, fold_to_latin1


def test_fitting_text_is_unchanged():
    assert fit_text("abcd", 4, len) == "abcd"


def test_overflow_gets_ellipsis():
    assert fit_text("abcdef", 4, len) == "a..."


def test_trailing_space_is_dropped_before_ellipsis():
    assert fit_text("ab cdefgh", 6, len) == "ab..."


def test_nothing_fits():
    assert fit_text("abcdef", 2, len) == ""


@pytest.fixture
def helvetica():
    pdf = FPDF("P", "mm", "A4")
    pdf.add_page()
    pdf.set_font("helvetica", "", 9)
    return pdf


@pytest.mark.parametrize("max_width", [10, 25, 40, 60])
def test_truncated_value_measures_within_limit(helvetica, max_width):
    value = "Transportadora Exemplo de Cargas Pesadas e Logística Integrada Ltda"
    shown = fit_text(value, max_width, helvetica.get_string_width)
    assert shown.endswith(ELLIPSIS)
    assert helvetica.get_string_width(shown) <= max_width


def test_short_value_is_drawn_unmodified(helvetica):
    assert fit_text("Plano Ouro", 60, helvetica.get_string_width) == "Plano Ouro"


def test_fold_to_latin1():
    assert fold_to_latin1("a • b – c") == "a · b - c"
    assert fold_to_latin1("Relatório de Atenção") == "Relatório de Atenção"
    assert fold_to_latin1("custo € 10") == "custo ? 10"
    assert fold_to_latin1("fim…") == "fim..."
