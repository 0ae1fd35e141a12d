import pytest

from ticket_report.services.emitter import ReportSaveError, report_filename, save_report
from ticket_report.services.pdf_generator import RenderedReport


@pytest.mark.parametrize(
    "code, expected",
    [
        ("CH-001", "Relatorio_CH-001.pdf"),
        (None, "Relatorio_Atendimento.pdf"),
        ("", "Relatorio_Atendimento.pdf"),
        ("CH/01 x", "Relatorio_CH_01_x.pdf"),
        ("../..", "Relatorio_Atendimento.pdf"),
    ],
)
def test_report_filename(code, expected):
    assert report_filename(code) == expected


def _report() -> RenderedReport:
    return RenderedReport(filename="Relatorio_CH-001.pdf", content=b"%PDF-1.4 test", pages=[])


def test_save_report_creates_directory(tmp_path):
    path = save_report(_report(), tmp_path / "out" / "nested")
    assert path == tmp_path / "out" / "nested" / "Relatorio_CH-001.pdf"
    assert path.read_bytes() == b"%PDF-1.4 test"


def test_save_report_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises(ReportSaveError):
        save_report(_report(), blocker)
