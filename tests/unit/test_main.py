import pytest

from ticket_report import main
from ticket_report.config import settings

from builders import make_report_input


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "logs"))


def test_parse_args_requires_a_source():
    with pytest.raises(SystemExit):
        main.parse_args([])
    with pytest.raises(SystemExit):
        main.parse_args(["--ticket-id", "1", "--input", "x.json"])


def test_generate_from_json_file(tmp_path, capsys):
    data = make_report_input(code="CH-002", photos=())
    source = tmp_path / "ticket.json"
    source.write_text(data.model_dump_json(), encoding="utf-8")

    code = main.run(["--input", str(source), "--output-dir", str(tmp_path / "out"), "--theme", "corporate"])

    assert code == 0
    output = tmp_path / "out" / "Relatorio_CH-002.pdf"
    assert output.read_bytes().startswith(b"%PDF")
    assert str(output) in capsys.readouterr().out
    assert (tmp_path / "logs" / "report_history.log").exists()


def test_invalid_json_exits_with_error(tmp_path):
    source = tmp_path / "ticket.json"
    source.write_text('{"code": "CH-003"}', encoding="utf-8")

    assert main.run(["--input", str(source)]) == 1


def test_missing_file_exits_with_error(tmp_path):
    assert main.run(["--input", str(tmp_path / "nope.json")]) == 1


def test_unknown_ticket_exits_with_error():
    assert main.run(["--ticket-id", "404"]) == 1


def test_parse_args_accepts_ticket_code():
    args = main.parse_args(["--code", "CH-001"])
    assert args.code == "CH-001"
    assert args.ticket_id is None
    with pytest.raises(SystemExit):
        main.parse_args(["--code", "CH-001", "--ticket-id", "1"])


def test_generate_by_ticket_code(tmp_path, monkeypatch):
    requested = []

    async def by_code(self, code):
        requested.append(code)
        return make_report_input(code=code, photos=())

    monkeypatch.setattr(main.TicketRepository, "load_report_input_by_code", by_code)

    assert main.run(["--code", "CH-777", "--output-dir", str(tmp_path / "out")]) == 0
    assert requested == ["CH-777"]
    assert (tmp_path / "out" / "Relatorio_CH-777.pdf").exists()


def test_unknown_ticket_code_exits_with_error():
    assert main.run(["--code", "CH-404"]) == 1
