import logging

import orjson
import pytest
from pydantic import ValidationError

from results_cleaner.config import get_settings
from results_cleaner.main import main
from results_cleaner.transform.service import SUCCESS_MESSAGE


def test_main_writes_output_and_prints_one_line(workspace, write_input, capsys):
    write_input({"results": [{"id": 1, "profile": {"x": 1}, "name": "a"}]})

    status = main()

    captured = capsys.readouterr()
    assert status == 0
    assert captured.out == "Created output.json with results only.\n"
    assert captured.out.strip() == SUCCESS_MESSAGE
    assert orjson.loads((workspace / "output.json").read_bytes()) == [
        {"id": 1, "name": "a"}
    ]


def test_main_reports_invalid_json_with_non_zero_status(
    workspace, write_input, capsys, caplog
):
    write_input('{"results": [{"id": 1,')

    with caplog.at_level(logging.ERROR, logger="results_cleaner"):
        status = main()

    captured = capsys.readouterr()
    assert status == 1
    assert captured.out == ""
    assert not (workspace / "output.json").exists()
    assert any(
        record.levelno == logging.ERROR and "not valid JSON" in record.getMessage()
        for record in caplog.records
    )


def test_main_reports_missing_input(workspace, capsys, caplog):
    with caplog.at_level(logging.ERROR, logger="results_cleaner"):
        status = main()

    assert status == 1
    assert capsys.readouterr().out == ""
    assert any("input.json" in record.getMessage() for record in caplog.records)


def test_main_reports_shape_errors(workspace, write_input, caplog):
    write_input({"results": [{"id": 1}, "oops"]})

    with caplog.at_level(logging.ERROR, logger="results_cleaner"):
        status = main()

    assert status == 1
    assert "$.results[1]: expected object, found string" in caplog.text


def test_settings_read_environment_overrides(monkeypatch):
    monkeypatch.setenv("RESULTS_CLEANER_LOG_LEVEL", "debug")
    monkeypatch.setenv("RESULTS_CLEANER_MAX_INPUT_BYTES", "2048")

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.max_input_bytes == 2048


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("RESULTS_CLEANER_LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        get_settings()


def test_unrelated_dotenv_keys_do_not_break_a_run(workspace, write_input, capsys):
    (workspace / ".env").write_text("PORT=8000\nDATABASE_URL=postgres://x\n")
    write_input({"results": [{"id": 1, "profile": 2}]})

    status = main()

    assert status == 0
    assert capsys.readouterr().out == f"{SUCCESS_MESSAGE}\n"
    assert orjson.loads((workspace / "output.json").read_bytes()) == [{"id": 1}]


def test_dotenv_overrides_are_read(workspace):
    (workspace / ".env").write_text("RESULTS_CLEANER_MAX_JSON_DEPTH=12\n")

    assert get_settings().max_json_depth == 12


def test_main_reports_invalid_configuration(
    workspace, write_input, monkeypatch, capsys, caplog
):
    monkeypatch.setenv("RESULTS_CLEANER_LOG_LEVEL", "chatty")
    write_input({"results": []})

    with caplog.at_level(logging.ERROR, logger="results_cleaner"):
        status = main()

    assert status == 1
    assert capsys.readouterr().out == ""
    assert "Invalid configuration" in caplog.text
    assert not (workspace / "output.json").exists()
