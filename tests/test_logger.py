import io
import re
from datetime import datetime

from akiutils.logger import (
    Logger,
    LoggerMSGType,
    TerminalLogger,
    icon_by_type,
    string_for_type,
    timestamp,
)

TS = r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}z"
TS_FORMAT = "%Y-%m-%dT%H:%M:%S.%fz"


def test_icons_from_source():
    assert icon_by_type(LoggerMSGType.INFO) == " i "
    assert icon_by_type(LoggerMSGType.STATUS) == "---"
    assert icon_by_type(LoggerMSGType.TODO) == "Do!"


def test_all_icons_have_width_three():
    assert all(len(icon_by_type(t)) == 3 for t in LoggerMSGType)


def test_unknown_type_defaults():
    assert icon_by_type(99) == " ? "
    assert string_for_type(99) == "undefined"


def test_type_strings_from_source():
    assert string_for_type(LoggerMSGType.ERROR) == "!!error!!"
    assert string_for_type(LoggerMSGType.TEXT) == ""
    assert string_for_type(LoggerMSGType.UNEXPECTED_SUCCESS) == "unexpected failure"


def test_accepts_plain_int():
    assert icon_by_type(int(LoggerMSGType.WARNING)) == icon_by_type(LoggerMSGType.WARNING)


def test_timestamp_format_parses():
    ts = timestamp()
    assert re.fullmatch(TS, ts)
    parsed = datetime.strptime(ts, TS_FORMAT)
    assert parsed.year >= 2024


def test_log_line_format():
    out = io.StringIO()
    TerminalLogger(out).log(LoggerMSGType.INFO, "hello")
    line = out.getvalue()
    assert line.startswith("[ i ] [")
    assert line.endswith("] hello\n")
    stamp = line[len("[ i ] ["):-len("] hello\n")]
    assert datetime.strptime(stamp, TS_FORMAT).year >= 2024


def test_log_without_message_uses_type_name():
    out = io.StringIO()
    TerminalLogger(out).log(LoggerMSGType.SUCCESS)
    assert out.getvalue().rstrip("\n").endswith("] success")


def test_log_all_writes_each():
    out = io.StringIO()
    TerminalLogger(out).log_all(LoggerMSGType.STATUS, ["one", "two", "three"])
    lines = out.getvalue().splitlines()
    assert [line.rsplit("] ", 1)[1] for line in lines] == ["one", "two", "three"]


def test_log_split_lines():
    out = io.StringIO()
    TerminalLogger(out).log_split_lines(LoggerMSGType.FAILURE, "first\nsecond")
    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("[ f ]")
    assert lines[1].endswith("second")


def test_default_stream_is_stdout(capsys):
    TerminalLogger().log(LoggerMSGType.WARNING, "careful")
    captured = capsys.readouterr().out
    assert captured.startswith("[ ! ]")
    assert captured.endswith("careful\n")


def test_terminal_logger_through_logger_interface():
    out = io.StringIO()
    logger: Logger = TerminalLogger(out)
    logger.log_all(LoggerMSGType.TEXT, [])
    assert out.getvalue() == ""
    logger.log(LoggerMSGType.TEXT, "plain")
    assert out.getvalue().startswith("[   ] [")