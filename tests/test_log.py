import os
import re
from datetime import datetime
from io import StringIO

import pytest

from syslab.log import (
    FileStrategy,
    LogLevel,
    LogStrategy,
    Logger,
    ScreenStrategy,
    level_name,
    timestamp,
)


class Capture(LogStrategy):
    def __init__(self):
        self.messages = []

    def emit(self, message):
        self.messages.append(message)


@pytest.fixture
def captured():
    sink = Capture()
    return Logger(sink), sink


@pytest.mark.parametrize(
    "level,name",
    [
        (LogLevel.DEBUG, "DEBUG"),
        (LogLevel.INFO, "INFO"),
        (LogLevel.ERROR, "ERROR"),
        (LogLevel.WARNING, "WARNING"),
        (LogLevel.FATAL, "FATAL"),
    ],
)
def test_level_name(level, name):
    assert level_name(level) == name


def test_level_name_unknown():
    assert level_name(42) == "UNKNOWN"


def test_timestamp_fixed_moment():
    assert timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02-03-04-05"


def test_timestamp_now_is_current_time():
    stamp = timestamp()
    parsed = datetime.strptime(stamp, "%Y-%m-%d-%H-%M-%S")
    assert abs((datetime.now() - parsed).total_seconds()) < 5


def test_message_prefix_and_body(captured):
    log, sink = captured
    msg = log(LogLevel.DEBUG, "main.cc", 10)
    msg << "hello world," << 3.14 << " "
    msg.flush()
    assert len(sink.messages) == 1
    text = sink.messages[0]
    assert re.fullmatch(
        r"\[[^\]]+\]\[DEBUG\]\[main\.cc\]\[\d+\]\[10\]hello world,3\.14 ", text
    )
    assert f"[{os.getpid()}]" in text


def test_flush_emits_once(captured):
    log, sink = captured
    msg = log(LogLevel.INFO, "a.cc", 1) << "x"
    msg.flush()
    msg.flush()
    assert len(sink.messages) == 1


def test_context_manager_emits(captured):
    log, sink = captured
    with log(LogLevel.ERROR, "b.cc", 2) as msg:
        msg << "boom"
        assert sink.messages == []
    assert sink.messages[0].endswith("boom")


def test_temporary_message_emits(captured):
    log, sink = captured
    log(LogLevel.FATAL, "c.cc", 3) << "gone"
    assert len(sink.messages) == 1
    assert "[FATAL]" in sink.messages[0]


def test_log_uses_caller_location(captured):
    log, sink = captured
    text = log.log(LogLevel.DEBUG, "value=", 7)
    assert "test_log.py" in text
    assert text.endswith("value=7")
    assert sink.messages == [text]


def test_screen_strategy_stream():
    stream = StringIO()
    ScreenStrategy(stream).emit("hello")
    assert stream.getvalue() == "hello\r\n\n"


def test_enable_screen_strategy_stdout(capsys):
    log = Logger(Capture())
    log.enable_screen_strategy()
    log.log(LogLevel.WARNING, "hi")
    out = capsys.readouterr().out
    assert "[WARNING]" in out
    assert out.endswith("hi\r\n\n")


def test_file_strategy_appends(tmp_path):
    directory = tmp_path / "a" / "b"
    strategy = FileStrategy(directory, "out.log")
    assert directory.is_dir()
    strategy.emit("first")
    strategy.emit("second")
    with open(directory / "out.log", encoding="utf-8", newline="") as handle:
        assert handle.read() == "first\r\nsecond\r\n"


def test_enable_file_strategy(tmp_path):
    log = Logger(Capture())
    log.enable_file_strategy(tmp_path, "my.log")
    text = log.log(LogLevel.INFO, "to file")
    with open(tmp_path / "my.log", encoding="utf-8", newline="") as handle:
        assert handle.read() == text + "\r\n"


def test_strategy_is_abstract():
    with pytest.raises(TypeError):
        LogStrategy()