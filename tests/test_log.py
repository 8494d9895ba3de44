import io
import re

import pytest

from hookpilot import log
from hookpilot.log import Level, Logger, Spinner

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text):
    return _ANSI.sub("", text)


class FakeTerminal(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def output():
    buffer = io.StringIO()
    log.set_output(buffer)
    log.set_level(Level.INFO)
    log.set_colors(True)
    yield buffer
    log.set_output(None)
    log.set_level(Level.INFO)
    log.set_colors(True)


@pytest.mark.parametrize(
    "name, expected",
    [("error", Level.ERROR), ("INFO", Level.INFO), ("Debug", Level.DEBUG)],
)
def test_parse_level(name, expected):
    assert log.parse_level(name) == expected


def test_parse_level_rejects_unknown():
    with pytest.raises(ValueError, match="not a valid Level"):
        log.parse_level("warn")


def test_logger_filters_by_level():
    buffer = io.StringIO()
    logger = Logger(out=buffer)
    logger.set_level(Level.WARN)
    logger.info("hidden")
    logger.warn("shown")
    logger.error("err")
    assert buffer.getvalue() == "shown\nerr\n"


def test_is_level_enabled_at_info():
    logger = Logger(out=io.StringIO())
    assert logger.is_level_enabled(Level.ERROR)
    assert logger.is_level_enabled(Level.WARN)
    assert logger.is_level_enabled(Level.INFO)
    assert not logger.is_level_enabled(Level.DEBUG)


def test_println_joins_with_spaces():
    buffer = io.StringIO()
    Logger(out=buffer).println("a", 1, "b")
    assert buffer.getvalue() == "a 1 b\n"


def test_printf_and_logf():
    buffer = io.StringIO()
    logger = Logger(out=buffer)
    logger.printf("%s=%d", "x", 3)
    logger.logf(Level.DEBUG, "%s", "skipped")
    assert buffer.getvalue() == "x=3"


def test_set_and_unset_name_update_spinner_suffix():
    logger = Logger(out=io.StringIO(), spinner=Spinner(stream=io.StringIO()))
    logger.set_name("a")
    logger.set_name("b")
    assert logger.spinner.suffix == " waiting: a, b"
    logger.unset_name("a")
    assert logger.spinner.suffix == " waiting: b"
    logger.unset_name("b")
    assert logger.spinner.suffix == " waiting"


def test_logger_debug_prefixes_border():
    buffer = io.StringIO()
    Logger(out=buffer, level=Level.DEBUG).debug("msg")
    assert plain(buffer.getvalue()) == "│ msg\n"


def test_colors_disabled_leaves_text_plain(output):
    log.set_colors(False)
    for paint in (log.cyan, log.green, log.red, log.yellow, log.gray, log.bold):
        assert paint("text") == "text"


def test_colors_enabled_wraps_text(output):
    for paint in (log.cyan, log.green, log.red, log.yellow, log.gray, log.bold):
        painted = paint("text")
        assert painted != "text"
        assert plain(painted) == "text"


def test_set_colors_mapping_overrides_and_ignores_empty(output):
    try:
        log.set_colors({"red": 1})
        painted = log.red("x")
        assert painted.startswith("\x1b[31m")
        log.set_colors({"red": ""})
        assert log.red("x") == painted
    finally:
        log.set_colors({"red": 196})


def test_styled_info_adds_border_and_padding(output):
    log.styled().with_left_border(log.NORMAL_BORDER, "cyan").with_padding(2).info("one\ntwo")
    assert plain(output.getvalue()).splitlines() == ["│  one", "│  two"]


def test_box_draws_rounded_borders(output):
    log.box("left", "right")
    lines = plain(output.getvalue()).splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("╭") and lines[0].endswith("╮")
    assert lines[2].startswith("╰") and lines[2].endswith("╯")
    assert "left" in lines[1] and "right" in lines[1]
    assert len({len(line) for line in lines}) == 1


def test_separate_puts_text_under_rule(output):
    log.separate("summary")
    lines = plain(output.getvalue()).splitlines()
    assert lines[-1] == "summary"
    assert "─" * 36 in lines[-2]
    assert lines[-2].startswith("  ")


def test_debug_respects_level(output):
    log.debug("hello")
    assert output.getvalue() == ""
    log.set_level(Level.DEBUG)
    log.debug("hello")
    assert "hello" in plain(output.getvalue())


def test_warn_passes_warn_level(output):
    log.set_level(Level.WARN)
    log.info("no")
    log.warn("yes")
    assert plain(output.getvalue()) == "yes\n"


def test_errorf_formats(output):
    log.errorf("failed %s", "x")
    assert plain(output.getvalue()) == "failed x\n"


def test_info_decodes_bytes(output):
    log.info(b"bytes")
    assert output.getvalue() == "bytes\n"


def test_spinner_stays_inactive_without_terminal():
    spinner = Spinner(stream=io.StringIO())
    spinner.start()
    assert not spinner.active


def test_spinner_runs_on_terminal():
    terminal = FakeTerminal()
    spinner = Spinner(stream=terminal, interval=0.01)
    spinner.start()
    assert spinner.active
    spinner.stop()
    assert not spinner.active
    assert " waiting" in terminal.getvalue()
    assert spinner.frames[0] in terminal.getvalue()


def test_println_keeps_spinner_running():
    buffer = io.StringIO()
    logger = Logger(out=buffer, spinner=Spinner(stream=FakeTerminal(), interval=0.01))
    logger.spinner.start()
    try:
        logger.println("x")
        assert logger.spinner.active
    finally:
        logger.spinner.stop()
    assert buffer.getvalue() == "x\n"