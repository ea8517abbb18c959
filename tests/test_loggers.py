import io
import threading

import pytest

from semweaver.loggers import (
    ConsoleLogger,
    InMemoryLogger,
    LogKind,
    LogMessage,
    Logger,
    NullLogger,
    QuietLogger,
    TestLogger,
)


def make_streams():
    return io.StringIO(), io.StringIO()


def test_logger_is_abstract():
    with pytest.raises(TypeError):
        Logger()


def test_in_memory_records_in_order():
    logger = InMemoryLogger()
    logger.info("a")
    logger.warn("b")
    logger.error("c")
    logger.success("d")
    logger.loading("e")
    logger.log("f")
    assert logger.messages() == [
        LogMessage(LogKind.INFO, "a"),
        LogMessage(LogKind.WARN, "b"),
        LogMessage(LogKind.ERROR, "c"),
        LogMessage(LogKind.SUCCESS, "d"),
        LogMessage(LogKind.LOADING, "e"),
        LogMessage(LogKind.LOG, "f"),
    ]


def test_in_memory_trace_needs_debug_level():
    quiet = InMemoryLogger(0)
    quiet.trace("hidden")
    assert quiet.messages() == []
    verbose = InMemoryLogger(1)
    verbose.trace("shown")
    assert verbose.messages() == [LogMessage(LogKind.TRACE, "shown")]


def test_in_memory_counts():
    logger = InMemoryLogger()
    logger.warn("w1")
    logger.warn("w2")
    logger.error("e1")
    logger.info("i")
    assert logger.warn_count() == 2
    assert logger.error_count() == 1


def test_in_memory_messages_is_a_copy():
    logger = InMemoryLogger()
    logger.info("x")
    snapshot = logger.messages()
    snapshot.clear()
    assert len(logger.messages()) == 1


def test_in_memory_chainable_and_silent_calls():
    logger = InMemoryLogger()
    assert logger.same() is logger
    assert logger.add_style("bold", ["bold"]) is logger
    logger.newline(2)
    logger.indent(1)
    logger.done()
    logger.mute()
    logger.info("still recorded")
    assert logger.messages() == [LogMessage(LogKind.INFO, "still recorded")]


def test_in_memory_thread_safety():
    logger = InMemoryLogger()
    threads = [
        threading.Thread(target=lambda: [logger.warn("w") for _ in range(100)])
        for _ in range(4)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert logger.warn_count() == 400


def test_null_logger_returns_itself():
    logger = NullLogger()
    assert logger.same() is logger
    assert logger.add_style("x", []) is logger


def test_test_logger_counts(capsys):
    logger = TestLogger()
    logger.warn("careful")
    logger.error("broken")
    logger.error("broken again")
    logger.info("fine")
    assert logger.warn_count() == 1
    assert logger.error_count() == 2
    captured = capsys.readouterr()
    assert "careful" in captured.out
    assert "broken again" in captured.err


def test_console_logger_writes_messages():
    out, err = make_streams()
    logger = ConsoleLogger(0, out=out, err=err)
    logger.info("hello")
    logger.error("failure")
    assert "hello" in out.getvalue()
    assert "failure" in err.getvalue()


def test_console_logger_trace_requires_debug():
    out, err = make_streams()
    ConsoleLogger(0, out=out, err=err).trace("invisible")
    assert "invisible" not in out.getvalue()
    ConsoleLogger(1, out=out, err=err).trace("visible")
    assert "visible" in out.getvalue()


def test_console_logger_mute_keeps_warnings_and_errors():
    out, err = make_streams()
    logger = ConsoleLogger(1, out=out, err=err)
    logger.mute()
    logger.info("info text")
    logger.success("success text")
    logger.log("log text")
    logger.trace("trace text")
    logger.warn("warn text")
    logger.error("error text")
    written = out.getvalue()
    assert "info text" not in written
    assert "success text" not in written
    assert "log text" not in written
    assert "trace text" not in written
    assert "warn text" in written
    assert "error text" in err.getvalue()


def test_console_logger_same_keeps_line():
    out, err = make_streams()
    logger = ConsoleLogger(out=out, err=err)
    assert logger.same() is logger
    logger.log("first")
    logger.log("second")
    assert out.getvalue() == "firstsecond\n"


def test_console_logger_indent_prefixes_tabs():
    out, err = make_streams()
    logger = ConsoleLogger(out=out, err=err)
    logger.indent(2)
    logger.log("nested")
    logger.log("flat")
    assert out.getvalue() == "\t\tnested\nflat\n"


def test_console_logger_newline():
    out, err = make_streams()
    ConsoleLogger(out=out, err=err).newline(3)
    assert out.getvalue() == "\n\n\n"


def test_console_logger_loading_then_done_ends_line():
    out, err = make_streams()
    logger = ConsoleLogger(out=out, err=err)
    logger.loading("working")
    assert not out.getvalue().endswith("\n")
    logger.done()
    assert out.getvalue().endswith("\n")
    assert "working" in out.getvalue()


def test_quiet_logger_only_warnings_and_errors():
    out, err = make_streams()
    logger = QuietLogger(out=out, err=err)
    logger.info("info text")
    logger.success("success text")
    logger.log("log text")
    logger.loading("loading text")
    logger.warn("warn text")
    logger.error("error text")
    written = out.getvalue()
    assert "info text" not in written
    assert "success text" not in written
    assert "log text" not in written
    assert "loading text" not in written
    assert "warn text" in written
    assert "error text" in err.getvalue()
    assert logger.same() is logger