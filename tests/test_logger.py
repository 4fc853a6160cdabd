import re

from xopnet.logger import Logger, Priority


def test_instance_is_shared():
    first = Logger.instance()
    second = Logger.instance()
    received = []
    first.set_write_callback(lambda priority, text: received.append(text))
    assert second.log2(Priority.INFO, "shared") == "[INFO] shared"
    assert received == ["[INFO] shared"]
    assert first is second


def test_log_writes_file_and_callback(tmp_path):
    logger = Logger()
    received = []
    logger.set_write_callback(lambda priority, text: received.append((priority, text)))
    path = tmp_path / "out.log"
    logger.init(path)
    line = logger.log(Priority.DEBUG, "conn.c", "handle", 12, "hello")
    logger.exit()
    assert line == "[DEBUG][conn.c:handle:12] hello"
    assert received == [(Priority.DEBUG, line)]
    content = path.read_text(encoding="utf-8")
    assert re.fullmatch(
        r"\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\]\[DEBUG\]\[conn\.c:handle:12\] hello\n",
        content,
    )


def test_log2_format_and_state_label():
    logger = Logger()
    received = []
    logger.set_write_callback(lambda priority, text: received.append(text))
    assert logger.log2(Priority.ERROR, "boom") == "[ERROR] boom"
    assert logger.log2(Priority.STATE, "ready") == "[CONFIG] ready"
    assert received == ["[ERROR] boom", "[CONFIG] ready"]


def test_exit_stops_file_output(tmp_path):
    logger = Logger()
    path = tmp_path / "out.log"
    logger.init(path)
    logger.log2(Priority.INFO, "first")
    logger.exit()
    logger.log2(Priority.INFO, "second")
    content = path.read_text(encoding="utf-8")
    assert "first" in content
    assert "second" not in content


def test_bad_path_reports_on_stderr(tmp_path, capsys):
    logger = Logger()
    logger.init(tmp_path / "missing" / "out.log")
    assert "Failed to open logfile." in capsys.readouterr().err
    assert logger.log2(Priority.WARNING, "still works") == "[WARNING] still works"