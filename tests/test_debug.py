import logging
import os

from searchindex import debug


def test_log_path_from_env(monkeypatch, tmp_path):
    target = tmp_path / "si.log"
    monkeypatch.setenv("SEARCHINDEX_LOG", str(target))
    assert debug._log_path(False) == str(target)


def test_log_path_defaults(monkeypatch):
    monkeypatch.delenv("SEARCHINDEX_LOG", raising=False)
    assert debug._log_path(False) is None
    assert debug._log_path(True) == os.path.join(os.getcwd(), "searchindex_debug.log")


def test_get_logger_follows_debug_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SEARCHINDEX_DEBUG", "yes")
    monkeypatch.setenv("SEARCHINDEX_LOG", str(tmp_path / "si.log"))
    debug.reset_logger()
    try:
        log = debug.get_logger("engine")
        assert log.name == "searchindex.engine"
        assert logging.getLogger("searchindex").level == logging.DEBUG
        assert debug.get_logger("host").parent is log.parent
    finally:
        monkeypatch.delenv("SEARCHINDEX_DEBUG")
        monkeypatch.delenv("SEARCHINDEX_LOG")
        debug.reset_logger()
        debug.get_logger()
    assert logging.getLogger("searchindex").level == logging.INFO
