"""Unit tests for attune.logging."""

import logging

from attune.domain.report import RunReport
from attune.logging import (
    ReportLogHandler,
    ThirdPartyPrefixFilter,
    config_console_handler,
    config_flight_recorder,
)


def _record(name: str, level: int = logging.INFO, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, msg, (), None)


def test_third_party_prefix():
    flt = ThirdPartyPrefixFilter()
    third_party = _record("httpcore.connection")
    own = _record("attune.service_layer.agent")
    assert flt.filter(third_party) and flt.filter(own)
    assert third_party.prefix == "[httpcore]"
    assert own.prefix == ""


def test_console_handler_levels():
    handler = config_console_handler(level=logging.WARNING, color=False)
    assert handler.level == logging.WARNING
    assert any(isinstance(f, ThirdPartyPrefixFilter) for f in handler.filters)
    debug = config_console_handler(level=logging.WARNING, debug_mode=True)
    assert debug.level == logging.DEBUG
    assert not debug.filters


def test_flight_recorder_writes_on_warning(tmp_path):
    path = tmp_path / "latest.log"
    recorder = config_flight_recorder(path, capacity=10)
    recorder.handle(_record("attune.x", logging.DEBUG, "quiet"))
    assert not path.exists()
    recorder.handle(_record("attune.x", logging.WARNING, "loud"))
    recorder.close()
    recorder.target.close()
    text = path.read_text(encoding="utf-8")
    assert "quiet" in text and "loud" in text


class TestReportLogHandler:
    """The report sink copies project records into the report."""

    @staticmethod
    def test_collects_while_attached():
        report = RunReport(host="web01", run_id="r1")
        log = logging.getLogger("attune.tests.sink")
        log.setLevel(logging.DEBUG)
        try:
            sink = ReportLogHandler(report).attach()
            log.debug("too quiet")
            log.warning("disk %s full", "/var")
            sink.detach()
            log.warning("after detach")
        finally:
            log.setLevel(logging.NOTSET)

        (entry,) = report.logs
        assert entry.level == "warning"
        assert entry.source == "attune.tests.sink"
        assert entry.message == "disk /var full"
        assert entry.time.tzinfo is not None

    @staticmethod
    def test_ignores_other_loggers():
        report = RunReport(host="web01", run_id="r1")
        sink = ReportLogHandler(report).attach()
        try:
            logging.getLogger("httpx").error("not ours")
        finally:
            sink.detach()
        assert report.logs == []

    @staticmethod
    def test_collects_info_when_logging_is_unconfigured():
        report = RunReport(host="web01", run_id="r1")
        root, project = logging.getLogger(), logging.getLogger("attune")
        saved_root, saved_project = root.level, project.level
        root.setLevel(logging.WARNING)
        project.setLevel(logging.NOTSET)
        try:
            sink = ReportLogHandler(report).attach()
            logging.getLogger("attune.tests.quiet").info("Using cached catalog")
            sink.detach()
            assert project.level == logging.NOTSET
        finally:
            root.setLevel(saved_root)
            project.setLevel(saved_project)

        assert [e.message for e in report.logs] == ["Using cached catalog"]

    @staticmethod
    def test_detach_is_idempotent():
        sink = ReportLogHandler(RunReport(host="web01", run_id="r1")).attach()
        sink.detach()
        sink.detach()
        assert sink not in logging.getLogger("attune").handlers
