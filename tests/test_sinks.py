# ============================================================================
# ClassProfiler - Sink Tests
#
# Purpose: Test StreamSink, RotatingFileSink, MultiSink fan-out and the
#          config-driven sink factory
# Inputs: Temporary files, in-memory streams
# Outputs: Test pass/fail
# Dependencies: pytest, ClassProfiler
# Usage: pytest tests/test_sinks.py -v
#
# Changelog:
#   2026-09-21: Initial sink tests
#   2026-09-28: as_sink adapter tests
#   2026-10-17: Same-named stream sinks stay independent; close() on stream and multi sinks
# ============================================================================

import io
import logging

import pytest

from ClassProfiler.config import SinkConfig
from ClassProfiler.errors import ConfigurationError, SinkError
from ClassProfiler.sinks import LoggerSink, MultiSink, RotatingFileSink, StreamSink, as_sink, build_sink


class TestStreamSink:
    def test_writes_plain_lines_at_or_above_level(self):
        stream = io.StringIO()
        sink = StreamSink(stream=stream, level=logging.INFO, name="tests.stream.plain")
        sink.info("visible")
        sink.emit(logging.DEBUG, "hidden")
        assert stream.getvalue() == "visible\n"

    def test_default_level_is_warning(self):
        stream = io.StringIO()
        sink = StreamSink(stream=stream, name="tests.stream.default")
        sink.info("dropped")
        sink.warning("kept")
        assert stream.getvalue() == "kept\n"

    def test_same_name_sinks_are_independent(self):
        first_stream, second_stream = io.StringIO(), io.StringIO()
        first = StreamSink(stream=first_stream, level=logging.INFO, name="tests.stream.same")
        second = StreamSink(stream=second_stream, level=logging.ERROR, name="tests.stream.same")

        first.info("report line")
        second.info("quiet")

        assert first.level == logging.INFO
        assert second.level == logging.ERROR
        assert first.logger is not second.logger
        assert first_stream.getvalue() == "report line\n"
        assert second_stream.getvalue() == ""

    def test_close_detaches_handler_but_not_stream(self):
        stream = io.StringIO()
        sink = StreamSink(stream=stream, level=logging.INFO, name="tests.stream.close")
        sink.info("before")
        sink.close()
        sink.info("after")
        assert sink.logger.handlers == []
        assert not stream.closed
        assert stream.getvalue() == "before\n"

    def test_set_level(self):
        stream = io.StringIO()
        sink = StreamSink(stream=stream, level=logging.WARNING, name="tests.stream.level")
        sink.set_level(logging.INFO)
        sink.info("now visible")
        assert sink.level == logging.INFO
        assert "now visible" in stream.getvalue()


class TestRotatingFileSink:
    def test_writes_to_file(self, tmp_path):
        path = tmp_path / "nested" / "profile.log"
        sink = RotatingFileSink(path, level=logging.INFO)
        sink.info("line one")
        sink.close()
        content = path.read_text()
        assert "INFO - line one" in content

    def test_rotates_when_backups_enabled(self, tmp_path):
        path = tmp_path / "profile.log"
        sink = RotatingFileSink(path, level=logging.INFO, max_bytes=200, backup_count=2)
        for i in range(20):
            sink.info(f"message number {i:03d}")
        sink.close()
        assert (tmp_path / "profile.log.1").exists()

    def test_unwritable_path_raises_sink_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(SinkError):
            RotatingFileSink(blocker / "profile.log")


class TestMultiSink:
    def test_fans_out_to_every_child(self, recording_sink):
        other = type(recording_sink)()
        sink = MultiSink(recording_sink, None, other)
        sink.info("hello")
        assert recording_sink.messages == ["hello"]
        assert other.messages == ["hello"]
        assert len(sink.sinks) == 2

    def test_failure_reported_after_all_children_tried(self, failing_sink, recording_sink):
        sink = MultiSink(failing_sink, recording_sink)
        with pytest.raises(SinkError) as excinfo:
            sink.info("hello")
        assert recording_sink.messages == ["hello"]
        assert "1 of 2" in str(excinfo.value)

    def test_level_is_lowest_child_level(self, recording_sink):
        quiet = type(recording_sink)(level=logging.ERROR)
        recording_sink.set_level(logging.INFO)
        sink = MultiSink(quiet, recording_sink)
        assert sink.level == logging.INFO

        sink.set_level(logging.WARNING)
        assert quiet.level == recording_sink.level == logging.WARNING

    def test_empty_multisink_level(self):
        assert MultiSink().level == logging.INFO

    def test_accepts_plain_loggers(self):
        sink = MultiSink(logging.getLogger("tests.multisink"))
        assert isinstance(sink.sinks[0], LoggerSink)

    def test_close_closes_every_child(self, tmp_path):
        stream = io.StringIO()
        file_sink = RotatingFileSink(tmp_path / "p.log", level=logging.INFO)
        stream_sink = StreamSink(stream=stream, level=logging.INFO, name="tests.multisink.close")
        MultiSink(file_sink, stream_sink).close()
        assert file_sink.handler.stream is None
        assert stream_sink.logger.handlers == []


class TestAsSink:
    def test_sink_returned_unchanged(self, recording_sink):
        assert as_sink(recording_sink) is recording_sink

    def test_rejects_other_objects(self):
        with pytest.raises(ConfigurationError):
            as_sink(print)

    def test_logger_sink_wraps_logger_errors(self):
        class BrokenLogger(logging.Logger):
            def log(self, level, msg, *args, **kwargs):
                raise OSError("closed")

        sink = LoggerSink(BrokenLogger("tests.broken"))
        with pytest.raises(SinkError):
            sink.info("x")


class TestBuildSink:
    def test_stdout(self):
        sink = build_sink(SinkConfig(type="stdout", level="INFO"), name="tests.factory.stdout")
        assert isinstance(sink, StreamSink)
        assert sink.level == logging.INFO

    def test_file(self, tmp_path):
        sink = build_sink(SinkConfig(type="file", path=str(tmp_path / "p.log")))
        assert isinstance(sink, RotatingFileSink)
        sink.close()

    def test_both(self, tmp_path):
        sink = build_sink(SinkConfig(type="both", path=str(tmp_path / "p.log")), name="tests.factory.both")
        assert isinstance(sink, MultiSink)
        assert [type(child) for child in sink.sinks] == [RotatingFileSink, StreamSink]
        sink.sinks[0].close()
