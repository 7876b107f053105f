"""Unit tests for render timing.

Tests cover:
- Start/end pairing and duration calculation
- Safe handling of unknown, repeated and None tokens
- Slow-render threshold boundary
- FIFO eviction once the record ceiling is crossed
"""

import pytest

from perfscope_core.monitoring import (
    BoundedRecordStore,
    MonitorConfig,
    PerformanceMonitor,
    RenderRecord,
    RenderTimingTracker,
)


def warning_events(logger):
    return [c.args[0] for c in logger.warning.call_args_list]


@pytest.fixture
def monitor(clock, logger, memory_probe):
    return PerformanceMonitor(
        enabled=True, clock=clock, logger=logger, memory_probe=memory_probe
    )


class TestStartRender:
    """Tests for start_render."""

    def test_start_returns_token_and_opens_record(self, monitor, clock):
        token = monitor.start_render("Header")

        assert isinstance(token, str)
        records = monitor.render_records
        assert len(records) == 1
        assert records[0].label == "Header"
        assert records[0].start_time == clock.now
        assert records[0].end_time is None
        assert records[0].duration is None
        assert records[0].is_open

    def test_same_label_produces_independent_tokens(self, monitor):
        tokens = {monitor.start_render("List") for _ in range(50)}

        assert len(tokens) == 50
        assert len(monitor.render_records) == 50

    def test_disabled_returns_none_without_reading_clock(self, logger):
        calls = []

        def clock():
            calls.append(1)
            return 0.0

        monitor = PerformanceMonitor(enabled=False, clock=clock, logger=logger)

        assert monitor.start_render("Header") is None
        assert monitor.render_records == ()
        assert calls == []


class TestEndRender:
    """Tests for end_render."""

    def test_end_computes_duration(self, monitor, clock):
        token = monitor.start_render("Header")
        clock.advance(5.5)
        monitor.end_render(token)

        record = monitor.render_records[0]
        assert record.end_time == clock.now
        assert record.duration == pytest.approx(5.5)
        assert not record.is_open

    def test_end_in_any_order_closes_each_once(self, monitor, clock):
        tokens = []
        for _ in range(5):
            tokens.append(monitor.start_render("Row"))
            clock.advance(1)

        for token in reversed(tokens):
            clock.advance(2)
            monitor.end_render(token)

        records = monitor.render_records
        assert all(not r.is_open for r in records)
        assert all(r.duration >= 0 for r in records)

    def test_end_twice_is_noop(self, monitor, clock):
        token = monitor.start_render("Header")
        clock.advance(3)
        monitor.end_render(token)
        first_end = monitor.render_records[0].end_time

        clock.advance(100)
        monitor.end_render(token)

        record = monitor.render_records[0]
        assert record.end_time == first_end
        assert record.duration == pytest.approx(3)

    def test_render_records_are_copies(self, monitor, clock):
        token = monitor.start_render("X")
        clock.advance(5)
        monitor.end_render(token)

        exposed = monitor.render_records[0]
        exposed.label = "Renamed"
        exposed.end_time = clock.now + 10_000
        exposed.duration = 10_005.0

        record = monitor.render_records[0]
        assert record.label == "X"
        assert record.duration == pytest.approx(5)
        assert list(monitor.get_summary().render_summary) == ["X"]
        assert monitor.get_summary().render_summary["X"].total_time == pytest.approx(5)

    def test_end_unknown_token_is_noop(self, monitor, logger):
        monitor.start_render("Header")
        monitor.end_render("does-not-exist")

        assert monitor.render_records[0].is_open
        logger.warning.assert_not_called()
        logger.error.assert_not_called()

    def test_end_none_token_is_noop(self, monitor, logger):
        monitor.end_render(None)

        assert monitor.render_records == ()
        logger.error.assert_not_called()

    def test_end_when_disabled_is_noop(self, logger):
        monitor = PerformanceMonitor(enabled=False, logger=logger)
        monitor.end_render("anything")

        assert monitor.render_records == ()
        logger.warning.assert_not_called()


class TestSlowRender:
    """Tests for the slow-render diagnostic."""

    def test_duration_above_threshold_warns_once(self, monitor, clock, logger):
        token = monitor.start_render("Feed")
        clock.advance(16.01)
        monitor.end_render(token)

        assert warning_events(logger) == ["slow_render_detected"]
        kwargs = logger.warning.call_args.kwargs
        assert kwargs["label"] == "Feed"
        assert kwargs["duration_ms"] == pytest.approx(16.01)

    def test_duration_at_threshold_does_not_warn(self, monitor, clock, logger):
        token = monitor.start_render("Feed")
        clock.advance(16)
        monitor.end_render(token)

        assert warning_events(logger) == []

    def test_custom_threshold(self, clock, logger):
        monitor = PerformanceMonitor(
            enabled=True,
            config=MonitorConfig(slow_render_threshold_ms=33.0),
            clock=clock,
            logger=logger,
        )
        token = monitor.start_render("Feed")
        clock.advance(20)
        monitor.end_render(token)

        assert warning_events(logger) == []


class TestEviction:
    """Tests for FIFO eviction of render records."""

    def test_ceiling_holds_with_start_end_pairs(self, clock, logger):
        monitor = PerformanceMonitor(
            enabled=True, config=MonitorConfig(max_render_records=1000), clock=clock, logger=logger
        )

        for i in range(1500):
            token = monitor.start_render(f"C{i}")
            clock.advance(1)
            monitor.end_render(token)

        records = monitor.render_records
        assert len(records) == 1000
        assert [r.label for r in records] == [f"C{i}" for i in range(500, 1500)]

    def test_eviction_happens_on_end_only(self, clock, logger):
        monitor = PerformanceMonitor(
            enabled=True, config=MonitorConfig(max_render_records=3), clock=clock, logger=logger
        )
        tokens = [monitor.start_render(f"C{i}") for i in range(5)]

        # Starting never evicts
        assert len(monitor.render_records) == 5

        monitor.end_render(tokens[4])

        # A single end evicts a single oldest record, even an open one
        assert [r.label for r in monitor.render_records] == ["C1", "C2", "C3", "C4"]

    def test_end_of_evicted_token_is_noop(self, clock, logger):
        monitor = PerformanceMonitor(
            enabled=True, config=MonitorConfig(max_render_records=1), clock=clock, logger=logger
        )
        first = monitor.start_render("A")
        second = monitor.start_render("B")
        monitor.end_render(second)

        assert [r.label for r in monitor.render_records] == ["B"]

        monitor.end_render(first)
        assert [r.label for r in monitor.render_records] == ["B"]


class TestRenderTimingTracker:
    """Tests for the tracker used standalone."""

    def test_tracker_writes_to_shared_store(self, clock, logger):
        store = BoundedRecordStore(max_size=10)
        tracker = RenderTimingTracker(store, True, clock, logger)

        token = tracker.start("Modal")
        clock.advance(4)
        tracker.end(token)

        assert token in store
        assert store.get(token).duration == pytest.approx(4)


class TestRenderRecord:
    """Tests for the record model."""

    def test_close_sets_end_and_duration(self):
        record = RenderRecord(label="List", start_time=100.0)

        assert record.close(112.5) == pytest.approx(12.5)
        assert record.end_time == 112.5
        assert not record.is_open

    def test_second_close_keeps_first_values(self):
        record = RenderRecord(label="List", start_time=100.0)
        record.close(105.0)

        assert record.close(10_000.0) == pytest.approx(5)
        assert record.end_time == 105.0
        assert record.duration == pytest.approx(5)
