from concurrent.futures import Future

from shared.message_envelope import Response
from template.size_reporter import SizeReporter


class FakeHost:
    def __init__(self, ok: bool = True) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.ok = ok

    def call(self, method: str, payload: dict) -> Future:
        self.calls.append((method, payload))
        future: Future = Future()
        future.set_result(Response.success() if self.ok else Response.failure("transport_failure"))
        return future


class Box:
    def __init__(self, width: int, height: int) -> None:
        self.size = (width, height)

    def measure(self) -> tuple[int, int]:
        return self.size


def _reporter(timers, box: Box, host: FakeHost, **kwargs) -> SizeReporter:
    return SizeReporter(box.measure, host.call, after=timers.after, after_cancel=timers.cancel, **kwargs)


def test_burst_of_renders_sends_one_report_with_last_measurement(timers) -> None:
    box = Box(100, 50)
    host = FakeHost()
    reporter = _reporter(timers, box, host)

    for width in (200, 300, 470):
        box.size = (width, 210)
        reporter.notify_rendered()

    assert len(timers.scheduled) == 3
    assert timers.cancelled == ["h1", "h2"]
    timers.fire_live()

    assert host.calls == [("template:onSize", {"width": 470, "height": 210})]
    assert reporter.last_sent == (470, 210)
    assert reporter.pending is False


def test_unchanged_size_is_not_reported_twice(timers) -> None:
    box = Box(470, 210)
    host = FakeHost()
    reporter = _reporter(timers, box, host)

    reporter.notify_rendered()
    timers.fire_live()
    reporter.notify_rendered()
    timers.fire_live()

    assert len(host.calls) == 1

    box.size = (470, 240)
    reporter.notify_rendered()
    timers.fire_live()
    assert host.calls[-1] == ("template:onSize", {"width": 470, "height": 240})


def test_rejected_report_is_retried_on_next_render(timers) -> None:
    box = Box(300, 100)
    host = FakeHost(ok=False)
    reporter = _reporter(timers, box, host)

    reporter.notify_rendered()
    timers.fire_live()
    assert reporter.last_sent is None

    host.ok = True
    reporter.notify_rendered()
    timers.fire_live()
    assert len(host.calls) == 2
    assert reporter.last_sent == (300, 100)


def test_close_cancels_pending_timer_and_ignores_later_renders(timers) -> None:
    host = FakeHost()
    reporter = _reporter(timers, Box(10, 10), host)

    reporter.notify_rendered()
    reporter.close()
    reporter.notify_rendered()

    assert timers.cancelled == ["h1"]
    assert len(timers.scheduled) == 1
    # A timer firing after teardown still must not report.
    timers.run("h1")
    assert host.calls == []


def test_debounce_interval_is_clamped(timers) -> None:
    reporter = _reporter(timers, Box(1, 1), FakeHost(), debounce_ms=5000)
    reporter.notify_rendered()

    assert reporter.debounce_ms == 100
    assert timers.scheduled[0][1] == 100
