import os
import tempfile
from collections import deque

import pytest

# Keep test runs from writing into the user's home log directory.
os.environ.setdefault("NOTIFICATION_BRIDGE_LOG_DIR", tempfile.mkdtemp(prefix="notification-bridge-logs-"))


def pytest_runtest_setup(item):
    if item.get_closest_marker("pyqt_required"):
        if not os.getenv("PYQT_TESTS"):
            pytest.skip("PYQT_TESTS not set; skipping PyQt-dependent test")


class ManualLoop:
    """Event loop stand-in: posted callables run only when drained, in FIFO order."""

    def __init__(self) -> None:
        self.queue: deque = deque()

    def post(self, callback) -> None:
        self.queue.append(callback)

    def run(self) -> int:
        ran = 0
        while self.queue:
            self.queue.popleft()()
            ran += 1
        return ran


class AfterHarness:
    def __init__(self) -> None:
        self.scheduled: list[tuple[str, int, object]] = []
        self.cancelled: list[object] = []

    def after(self, ms: int, cb) -> str:
        handle = f"h{len(self.scheduled) + 1}"
        self.scheduled.append((handle, ms, cb))
        return handle

    def cancel(self, handle: object) -> None:
        self.cancelled.append(handle)

    def live(self) -> list[str]:
        return [h for h, _ms, _cb in self.scheduled if h not in self.cancelled]

    def run(self, handle: str) -> None:
        for h, _ms, cb in list(self.scheduled):
            if h == handle:
                cb()
                return
        raise AssertionError(f"Handle {handle} not found")

    def fire_live(self) -> None:
        for handle in self.live():
            self.run(handle)
            self.cancelled.append(handle)


@pytest.fixture
def loop() -> ManualLoop:
    return ManualLoop()


@pytest.fixture
def timers() -> AfterHarness:
    return AfterHarness()
