"""Tests for bounded polling."""

import pytest

from hop.errors import AwaitTimeoutError
from hop.polling import await_non_empty, await_until, is_non_empty


class FakeClock:
    """Monotonic clock advanced only by sleep()."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def _reader(results: list):
    """Return results in order, repeating the last one."""
    calls = {"n": 0}

    def read():
        index = min(calls["n"], len(results) - 1)
        calls["n"] += 1
        return results[index]

    read.calls = calls
    return read


class TestIsNonEmpty:
    def test_values(self) -> None:
        assert not is_non_empty(None)
        assert not is_non_empty([])
        assert is_non_empty(["conn"])
        assert is_non_empty({"a": 1})


class TestAwaitUntil:
    """Tests for await_until."""

    def test_immediate_success_does_not_sleep(self) -> None:
        clock = FakeClock()
        result = await_until(_reader([["a"]]), timeout=1.0, interval=0.1,
                             clock=clock, sleep=clock.sleep)
        assert result == ["a"]
        assert clock.sleeps == []

    def test_converges_after_retries(self) -> None:
        clock = FakeClock()
        read = _reader([[], None, ["c1"]])
        result = await_until(read, timeout=1.0, interval=0.1, clock=clock, sleep=clock.sleep)
        assert result == ["c1"]
        assert read.calls["n"] == 3
        assert clock.sleeps == [0.1, 0.1]

    def test_custom_predicate(self) -> None:
        clock = FakeClock()
        result = await_until(_reader([1, 2, 3]), lambda n: n >= 3, timeout=5, interval=1,
                             clock=clock, sleep=clock.sleep)
        assert result == 3

    def test_times_out_with_last_result(self) -> None:
        """Gives up only once elapsed exceeds the timeout, within one interval."""
        clock = FakeClock()
        with pytest.raises(AwaitTimeoutError) as exc_info:
            await_until(_reader([[]]), timeout=1.0, interval=0.25,
                        clock=clock, sleep=clock.sleep)
        error = exc_info.value
        assert error.last_result == []
        assert 1.0 < error.elapsed <= 1.0 + 0.25
        assert isinstance(error, TimeoutError)

    def test_never_gives_up_early(self) -> None:
        clock = FakeClock()
        with pytest.raises(AwaitTimeoutError):
            await_until(_reader([None]), timeout=0.5, interval=0.1,
                        clock=clock, sleep=clock.sleep)
        assert sum(clock.sleeps) > 0.5

    def test_zero_timeout_reads_once(self) -> None:
        clock = FakeClock()
        read = _reader([[]])
        with pytest.raises(AwaitTimeoutError):
            await_until(read, timeout=0, interval=0.1, clock=clock, sleep=clock.sleep)
        assert read.calls["n"] == 2

    @pytest.mark.parametrize(("timeout", "interval"), [(-1, 0.1), (1, 0), (1, -0.5)])
    def test_invalid_arguments(self, timeout: float, interval: float) -> None:
        with pytest.raises(ValueError):
            await_until(_reader([["x"]]), timeout=timeout, interval=interval)

    def test_await_non_empty(self) -> None:
        assert await_non_empty(_reader([["x"]]), timeout=0.1, interval=0.01) == ["x"]
