import pytest

from src.agent.polling import PollPolicy, PollTimeout, poll_until
from tests.unit.agent.utils import FakeClock


def make_policy(**overrides) -> PollPolicy[str]:
    options = {
        "interval": 3.0,
        "max_wait": 300.0,
        "is_success": lambda s: s == "done",
        "is_failure": lambda s: s == "failed",
    }
    options.update(overrides)
    return PollPolicy(**options)


def sequence_fetch(values: list[str], clock: FakeClock, seen_at: list[float]):
    iterator = iter(values)

    async def fetch() -> str:
        seen_at.append(clock.now)
        return next(iterator)

    return fetch


async def test_returns_first_terminal_result(fake_clock: FakeClock) -> None:
    seen_at: list[float] = []
    fetch = sequence_fetch(["running", "running", "done"], fake_clock, seen_at)

    outcome = await poll_until(
        fetch, make_policy(), clock=fake_clock, sleep=fake_clock.sleep
    )

    assert outcome.result == "done"
    assert outcome.polls == 3
    assert seen_at == [0.0, 3.0, 6.0]
    assert outcome.elapsed == 6.0


async def test_failure_predicate_is_terminal(fake_clock: FakeClock) -> None:
    seen_at: list[float] = []
    fetch = sequence_fetch(["running", "failed", "done"], fake_clock, seen_at)

    outcome = await poll_until(
        fetch, make_policy(), clock=fake_clock, sleep=fake_clock.sleep
    )

    assert outcome.result == "failed"
    assert outcome.polls == 2


async def test_timeout_never_before_max_wait(fake_clock: FakeClock) -> None:
    seen_at: list[float] = []

    async def fetch() -> str:
        seen_at.append(fake_clock.now)
        return "running"

    with pytest.raises(PollTimeout) as exc_info:
        await poll_until(
            fetch, make_policy(max_wait=10.0), clock=fake_clock, sleep=fake_clock.sleep
        )

    assert seen_at == [0.0, 3.0, 6.0, 9.0]
    assert fake_clock.sleeps == [3.0, 3.0, 3.0, 1.0]
    assert exc_info.value.polls == 4
    assert exc_info.value.elapsed >= 10.0


async def test_transient_errors_are_tolerated(fake_clock: FakeClock) -> None:
    results: list[Exception | str] = [ConnectionError("reset"), "running", "done"]

    async def fetch() -> str:
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    outcome = await poll_until(
        fetch,
        make_policy(
            max_transient_errors=1,
            is_transient=lambda e: isinstance(e, ConnectionError),
        ),
        clock=fake_clock,
        sleep=fake_clock.sleep,
    )

    assert outcome.result == "done"
    assert outcome.polls == 3


async def test_transient_error_budget_is_consecutive(fake_clock: FakeClock) -> None:
    calls = 0

    async def fetch() -> str:
        nonlocal calls
        calls += 1
        raise ConnectionError("reset")

    with pytest.raises(ConnectionError):
        await poll_until(
            fetch,
            make_policy(
                max_transient_errors=2,
                is_transient=lambda e: isinstance(e, ConnectionError),
            ),
            clock=fake_clock,
            sleep=fake_clock.sleep,
        )

    assert calls == 3


async def test_non_transient_error_propagates_immediately(
    fake_clock: FakeClock,
) -> None:
    async def fetch() -> str:
        raise ValueError("bad payload")

    with pytest.raises(ValueError, match="bad payload"):
        await poll_until(
            fetch,
            make_policy(max_transient_errors=5),
            clock=fake_clock,
            sleep=fake_clock.sleep,
        )

    assert fake_clock.sleeps == []
