import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


class PollTimeout(Exception):
    def __init__(self, polls: int, elapsed: float):
        self.polls = polls
        self.elapsed = elapsed
        super().__init__(f"No terminal state after {polls} polls ({elapsed:g}s)")


@dataclass(frozen=True)
class PollPolicy(Generic[T]):
    """Fixed-interval polling bounded by a total wall-clock duration.

    A result is terminal when either predicate accepts it. Exceptions for
    which ``is_transient`` returns True are tolerated up to
    ``max_transient_errors`` consecutive times, after which the last one is
    re-raised.
    """

    interval: float
    max_wait: float
    is_success: Callable[[T], bool]
    is_failure: Callable[[T], bool]
    max_transient_errors: int = 0
    is_transient: Callable[[Exception], bool] = lambda e: False

    def is_terminal(self, result: T) -> bool:
        return self.is_success(result) or self.is_failure(result)


@dataclass(frozen=True)
class PollOutcome(Generic[T]):
    result: T
    polls: int
    elapsed: float


async def poll_until(
    fetch: Callable[[], Awaitable[T]],
    policy: PollPolicy[T],
    *,
    clock: Clock = time.monotonic,
    sleep: Sleep = asyncio.sleep,
) -> PollOutcome[T]:
    """Call ``fetch`` until it returns a terminal result or ``max_wait`` elapses.

    The first poll happens immediately. Between polls the loop sleeps for the
    policy interval, shortened to the remaining budget so a timeout is raised
    as soon as ``max_wait`` has elapsed and never earlier.
    """
    start = clock()
    polls = 0
    consecutive_errors = 0

    while True:
        polls += 1
        try:
            result = await fetch()
        except Exception as e:
            if not policy.is_transient(e):
                raise
            consecutive_errors += 1
            if consecutive_errors > policy.max_transient_errors:
                raise
            logger.warning(
                f"Transient polling error ({consecutive_errors}/{policy.max_transient_errors}): {e}"
            )
        else:
            consecutive_errors = 0
            if policy.is_terminal(result):
                return PollOutcome(result=result, polls=polls, elapsed=clock() - start)

        remaining = policy.max_wait - (clock() - start)
        if remaining <= 0:
            raise PollTimeout(polls, clock() - start)

        await sleep(min(policy.interval, remaining))

        if clock() - start >= policy.max_wait:
            raise PollTimeout(polls, clock() - start)
