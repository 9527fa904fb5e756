import collections.abc
import logging
import time

logger = logging.getLogger(__name__)


class TokenBucket:
    '''
    token bucket used to pace requests against the GitHub-API. The bucket holds at most
    `capacity` tokens and is refilled with `rate` tokens per second. It starts out full.

    `clock` and `sleep` default to `time.monotonic` and `time.sleep`; both may be replaced
    (e.g. by a fake clock in tests).
    '''
    def __init__(
        self,
        rate: float,
        capacity: float=1,
        clock: collections.abc.Callable[[], float]=time.monotonic,
        sleep: collections.abc.Callable[[float], None]=time.sleep,
    ):
        if rate <= 0:
            raise ValueError(f'{rate=} must be positive')
        if capacity < 1:
            raise ValueError(f'{capacity=} must be at least 1')

        self.rate = rate
        self.capacity = capacity
        self.clock = clock
        self.sleep = sleep

        self._tokens = capacity
        self._last_refill = clock()

    @staticmethod
    def from_interval(
        interval_seconds: float,
        clock: collections.abc.Callable[[], float]=time.monotonic,
        sleep: collections.abc.Callable[[float], None]=time.sleep,
    ) -> 'TokenBucket':
        '''
        returns a bucket admitting one request per `interval_seconds`
        '''
        return TokenBucket(
            rate=1 / interval_seconds,
            capacity=1,
            clock=clock,
            sleep=sleep,
        )

    @property
    def tokens(self) -> float:
        self._refill()
        return self._tokens

    def _refill(self):
        now = self.clock()
        elapsed = max(0, now - self._last_refill)
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
        self._last_refill = now

    def acquire(self, tokens: float=1) -> float:
        '''
        takes the given amount of tokens from the bucket, blocking until enough tokens are
        available. Returns the amount of seconds spent waiting.
        '''
        if tokens > self.capacity:
            raise ValueError(f'cannot acquire {tokens=} (exceeds {self.capacity=})')

        waited = 0
        self._refill()
        while self._tokens < tokens:
            wait_seconds = (tokens - self._tokens) / self.rate
            logger.debug(f'rate limit reached - waiting {wait_seconds:.2f}s')
            self.sleep(wait_seconds)
            waited += wait_seconds
            self._refill()

        self._tokens -= tokens
        return waited
