"""
Lazy sequence combinators for burn-in and thinning.

Both combinators wrap an iterator and expose the same iterator protocol,
so they can be stacked. Samplers always stack them as
``Picked(Burned(chain, k), n)``: burn-in consumes the transient first and
pick starts counting from the first post-burn value.
"""

from typing import Generic, Iterable, Iterator, TypeVar

from ..exceptions import InvalidConfigurationError

T = TypeVar("T")


def check_burn(k: int) -> int:
    """Validate a burn-in length."""
    if int(k) != k or k < 0:
        raise InvalidConfigurationError(f"burn count must be a non-negative integer, got {k}")
    return int(k)


def check_pick(n: int) -> int:
    """Validate a pick interval."""
    if int(n) != n or n < 1:
        raise InvalidConfigurationError(f"pick interval must be a positive integer, got {n}")
    return int(n)


class Burned(Generic[T]):
    """
    Discard the first k values of an iterator on first pull.

    Later pulls pass through unchanged. The burn is applied exactly once.
    """

    def __init__(self, inner: Iterable[T], k: int):
        self.inner = iter(inner)
        self.remaining = check_burn(k)

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        while self.remaining:
            self.remaining -= 1
            next(self.inner)
        return next(self.inner)


class Picked(Generic[T]):
    """
    Keep every nth value of an iterator.

    The first pull returns the first inner value; every later pull skips
    n-1 inner values and returns the next one. Over 0, 1, 2, ... with
    n = 2 this yields 0, 2, 4, ... The first post-burn value is always
    emitted, unlike thinning schemes that step n times before recording.
    """

    def __init__(self, inner: Iterable[T], n: int):
        self.inner = iter(inner)
        self.n = check_pick(n)
        self._started = False

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self._started:
            for _ in range(self.n - 1):
                next(self.inner)
        self._started = True
        return next(self.inner)


def burn(iterable: Iterable[T], k: int) -> Burned[T]:
    """Wrap iterable so that its first k values are skipped."""
    return Burned(iterable, k)


def pick(iterable: Iterable[T], n: int) -> Picked[T]:
    """Wrap iterable so that only every nth value is returned."""
    return Picked(iterable, n)
