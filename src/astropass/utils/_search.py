"""Bisection search for the first instant at which a predicate holds."""

from __future__ import annotations

from collections.abc import Callable
from math import ceil, floor


def find_first_true(
    begin: float,
    end: float,
    test: Callable[[float], bool],
    limit: float = 1.0,
) -> float:
    """Find the first value in ``[begin, end]`` for which ``test`` is true.

    ``test`` is assumed to be false over the first part of the interval
    and true over the rest; if that does not hold the result is
    meaningless.  The interval is halved until it is no wider than
    ``limit``.  With a resolution of one or more, the endpoints are first
    widened to whole numbers and every midpoint is floored, so the search
    only ever evaluates integral times.

    If ``begin`` is after ``end`` the search runs backwards and the result
    is the last value for which ``test`` holds.

    Args:
        begin: Start of the interval.
        end: End of the interval.
        test: Predicate to evaluate.
        limit: Resolution of the search. Default: ``1.0``

    Returns:
        The end of the final bracketing interval.

    Examples:
        ```python
        from astropass.utils import find_first_true
        find_first_true(0, 100, lambda t: t >= 42.5)  # 43
        ```
    """
    if not limit:
        limit = 1.0
    integral = limit >= 1
    if integral:
        if begin <= end:
            begin = floor(begin)
            end = ceil(end)
        else:
            end = floor(end)
            begin = ceil(begin)
    while abs(end - begin) > limit:
        mid = floor((begin + end) / 2) if integral else (begin + end) / 2
        if test(mid):
            end = mid
        else:
            begin = mid
    return end
