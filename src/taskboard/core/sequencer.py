"""Monotonic local identifiers.

One sequencer per owner; the counter lives only as long as the process.
"""


class Sequencer:
    """Hands out 1, 2, 3, ... on successive calls."""

    def __init__(self):
        self._last = 0

    def next(self) -> int:
        self._last += 1
        return self._last
