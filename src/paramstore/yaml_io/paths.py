"""Mapping between flat parameter names and nested YAML maps.

``a/b/c`` is the leaf ``c`` inside map ``b`` inside map ``a``. Given names in
sorted order, ``PathTracker`` works out which maps to close and open before
each leaf so that every directory is emitted exactly once.
"""

from dataclasses import dataclass, field

SEPARATOR = "/"


def split_name(name: str) -> tuple[list[str], str]:
    """Split a parameter name into its directory segments and leaf key."""
    tokens = name.split(SEPARATOR)
    return tokens[:-1], tokens[-1]


@dataclass
class PathStep:
    """Map operations needed before emitting one leaf."""

    close: int
    open: list[str] = field(default_factory=list)
    key: str = ""


class PathTracker:
    """Tracks the directory segments currently open in the output.

    Example:
        tracker = PathTracker()
        tracker.advance("a/x")  # PathStep(close=0, open=["a"], key="x")
        tracker.advance("a/y")  # PathStep(close=0, open=[], key="y")
        tracker.advance("b")    # PathStep(close=1, open=[], key="b")
        tracker.finish()        # 0
    """

    def __init__(self):
        self._open: list[str] = []

    @property
    def open_segments(self) -> list[str]:
        return list(self._open)

    def advance(self, name: str) -> PathStep:
        """Move to the directory of ``name``.

        Names must arrive in sorted order, which keeps the members of a
        directory contiguous.
        """
        directories, leaf = split_name(name)

        common = 0
        for open_segment, segment in zip(self._open, directories):
            if open_segment != segment:
                break
            common += 1

        step = PathStep(
            close=len(self._open) - common,
            open=directories[common:],
            key=leaf,
        )
        self._open = directories
        return step

    def finish(self) -> int:
        """Close everything; returns the number of maps still open."""
        remaining = len(self._open)
        self._open = []
        return remaining
