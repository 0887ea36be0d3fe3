"""A single line of text addressed by grapheme cluster."""

import regex

from .constants import EditorConstants

_GRAPHEME = regex.compile(r"\X")


def split_graphemes(text: str) -> list[str]:
    """Split text into extended grapheme clusters."""
    return _GRAPHEME.findall(text)


class Line:
    """One line of the buffer.

    Column positions are indexes into the list of grapheme clusters, so a
    composed character or an emoji sequence counts as one editable unit.
    Positions past the end are tolerated: insert appends, delete does nothing.
    """

    def __init__(self, text: str = ""):
        self._clusters: list[str] = split_graphemes(text)

    @classmethod
    def from_text(cls, text: str) -> "Line":
        return cls(text)

    @property
    def text(self) -> str:
        """Raw text of the line, tabs not expanded."""
        return "".join(self._clusters)

    @property
    def clusters(self) -> list[str]:
        return list(self._clusters)

    def __len__(self) -> int:
        return len(self._clusters)

    def is_empty(self) -> bool:
        return not self._clusters

    def __eq__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return self.text == other.text

    def __repr__(self):
        return f"Line({self.text!r})"

    def render(self, start: int, end: int) -> str:
        """Return clusters in [start, end) ready for display.

        end is clamped to the line length and start to end, so an out of
        range window yields an empty string. Tabs become spaces.
        """
        end = min(end, len(self._clusters))
        start = min(max(start, 0), end)
        out = []
        for cluster in self._clusters[start:end]:
            if cluster == "\t":
                out.append(EditorConstants.TAB_EXPANSION)
            else:
                out.append(cluster)
        return "".join(out)

    def _resegment(self, text: str) -> None:
        # Clusters can merge across the edit point (e.g. a combining mark
        # typed after a base letter), so segment the whole text again.
        self._clusters = split_graphemes(text)

    def insert(self, at: int, char: str) -> None:
        if at >= len(self._clusters):
            self._resegment(self.text + char)
            return
        at = max(at, 0)
        head = "".join(self._clusters[:at])
        tail = "".join(self._clusters[at:])
        self._resegment(head + char + tail)

    def delete(self, at: int) -> None:
        if at < 0 or at >= len(self._clusters):
            return
        del self._clusters[at]
        self._resegment("".join(self._clusters))

    def append(self, other: "Line") -> None:
        self._resegment(self.text + other.text)

    def split(self, at: int) -> "Line":
        """Truncate this line to [0, at) and return the rest as a new Line."""
        at = min(max(at, 0), len(self._clusters))
        tail = "".join(self._clusters[at:])
        self._clusters = self._clusters[:at]
        return Line(tail)
