"""Styled document model: attributed runs over a plain-text projection."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, replace

from richmark.styles import DEFAULT_COLOR, Font, ParagraphStyle, TextStyle


@dataclass(frozen=True)
class TextAttributes:
    """Everything a run carries besides its text."""

    font: Font
    color: str = DEFAULT_COLOR
    background: str | None = None
    strikethrough: bool = False
    paragraph: ParagraphStyle = ParagraphStyle()

    @classmethod
    def from_style(
        cls, style: TextStyle, paragraph: ParagraphStyle | None = None
    ) -> TextAttributes:
        """Attributes of ``style`` with the given paragraph context."""
        return cls(
            font=style.font,
            color=style.color,
            background=style.background,
            paragraph=paragraph if paragraph is not None else ParagraphStyle(),
        )

    def with_style(self, style: TextStyle) -> TextAttributes:
        """Swap font, color and background for ``style``'s, keeping the rest."""
        return replace(self, font=style.font, color=style.color, background=style.background)


@dataclass(frozen=True)
class Run:
    """A span of text sharing one attribute set."""

    text: str
    attributes: TextAttributes


@dataclass(frozen=True)
class Selection:
    """Half-open character range ``[offset, offset + length)``."""

    offset: int
    length: int = 0

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def is_empty(self) -> bool:
        return self.length <= 0

    def clamp(self, limit: int) -> Selection:
        """Clamp to ``[0, limit]``; a range entirely outside becomes empty."""
        start = min(max(self.offset, 0), limit)
        end = min(max(self.end, start), limit)
        return Selection(start, end - start)


class StyledDocument:
    """An ordered sequence of runs.

    Paragraph boundaries are newline characters inside run text. Runs are kept
    maximal: adjacent runs with equal attributes are merged and empty runs are
    dropped, so an empty document has no runs at all.
    """

    def __init__(self, runs: Iterable[Run] = ()) -> None:
        self._runs: list[Run] = []
        self.extend(runs)

    # === Construction ===

    def append(self, run: Run) -> None:
        """Append a run, merging it into the last one when attributes match."""
        if not run.text:
            return
        if self._runs and self._runs[-1].attributes == run.attributes:
            last = self._runs[-1]
            self._runs[-1] = Run(last.text + run.text, last.attributes)
        else:
            self._runs.append(run)

    def extend(self, runs: Iterable[Run]) -> None:
        for run in runs:
            self.append(run)

    def copy(self) -> StyledDocument:
        return StyledDocument(self._runs)

    # === Inspection ===

    @property
    def runs(self) -> tuple[Run, ...]:
        return tuple(self._runs)

    @property
    def text(self) -> str:
        """The plain-text projection, newlines included."""
        return "".join(run.text for run in self._runs)

    def __len__(self) -> int:
        return sum(len(run.text) for run in self._runs)

    def __iter__(self) -> Iterator[Run]:
        return iter(self._runs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StyledDocument):
            return NotImplemented
        return self._runs == other._runs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"StyledDocument({self._runs!r})"

    def spans(self, start: int, end: int) -> Iterator[tuple[int, int, TextAttributes]]:
        """Yield ``(start, end, attributes)`` for each run intersecting the range, clipped."""
        pos = 0
        for run in self._runs:
            run_end = pos + len(run.text)
            if run_end > start and pos < end:
                yield max(pos, start), min(run_end, end), run.attributes
            if run_end >= end:
                break
            pos = run_end

    def attributes_at(self, offset: int) -> TextAttributes:
        """Attributes of the character at ``offset``."""
        for _start, _end, attributes in self.spans(offset, offset + 1):
            return attributes
        msg = f"Offset {offset} is outside a document of length {len(self)}"
        raise IndexError(msg)

    def slice(self, start: int, end: int) -> list[Run]:
        """Runs covering ``[start, end)``, with the boundary runs cut."""
        text = self.text
        return [Run(text[s:e], attributes) for s, e, attributes in self.spans(start, end)]

    # === Mutation ===

    def splice(self, start: int, end: int, runs: Iterable[Run]) -> None:
        """Replace ``[start, end)`` with ``runs``."""
        length = len(self)
        head = self.slice(0, start)
        tail = self.slice(end, length)
        self._runs = []
        self.extend(head)
        self.extend(runs)
        self.extend(tail)

    def replace(self, start: int, end: int, text: str, attributes: TextAttributes) -> None:
        """Replace ``[start, end)`` with ``text`` carrying ``attributes``."""
        self.splice(start, end, [Run(text, attributes)])

    def map_attributes(
        self, start: int, end: int, transform: Callable[[TextAttributes], TextAttributes]
    ) -> None:
        """Rewrite the attributes of every run inside ``[start, end)``."""
        mapped = [Run(run.text, transform(run.attributes)) for run in self.slice(start, end)]
        self.splice(start, end, mapped)
