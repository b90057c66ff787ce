"""Data models for outer-indent."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ParserState(Enum):
    """Parser states used while scanning outline content.

    Attributes:
        NORMAL: Default state for headlines and body text.
        IN_BLOCK: Inside a ``#+BEGIN_...``/``#+END_...`` block.
        IN_INLINE_TASK: Inside the body of an inline task.
    """

    NORMAL = auto()
    IN_BLOCK = auto()
    IN_INLINE_TASK = auto()


@dataclass
class ParserContext:
    """Encapsulate parser state while walking outline text.

    Attributes:
        state: Current parser state.
        block_name: Lower-cased name of the open block (``"src"``), if any.
        level: Level of the most recent regular headline, 0 before the first one.
        resume_state: State restored when a block nested in an inline task closes.
    """

    state: ParserState = ParserState.NORMAL
    block_name: str | None = None
    level: int = 0
    resume_state: ParserState = ParserState.NORMAL


class LineKind(Enum):
    """How a rendered line is indented."""

    HEADLINE = auto()
    TEXT = auto()
    INLINE_TASK = auto()


@dataclass(frozen=True)
class Headline:
    """A headline discovered while parsing.

    Attributes:
        line_number: Zero-based index of the headline line.
        level: Number of marker characters in the headline's marker run.
        title: Text following the marker run and separator.
        is_inline_task: Whether the headline is deep enough to be an inline task.
    """

    line_number: int
    level: int
    title: str
    is_inline_task: bool = False


@dataclass(frozen=True)
class OutlineLine:
    """A classified document line.

    Attributes:
        line_number: Zero-based index of the line.
        text: Line content without its line ending.
        kind: Indentation category of the line.
        level: Level of the headline itself for headline lines, otherwise the
            level of the enclosing headline (0 before the first headline).
    """

    line_number: int
    text: str
    kind: LineKind
    level: int


@dataclass
class ParseResult:
    """Structured result of parsing an outline document.

    Attributes:
        lines: Lines from the document, including trailing newlines.
        headlines: Headlines discovered during parsing, in document order.
        outline: Every line of the document with its indentation category.
    """

    lines: list[str]
    headlines: list[Headline]
    outline: list[OutlineLine] = field(default_factory=list)

    @property
    def deepest_level(self) -> int:
        """Deepest regular headline level, 0 when the document has none."""
        return max(
            (headline.level for headline in self.headlines if not headline.is_inline_task),
            default=0,
        )


@dataclass(frozen=True)
class IndentationTables:
    """Per-level indentation strings for the three kinds of rendered lines.

    Each table is indexed by nesting level. The three tables are always built
    and installed together.

    Attributes:
        text_line_prefixes: Indentation for body text under a headline.
        inline_task_prefixes: Indentation for inline-task lines.
        headline_prefixes: Indentation placed before a headline's marker run.
        line_indentation: Column width shared by non-headline lines.
    """

    text_line_prefixes: tuple[str, ...]
    inline_task_prefixes: tuple[str, ...]
    headline_prefixes: tuple[str, ...]
    line_indentation: int = 0

    @classmethod
    def empty(cls) -> IndentationTables:
        return cls((), (), ())

    def __len__(self) -> int:
        return len(self.headline_prefixes)

    def table(self, kind: LineKind) -> tuple[str, ...]:
        if kind is LineKind.HEADLINE:
            return self.headline_prefixes
        if kind is LineKind.INLINE_TASK:
            return self.inline_task_prefixes
        return self.text_line_prefixes


@dataclass(frozen=True, order=True)
class HideRegion:
    """A span of document text rendered with zero width.

    Attributes:
        start: Offset of the first hidden character.
        end: Offset one past the last hidden character.
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Invalid hide region ({self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start
