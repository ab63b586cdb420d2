"""
Dialogue script parsing.

Two layers:

1. Line parsing - one raw script line into a ParsedLine:

```
> Yes, let's go @forest !end
```

   A leading `>` marks a player option, `@name` names the state to move
   to once the line is executed, and `!verb args` runs actions.

2. The `.dialog` authoring format, compiled to the JSON script mapping
   (state name -> list of raw lines):

```
// comment
# entry
Hello there. !amused
> Who are you? @intro
> Bye. !end

# intro
I am the keeper of this bridge. !set $met_keeper
```
"""

from __future__ import annotations

import json
import logging
import string
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Optional

from parley.dialog.wrap import MAX_CHARS_PER_LINE, wrap_text

logger = logging.getLogger(__name__)

OPTION_PREFIX = ">"
STATE_MARKER = "@"
ACTION_MARKER = "!"

_LETTERS = frozenset(string.ascii_letters)
_LOWERCASE = frozenset(string.ascii_lowercase)
_ACTION_CHARS = frozenset(string.ascii_letters + string.digits + " $_")


class TokenKind(Enum):
    """Kinds of token found in a raw line."""
    TEXT = auto()
    STATE = auto()
    ACTION = auto()


@dataclass(frozen=True)
class Token:
    """
    A span of a raw line.

    Attributes:
        kind: What the span is
        value: TEXT: the literal text. STATE: the state name (empty for a
            bare `@`). ACTION: the raw action run including its `!` markers.
    """
    kind: TokenKind
    value: str


@dataclass(frozen=True)
class ParsedLine:
    """A single parsed script line."""
    raw: str
    is_npc: bool
    text: str
    target_state: Optional[str] = None
    actions: tuple[tuple[str, ...], ...] = ()


def _starts_action(line: str, index: int) -> bool:
    return (
        line[index] == ACTION_MARKER
        and index + 1 < len(line)
        and line[index + 1] in _LETTERS
    )


def tokenize_line(line: str) -> list[Token]:
    """
    Split a raw line into ordered TEXT, STATE and ACTION tokens.

    An action run starts at `!` followed by a letter and continues over
    letters, digits, spaces, `$`, `_` and further `!`+letter markers, so adjacent
    actions arrive as one fused ACTION token.
    """
    tokens: list[Token] = []
    text: list[str] = []
    i = 0
    n = len(line)

    def flush_text() -> None:
        if text:
            tokens.append(Token(TokenKind.TEXT, "".join(text)))
            text.clear()

    while i < n:
        if _starts_action(line, i):
            flush_text()
            j = i + 2
            while j < n:
                if line[j] in _ACTION_CHARS:
                    j += 1
                elif _starts_action(line, j):
                    j += 2
                else:
                    break
            tokens.append(Token(TokenKind.ACTION, line[i:j]))
            i = j
        elif line[i] == STATE_MARKER:
            flush_text()
            j = i + 1
            while j < n and line[j] in _LETTERS:
                j += 1
            tokens.append(Token(TokenKind.STATE, line[i + 1:j]))
            i = j
        else:
            text.append(line[i])
            i += 1

    flush_text()
    return tokens


def _display_text(tokens: list[Token]) -> str:
    """Concatenate tokens up to the first state tag or lowercase action marker."""
    parts: list[str] = []
    for token in tokens:
        if token.kind is TokenKind.STATE:
            break
        if token.kind is TokenKind.ACTION:
            cut = _first_lowercase_marker(token.value)
            if cut >= 0:
                parts.append(token.value[:cut])
                break
        parts.append(token.value)
    return "".join(parts)


def _first_lowercase_marker(run: str) -> int:
    for k in range(len(run) - 1):
        if run[k] == ACTION_MARKER and run[k + 1] in _LOWERCASE:
            return k
    return -1


def _target_state(tokens: list[Token]) -> Optional[str]:
    # Only the first named state tag counts
    for token in tokens:
        if token.kind is TokenKind.STATE and token.value:
            return token.value
    return None


def _actions(tokens: list[Token]) -> tuple[tuple[str, ...], ...]:
    runs = " ".join(t.value for t in tokens if t.kind is TokenKind.ACTION)
    result = []
    for fragment in runs.split(ACTION_MARKER):
        words = fragment.split()
        if words:
            result.append(tuple(words))
    return tuple(result)


def parse_line(line: str, wrap_width: int = MAX_CHARS_PER_LINE) -> ParsedLine:
    """
    Parse one raw script line.

    Args:
        line: Raw line as authored
        wrap_width: Column width for NPC text

    Returns:
        ParsedLine with role, display text, target state and actions
    """
    is_npc = not line.startswith(OPTION_PREFIX)
    body = line if is_npc else line[len(OPTION_PREFIX):]
    tokens = tokenize_line(body)

    text = _display_text(tokens).strip()
    if is_npc:
        text = wrap_text(text, wrap_width)

    return ParsedLine(
        raw=line,
        is_npc=is_npc,
        text=text,
        target_state=_target_state(tokens),
        actions=_actions(tokens),
    )


@dataclass
class ParsedScript:
    """A complete parsed `.dialog` file."""
    id: str
    states: dict[str, list[str]] = field(default_factory=dict)


class DialogParser:
    """
    Parses `.dialog` authoring files into script mappings.
    """

    STATE_HEADER = "#"
    COMMENT = "//"

    def parse_file(self, path: str | Path) -> ParsedScript:
        """Parse a `.dialog` file."""
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        script = self.parse_string(content)
        script.id = path.stem
        return script

    def parse_string(self, content: str) -> ParsedScript:
        """Parse `.dialog` content."""
        script = ParsedScript(id="parsed")
        current: Optional[list[str]] = None

        for number, line in enumerate(content.split('\n'), start=1):
            stripped = line.strip()

            if not stripped or stripped.startswith(self.COMMENT):
                continue

            if stripped.startswith(self.STATE_HEADER):
                name = stripped[len(self.STATE_HEADER):].strip()
                current = script.states.setdefault(name, [])
                continue

            if current is None:
                logger.warning("Line %d outside of any state ignored: %r", number, stripped)
                continue

            current.append(stripped)

        return script

    def to_json(self, script: ParsedScript) -> dict[str, list[str]]:
        """Convert a parsed script to the JSON script mapping."""
        return {name: list(lines) for name, lines in script.states.items()}

    def save_json(self, script: ParsedScript, path: str | Path) -> None:
        """Save a parsed script as JSON."""
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_json(script), f, indent=2, ensure_ascii=False)


def compile_dialog_file(input_path: str | Path, output_path: Optional[str | Path] = None) -> Path:
    """
    Compile a `.dialog` script to JSON.

    Args:
        input_path: Path to .dialog file
        output_path: Path to output .json file (default: same name with .json)

    Returns:
        The path written to
    """
    input_path = Path(input_path)
    if output_path is None:
        output_path = input_path.with_suffix('.json')
    else:
        output_path = Path(output_path)

    parser = DialogParser()
    script = parser.parse_file(input_path)
    parser.save_json(script, output_path)
    logger.info("Compiled %s -> %s", input_path, output_path)
    return output_path
