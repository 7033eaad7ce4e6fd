"""Source positions and the syntax error report."""

from __future__ import annotations

_LINE_BREAKS = "\n\r"


def index_position(code: str, index: int) -> tuple[int, int]:
    """Return the zero-based line and column of ``index`` in ``code``."""
    line = 0
    column = 0
    for ch in code[:index]:
        if ch == "\n":
            line += 1
            column = 0
        elif ch == "\r":
            column = 0
        else:
            column += 1
    return line, column


def _char_at(code: str, index: int) -> str:
    return code[index] if 0 <= index < len(code) else ""


def line_bounds(code: str, index: int) -> tuple[int, int]:
    """Return the start and end offsets of the line shown for ``index``."""
    st_index = 0 if index == 0 else index - 1
    if _char_at(code, index) and _char_at(code, index) in _LINE_BREAKS:
        while st_index > 0 and _char_at(code, st_index) in _LINE_BREAKS:
            st_index -= 1

    start = 0
    for i in range(st_index - 1, -1, -1):
        if code[i] in _LINE_BREAKS:
            start = i + 1
            break

    end = len(code)
    for i in range(max(index, 0), len(code)):
        if code[i] in _LINE_BREAKS:
            end = i
            break
    return start, end


def _clamp(code: str, index: int) -> int:
    if index >= len(code):
        return 0 if not code else len(code) - 1
    return index


def format_error(code: str, index: int, message: str, with_line: bool) -> str:
    """Render the offending line, a caret under ``index``, and the message."""
    index = _clamp(code, index)
    line, column = index_position(code, index)
    start, end = line_bounds(code, index)
    tail = f"{message} on line {line + 1}" if with_line else message
    return f"{code[start:end]}\n{' ' * column}^\n{tail}\n"


def readable(text: str) -> str:
    """Escape newlines and non-printable characters for display."""
    parts = []
    for ch in text:
        if " " <= ch <= "~":
            parts.append(ch)
        elif ch == "\n":
            parts.append("\\n")
        else:
            parts.extend(f"\\x{byte:02x}" for byte in ch.encode("utf-8"))
    return "".join(parts)


class PycSyntaxError(Exception):
    """An error found in the source, carrying a caret-annotated report."""

    def __init__(self, code: str, index: int, message: str, with_line: bool = False):
        self.code = code
        self.index = _clamp(code, index)
        self.message = message
        self.with_line = with_line
        self.line, self.column = index_position(code, self.index)
        self.report = format_error(code, self.index, message, with_line)
        super().__init__(self.report)