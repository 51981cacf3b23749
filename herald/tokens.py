"""
Herald tokenizer: turn one submitted line into words and chained segments.

What this module provides
- tokenize(line): split on whitespace runs while keeping double-quoted spans
  together as a single token (quotes stripped).
- split(line, separator, keep=False): split a submitted line into chained
  command segments on every unescaped separator that is not inside quotes.
- simplify(text): trim and collapse whitespace runs to a single space; the
  same normalization is used for lines and for entity display names.

Quoting rules
- '"' toggles quoting; inside quotes whitespace is literal.
- An unterminated quote consumes everything up to the end of the line.
- '""' produces an empty token, so an empty string can still be passed.
- Text glued to a quoted span belongs to the same token: 'a"b c"' -> 'ab c'.

Examples
    >>> tokenize('give "Red Potion" 5')
    ['give', 'Red Potion', '5']
    >>> split('cmd1;cmd2 "a;b"', ';')
    ['cmd1', 'cmd2 "a;b"']
"""
import re

QUOTE = '"'
ESCAPE = "\\"


def simplify(text, /):
    """
    trim leading/trailing whitespace and collapse inner runs to one space.
    """
    if not isinstance(text, str):
        raise TypeError("simplify() argument must be a string")
    return re.sub(r"\s+", " ", text.strip())


def tokenize(line, /):
    """
    split a line into tokens, preserving quoted segments.

    returns
    - list[str]: tokens in order; [] for empty or whitespace-only input.
    """
    if not isinstance(line, str):
        raise TypeError("tokenize() argument must be a string")

    tokens = []
    buffer = []
    started = False  # a token is in progress (may still be empty: "")
    quoted = False

    for char in line:
        if char == QUOTE:
            quoted = not quoted
            started = True
        elif char.isspace() and not quoted:
            if started:
                tokens.append("".join(buffer))
                buffer.clear()
                started = False
        else:
            buffer.append(char)
            started = True

    if started:
        tokens.append("".join(buffer))

    return tokens


def split(line, separator, /, *, keep=False):
    """
    split a line on unescaped separators that are not inside quotes.

    parameters
    - line: str
      the submitted text, e.g. '/god; /fly "a;b"'.
    - separator: str
      non-empty separator string (';' by default in Settings).
    - keep: bool
      keep empty segments instead of discarding them.

    behavior
    - quotes are preserved verbatim inside the returned segments; only the
      tokenizer strips them later.
    - '\\' immediately before the separator (outside quotes) escapes it: the
      backslash is dropped and the separator stays in the segment.
    - every segment is trimmed; a trailing separator yields a trailing empty
      segment that is dropped unless keep is True.
    """
    if not isinstance(line, str):
        raise TypeError("split() first argument must be a string")
    if not isinstance(separator, str):
        raise TypeError("split() second argument must be a string")
    if not separator:
        raise ValueError("split() separator cannot be empty")

    segments = []
    buffer = []
    quoted = False
    index = 0
    length = len(line)

    while index < length:
        char = line[index]
        if not quoted and char == ESCAPE and line.startswith(separator, index + 1):
            buffer.append(separator)
            index += 1 + len(separator)
            continue
        if not quoted and line.startswith(separator, index):
            segments.append("".join(buffer))
            buffer.clear()
            index += len(separator)
            continue
        if char == QUOTE:
            quoted = not quoted
        buffer.append(char)
        index += 1

    segments.append("".join(buffer))
    segments = [segment.strip() for segment in segments]

    if keep:
        return segments
    return [segment for segment in segments if segment]


__all__ = (
    "simplify",
    "tokenize",
    "split",
)
