"""Glob compilation for path queries.

Patterns are matched against whole, forward-slash separated subjects:

* ``*`` matches within one path segment and ``?`` matches one character.
* ``**`` as a whole segment matches any number of segments, including none.
* ``[abc]`` / ``[!abc]`` are character classes; ``{a,b}`` is alternation.
* ``\\`` escapes the next character.
* A leading ``!`` negates the pattern.

Extended globs such as ``!(x)`` or ``@(a|b)`` are rejected with ``ValueError``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

GlobPredicate = Callable[[str], bool]

_GLOB_SEP_PATTERN: Final[re.Pattern[str]] = re.compile(r"\\(?![{}()+?.^$])")
_NO_DOT: Final[str] = r"(?!\.)"
_EXTGLOB_CHARS: Final[str] = "!@+*?"


@dataclass(slots=True, frozen=True)
class GlobMatcher:
    """Compiled single glob pattern."""

    pattern: str
    regex: re.Pattern[str]
    negated: bool

    def matches(self, subject: str) -> bool:
        """Return True when the un-negated pattern matches the whole subject."""
        return self.regex.fullmatch(subject) is not None


def replace_path_sep_for_glob(path: str) -> str:
    """Rewrite backslash separators to forward slashes, keeping glob escapes."""
    return _GLOB_SEP_PATTERN.sub("/", path)


@lru_cache(maxsize=1024)
def compile_glob(pattern: str, *, dot: bool = True) -> GlobMatcher:
    """Compile one glob into a full-match regular expression."""
    negated = pattern.startswith("!") and not pattern.startswith("!(")
    body = pattern[1:] if negated else pattern
    return GlobMatcher(
        pattern=pattern,
        regex=re.compile(_translate(body, dot=dot), re.DOTALL),
        negated=negated,
    )


def globs_to_matcher(globs: Sequence[str], *, dot: bool = True) -> GlobPredicate:
    """Combine globs into one predicate over portable path subjects.

    Positive globs are OR-ed together. A negated glob whose pattern matches
    excludes the subject unless a later positive glob matches it again. When
    every glob is negated, anything not excluded matches.
    """
    if not globs:
        return _never

    matchers = [compile_glob(glob, dot=dot) for glob in globs]
    all_negated = all(matcher.negated for matcher in matchers)

    def matcher(path: str) -> bool:
        subject = replace_path_sep_for_glob(path)
        kind: bool | None = None
        for glob_matcher in matchers:
            matched = glob_matcher.matches(subject)
            if glob_matcher.negated:
                if matched:
                    kind = False
            elif matched:
                kind = True
        if all_negated:
            return kind is not False
        return bool(kind)

    return matcher


def _never(path: str) -> bool:
    return False


def _translate(pattern: str, *, dot: bool, segment_start: bool = True) -> str:
    parts: list[str] = []
    length = len(pattern)
    index = 0
    while index < length:
        char = pattern[index]
        at_segment_start = segment_start if index == 0 else pattern[index - 1] == "/"
        if char in _EXTGLOB_CHARS and pattern[index + 1 : index + 2] == "(":
            raise ValueError(f"Extended glob syntax is not supported: {pattern!r}")

        if char == "*":
            end = index
            while end < length and pattern[end] == "*":
                end += 1
            if end < length and pattern[end] == "(":
                raise ValueError(f"Extended glob syntax is not supported: {pattern!r}")
            at_segment_end = end == length or pattern[end] == "/"
            if end - index >= 2 and at_segment_start and at_segment_end:
                if end < length:
                    parts.append(_leading_globstar(dot))
                    index = end + 1
                elif parts and parts[-1] == "/":
                    parts.pop()
                    parts.append(_trailing_globstar(dot))
                    index = end
                else:
                    parts.append(_any_path(dot))
                    index = end
                continue
            parts.append(_star(dot, at_segment_start))
            index = end
            continue

        if char == "?":
            guard = _NO_DOT if at_segment_start and not dot else ""
            parts.append(guard + "[^/]")
            index += 1
            continue

        if char == "[":
            end = _class_end(pattern, index)
            if end < 0:
                raise ValueError(f"Unterminated character class in glob: {pattern!r}")
            parts.append(_translate_class(pattern[index + 1 : end]))
            index = end + 1
            continue

        if char == "{":
            end = _brace_end(pattern, index)
            if end < 0:
                raise ValueError(f"Unterminated brace expression in glob: {pattern!r}")
            alternatives = _split_alternatives(pattern[index + 1 : end])
            if len(alternatives) < 2:
                parts.append(re.escape(pattern[index : end + 1]))
            else:
                translated = [
                    _translate(item, dot=dot, segment_start=at_segment_start)
                    for item in alternatives
                ]
                parts.append("(?:" + "|".join(translated) + ")")
            index = end + 1
            continue

        if char == "\\" and index + 1 < length:
            parts.append(re.escape(pattern[index + 1]))
            index += 2
            continue

        parts.append("/" if char == "/" else re.escape(char))
        index += 1
    return "".join(parts)


def _star(dot: bool, at_segment_start: bool) -> str:
    if at_segment_start and not dot:
        return _NO_DOT + "[^/]*"
    return "[^/]*"


def _leading_globstar(dot: bool) -> str:
    if dot:
        return "(?:.*/)?"
    return r"(?:(?!\.)[^/]*/)*"


def _trailing_globstar(dot: bool) -> str:
    if dot:
        return "(?:/.*)?"
    return r"(?:/(?!\.)[^/]*)*"


def _any_path(dot: bool) -> str:
    if dot:
        return ".*"
    return r"(?:(?!\.)[^/]*(?:/(?!\.)[^/]*)*)?"


def _class_end(pattern: str, start: int) -> int:
    index = start + 1
    length = len(pattern)
    if index < length and pattern[index] in "!^":
        index += 1
    if index < length and pattern[index] == "]":
        index += 1
    while index < length and pattern[index] != "]":
        if pattern[index] == "\\":
            index += 1
        index += 1
    return index if index < length else -1


def _translate_class(body: str) -> str:
    negated = body[:1] in ("!", "^")
    if negated:
        body = body[1:]
    members: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\" and index + 1 < len(body):
            members.append(re.escape(body[index + 1]))
            index += 2
            continue
        members.append("\\" + char if char in "\\[]^" else char)
        index += 1
    if negated:
        return "[^/" + "".join(members) + "]"
    return "[" + "".join(members) + "]"


def _brace_end(pattern: str, start: int) -> int:
    depth = 0
    index = start
    while index < len(pattern):
        char = pattern[index]
        if char == "\\":
            index += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return -1


def _split_alternatives(body: str) -> list[str]:
    alternatives: list[str] = []
    depth = 0
    current: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\" and index + 1 < len(body):
            current.append(body[index : index + 2])
            index += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        elif char == "," and depth == 0:
            alternatives.append("".join(current))
            current = []
            index += 1
            continue
        current.append(char)
        index += 1
    alternatives.append("".join(current))
    return alternatives
