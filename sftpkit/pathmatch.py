"""Shell-style matching of slash-separated paths and globbing over a file system."""

from __future__ import annotations

from typing import Any, Protocol

from .permissions import FileMode

_META_CHARS = "\\*?["


class BadPatternError(ValueError):
    """A globbing pattern is malformed."""

    def __init__(self, message: str = "syntax error in pattern") -> None:
        super().__init__(message)


class GlobFileSystem(Protocol):
    """What glob needs from a file system.

    ``lstat`` and ``stat`` return objects with ``name`` and ``mode``;
    ``read_dir`` returns a list of such objects. Failures raise OSError.
    """

    def lstat(self, path: str) -> Any: ...

    def stat(self, path: str) -> Any: ...

    def read_dir(self, path: str) -> list[Any]: ...


def _scan_chunk(pattern: str) -> tuple[bool, str, str]:
    """Split off the leading stars and the chunk up to the next unbracketed star."""
    stripped = pattern.lstrip("*")
    star = len(stripped) != len(pattern)
    pattern = stripped
    in_range = False
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            if i + 1 < len(pattern):
                i += 1
        elif char == "[":
            in_range = True
        elif char == "]":
            in_range = False
        elif char == "*" and not in_range:
            break
        i += 1
    return star, pattern[:i], pattern[i:]


def _get_esc(chunk: str) -> tuple[str, str]:
    """Read one possibly escaped character of a character class."""
    if not chunk or chunk[0] in "-]":
        raise BadPatternError()
    if chunk[0] == "\\":
        chunk = chunk[1:]
        if not chunk:
            raise BadPatternError()
    char, rest = chunk[0], chunk[1:]
    if not rest:
        raise BadPatternError()
    return char, rest


def _match_chunk(chunk: str, text: str) -> str | None:
    """Match chunk at the start of text; the unmatched rest, or None on failure.

    After a failure the chunk is still scanned so that malformed patterns
    are always reported.
    """
    failed = False
    while chunk:
        if not failed and not text:
            failed = True
        head = chunk[0]
        if head == "[":
            char = ""
            if not failed:
                char, text = text[0], text[1:]
            chunk = chunk[1:]
            negated = chunk.startswith("^")
            if negated:
                chunk = chunk[1:]
            matched = False
            ranges = 0
            while True:
                if chunk.startswith("]") and ranges > 0:
                    chunk = chunk[1:]
                    break
                low, chunk = _get_esc(chunk)
                high = low
                if chunk[0] == "-":
                    high, chunk = _get_esc(chunk[1:])
                if not failed and low <= char <= high:
                    matched = True
                ranges += 1
            if matched == negated:
                failed = True
        elif head == "?":
            if not failed:
                if text[0] == "/":
                    failed = True
                text = text[1:]
            chunk = chunk[1:]
        else:
            if head == "\\":
                chunk = chunk[1:]
                if not chunk:
                    raise BadPatternError()
            if not failed:
                if chunk[0] != text[0]:
                    failed = True
                text = text[1:]
            chunk = chunk[1:]
    return None if failed else text


def match(pattern: str, name: str) -> bool:
    """Whether name matches the shell pattern.

    ``*`` matches any run of non-slash characters, ``?`` one non-slash
    character, ``[...]`` a character class (``^`` negates) and ``\\``
    escapes. Raises BadPatternError for a malformed pattern.
    """
    while pattern:
        star, chunk, pattern = _scan_chunk(pattern)
        if star and not chunk:
            return "/" not in name
        rest = _match_chunk(chunk, name)
        if rest is not None and (not rest or pattern):
            name = rest
            continue
        if star:
            found = False
            for i, char in enumerate(name):
                if char == "/":
                    break
                rest = _match_chunk(chunk, name[i + 1:])
                if rest is not None:
                    if not pattern and rest:
                        continue
                    name = rest
                    found = True
                    break
            if found:
                continue
        while pattern:
            _, chunk, pattern = _scan_chunk(pattern)
            _match_chunk(chunk, "")
        return False
    return not name


def split(path: str) -> tuple[str, str]:
    """Split path after its final slash into directory and file name."""
    index = path.rfind("/")
    return path[: index + 1], path[index + 1:]


def _clean(path: str) -> str:
    """The shortest equivalent slash-separated path."""
    if not path:
        return "."
    rooted = path.startswith("/")
    parts: list[str] = []
    for part in path.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
            continue
        parts.append(part)
    cleaned = "/".join(parts)
    if rooted:
        cleaned = "/" + cleaned
    return cleaned or "."


def join(*args: str) -> str:
    """Join non-empty elements with slashes and clean the result.

    Returns an empty string if every element is empty.
    """
    elements = [element for element in args if element]
    if not elements:
        return ""
    return _clean("/".join(elements))


def has_meta(path: str) -> bool:
    """Whether path contains any character that match treats specially."""
    return any(char in _META_CHARS for char in path)


def _clean_glob_path(path: str) -> str:
    if path == "":
        return "."
    if path == "/":
        return path
    return path[:-1]


def _glob_dir(fs: GlobFileSystem, directory: str, pattern: str, matches: list[str]) -> list[str]:
    """Append the entries of directory that match pattern, in listing order."""
    try:
        info = fs.stat(directory)
    except OSError:
        return matches
    if not FileMode(info.mode).is_dir():
        return matches
    try:
        entries = fs.read_dir(directory)
    except OSError:
        return matches
    for entry in entries:
        if match(pattern, entry.name):
            matches.append(join(directory, entry.name))
    return matches


def glob(fs: GlobFileSystem, pattern: str) -> list[str]:
    """All names on fs matching pattern, which may have meta characters at any level.

    File system errors are ignored; the only error raised is
    BadPatternError for a malformed pattern.
    """
    if not has_meta(pattern):
        try:
            info = fs.lstat(pattern)
        except OSError:
            return []
        directory, _ = split(pattern)
        return [join(_clean_glob_path(directory), info.name)]

    directory, file_pattern = split(pattern)
    directory = _clean_glob_path(directory)

    if not has_meta(directory):
        return _glob_dir(fs, directory, file_pattern, [])

    if directory == pattern:
        raise BadPatternError()

    matches: list[str] = []
    for parent in glob(fs, directory):
        _glob_dir(fs, parent, file_pattern, matches)
    return matches