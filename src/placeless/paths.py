"""Host-independent path normalization.

Paths are split on both ``/`` and ``\\`` so the input convention does not
matter, and kept internally as a ``PathSpec`` of segments. Turning a
``PathSpec`` back into a string for a particular host is a separate,
explicit ``render`` step. A leading ``~`` is replaced by the home value
carried in the ``PathConvention``; the environment is never consulted.

Usage:
    from placeless.context import PathConvention
    from placeless.paths import normalize, render

    spec = normalize("~\\\\projects//report.csv", PathConvention(home="/home/ada"))
    render(spec, "/")    # "/home/ada/projects/report.csv"
    render(spec, "\\\\")   # "\\\\home\\\\ada\\\\projects\\\\report.csv"
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from placeless.context import PATH_SEPARATORS, PathConvention
from placeless.errors import InvalidPath

CANONICAL_SEPARATOR = "/"
HOME_TOKEN = "~"

_SPLIT_RE = re.compile(r"[/\\]")
_DRIVE_RE = re.compile(r"^(?:[/\\]+([A-Za-z]):(?=[/\\]|$)|([A-Za-z]):)")


@dataclass(frozen=True)
class PathSpec:
    """Normalized, separator-agnostic path.

    Attributes:
        segments: Path components, never empty strings
        is_absolute: Whether the path is anchored at a root
        drive: Drive prefix such as "C:" (uppercased), if any
        home: Normalized home value substituted for "~", if any
    """

    segments: tuple[str, ...] = ()
    is_absolute: bool = False
    drive: str | None = None
    home: str | None = None

    @property
    def is_root(self) -> bool:
        return self.is_absolute and not self.segments

    @property
    def name(self) -> str:
        return self.segments[-1] if self.segments else ""

    @property
    def parent(self) -> "PathSpec":
        if not self.segments:
            return self
        return PathSpec(self.segments[:-1], self.is_absolute, self.drive, self.home)

    def __str__(self) -> str:
        return render(self, CANONICAL_SEPARATOR)


def _split(raw: str) -> list[str]:
    return [part for part in _SPLIT_RE.split(raw) if part]


def _collapse(segments: list[str], is_absolute: bool) -> list[str]:
    result: list[str] = []
    for segment in segments:
        if segment == "..":
            if result and result[-1] != "..":
                result.pop()
            elif not is_absolute:
                result.append(segment)
            # ".." at the root of an absolute path stays at the root
        else:
            result.append(segment)
    return result


def _check_text(raw: object) -> str:
    if not isinstance(raw, str):
        raise InvalidPath(repr(raw), f"expected str, got {type(raw).__name__}")
    if "\x00" in raw:
        raise InvalidPath(raw, "contains a null byte")
    return raw


def normalize(
    raw: str,
    convention: PathConvention,
    collapse_parent: bool = False,
) -> PathSpec:
    """Normalize a raw path string.

    Args:
        raw: Path using "/" and/or "\\" separators
        convention: Supplies the home value for a leading "~"
        collapse_parent: Lexically resolve ".." segments

    Returns:
        Normalized PathSpec

    Raises:
        InvalidPath: If the path is empty, contains a null byte, or uses "~"
            without a home value
    """
    raw = _check_text(raw)
    if not raw:
        raise InvalidPath(raw, "empty path")

    drive = None
    is_absolute = raw[0] in PATH_SEPARATORS
    home = None

    match = _DRIVE_RE.match(raw)
    if match:
        drive = (match.group(1) or match.group(2)).upper() + ":"
        rest = raw[match.end():]
        # "C:\foo" is absolute; "C:foo" and a bare "C:" are drive-relative
        is_absolute = is_absolute or rest[:1] in PATH_SEPARATORS
        parts = _split(rest)
    else:
        parts = _split(raw)

    if parts and parts[0] == HOME_TOKEN and drive is None and not is_absolute:
        if convention.home is None:
            raise InvalidPath(raw, "'~' used but no home directory was supplied")
        home_spec = normalize(convention.home, PathConvention(convention.separator))
        parts = list(home_spec.segments) + parts[1:]
        is_absolute = home_spec.is_absolute
        drive = home_spec.drive
        home = render(home_spec, CANONICAL_SEPARATOR)

    segments = [part for part in parts if part != "."]
    if collapse_parent:
        segments = _collapse(segments, is_absolute)

    return PathSpec(tuple(segments), is_absolute, drive, home)


def render(spec: PathSpec, target_separator: str) -> str:
    """Render a PathSpec for a target host.

    Args:
        spec: Normalized path
        target_separator: "/" or "\\"

    Returns:
        Path string without doubled or trailing separators (the bare root
        renders as the separator alone, an empty relative path as ".")

    Raises:
        InvalidPath: If the target separator is not "/" or "\\"
    """
    if target_separator not in PATH_SEPARATORS:
        raise InvalidPath(str(target_separator), "target separator must be '/' or '\\'")

    body = target_separator.join(spec.segments)
    prefix = spec.drive or ""
    if spec.is_absolute:
        prefix += target_separator
    if not body and not prefix:
        return "."
    return prefix + body


def join(spec: PathSpec, *parts: str) -> PathSpec:
    """Append relative parts to a PathSpec.

    Raises:
        InvalidPath: If a part is absolute, carries a drive or a "~"
    """
    segments = list(spec.segments)
    for part in parts:
        part = _check_text(part)
        if part and (part[0] in PATH_SEPARATORS):
            raise InvalidPath(part, "cannot join an absolute path")
        pieces = _split(part)
        if _DRIVE_RE.match(part):
            raise InvalidPath(part, "cannot join a path with a drive")
        if pieces and pieces[0] == HOME_TOKEN:
            raise InvalidPath(part, "'~' is only expanded at the start of a path")
        segments.extend(piece for piece in pieces if piece != ".")
    return PathSpec(tuple(segments), spec.is_absolute, spec.drive, spec.home)


def normalize_and_render(raw: str, convention: PathConvention) -> str:
    """Normalize ``raw`` and render it with the convention's separator."""
    return render(normalize(raw, convention), convention.separator)


class PathNormalizer:
    """Path normalization bound to one PathConvention.

    Example:
        normalizer = PathNormalizer(PathConvention("\\\\", home="C:\\\\Users\\\\ada"))
        normalizer.normalize_str("~/docs")  # "C:\\\\Users\\\\ada\\\\docs"
    """

    def __init__(self, convention: PathConvention) -> None:
        self.convention = convention

    def normalize(self, raw: str, collapse_parent: bool = False) -> PathSpec:
        return normalize(raw, self.convention, collapse_parent=collapse_parent)

    def render(self, spec: PathSpec) -> str:
        return render(spec, self.convention.separator)

    def normalize_str(self, raw: str, collapse_parent: bool = False) -> str:
        return self.render(self.normalize(raw, collapse_parent=collapse_parent))
