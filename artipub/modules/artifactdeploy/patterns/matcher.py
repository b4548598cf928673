"""Ant-style workspace matching with ``{n}`` target substitution."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from artipub.modules.artifactdeploy.domain import PatternPair

log = logging.getLogger(__name__)

GLOBSTAR = "**"
PLACEHOLDER = re.compile(r"\{(\d+)\}")
REPEATED_SLASHES = re.compile(r"/{2,}")
# Ant's default excludes for version-control metadata.
DEFAULT_EXCLUDES = frozenset({".git", ".svn", ".hg", ".bzr", "CVS", "SCCS"})


def has_wildcard(segment: str) -> bool:
    return "*" in segment or "?" in segment


def normalize_artifact_path(path: str) -> str:
    """Collapse repeated slashes and drop the leading one.

    The repository key supplies the leading separator, so ``/a//b.jar`` and
    ``a/b.jar`` normalize to the same path.
    """
    return REPEATED_SLASHES.sub("/", path or "").lstrip("/")


def calculate_artifact_path(target_path: str, artifact_file: Path) -> str:
    """Join a matched target with the file name.

    Targets ending in ``/`` (or empty) are directories; anything else already
    names the file.
    """
    if not target_path or target_path.endswith("/"):
        joined = f"{target_path}{artifact_file.name}"
    else:
        joined = target_path
    return REPEATED_SLASHES.sub("/", joined)


class AntPattern:
    """A compiled ``*``/``**``/``?`` pattern whose wildcards are capture groups."""

    def __init__(self, pattern: str) -> None:
        normalized = pattern.strip().replace("\\", "/")
        if normalized.endswith("/"):
            normalized += GLOBSTAR
        self.pattern = normalized
        self.absolute = normalized.startswith("/")
        segments = [seg for seg in normalized.split("/") if seg and seg != "."]
        base: List[str] = []
        for seg in segments:
            if has_wildcard(seg):
                break
            base.append(seg)
        self.base_segments = base
        self.rest = segments[len(base):]
        self.regex = self._compile(self.rest) if self.rest else None

    @property
    def is_literal(self) -> bool:
        return not self.rest

    @staticmethod
    def _translate_segment(segment: str) -> str:
        segment = re.sub(r"\*+", "*", segment)
        parts = []
        for ch in segment:
            if ch == "*":
                parts.append("([^/]*)")
            elif ch == "?":
                parts.append("([^/])")
            else:
                parts.append(re.escape(ch))
        return "".join(parts)

    def _compile(self, segments: Sequence[str]) -> "re.Pattern[str]":
        regex = ""
        for index, seg in enumerate(segments):
            last = index == len(segments) - 1
            if seg == GLOBSTAR:
                regex += "(.*)" if last else "(?:(.*)/)?"
                continue
            regex += self._translate_segment(seg)
            if not last:
                regex += "/"
        return re.compile(regex)

    def base_dir(self, workspace: Path) -> Path:
        root = Path("/") if self.absolute else workspace
        return root.joinpath(*self.base_segments)

    def iter_matches(self, workspace: Path) -> Iterator[Tuple[Path, "re.Match[str]", str]]:
        """Yield ``(file, match, relative_path)`` in sorted path order."""
        base = self.base_dir(workspace)
        if self.regex is None:
            return
        if not base.is_dir():
            return
        if GLOBSTAR in self.rest:
            candidates: Iterable[Path] = base.rglob("*")
        else:
            candidates = base.glob("/".join(["*"] * len(self.rest)))
        for candidate in sorted(candidates):
            if not candidate.is_file():
                continue
            relative = candidate.relative_to(base).as_posix()
            if DEFAULT_EXCLUDES.intersection(relative.split("/")):
                continue
            match = self.regex.fullmatch(relative)
            if match:
                yield candidate, match, relative


class TargetPathToFiles:
    """Insertion-ordered multimap of resolved target path to files."""

    def __init__(self) -> None:
        self._data: Dict[str, List[Path]] = {}

    def put(self, target: str, path: Path) -> None:
        files = self._data.setdefault(target, [])
        if path not in files:
            files.append(path)

    def put_all(self, other: "TargetPathToFiles") -> None:
        for target, path in other.entries():
            self.put(target, path)

    def entries(self) -> Iterator[Tuple[str, Path]]:
        for target, files in self._data.items():
            for path in files:
                yield target, path

    def __len__(self) -> int:
        return sum(len(files) for files in self._data.values())

    def __bool__(self) -> bool:
        return bool(self._data)


def substitute_placeholders(template: str, groups: Sequence[Optional[str]]) -> str:
    """Replace ``{n}`` with capture ``n`` (1-based); missing captures become ''."""

    def _replace(match: "re.Match[str]") -> str:
        index = int(match.group(1)) - 1
        if 0 <= index < len(groups):
            return groups[index] or ""
        return ""

    return PLACEHOLDER.sub(_replace, template)


def _captures_file_name(match: Optional["re.Match[str]"], index: int, relative: str, artifact_file: Path) -> bool:
    if match is None or not 1 <= index <= match.re.groups or match.group(index) is None:
        return False
    return match.start(index) >= len(relative) - len(artifact_file.name)


def resolve_target(
    template: str,
    artifact_file: Path,
    match: Optional["re.Match[str]"] = None,
    relative: str = "",
) -> str:
    """Resolve a target template for one matched file.

    The result names the file only when the last placeholder of the template's
    last segment refers to a capture inside the file name; the literal tail
    the pattern matched after its last capture (for ``*.jar`` the ``.jar``) is
    then appended unless already present. Every other template is a
    directory and is returned with a trailing ``/``.
    """
    groups = match.groups() if match else ()
    resolved = substitute_placeholders(template, groups)
    last_segment = "" if template.endswith("/") else template.rsplit("/", 1)[-1]
    indices = [int(index) for index in PLACEHOLDER.findall(last_segment)]
    if not indices or not _captures_file_name(match, indices[-1], relative, artifact_file):
        if resolved and not resolved.endswith("/"):
            resolved += "/"
        return resolved
    name_start = len(relative) - len(artifact_file.name)
    last_end = max(
        (match.end(i) for i in range(1, match.re.groups + 1) if match.group(i) is not None),
        default=-1,
    )
    tail = relative[last_end:] if last_end >= name_start else ""
    if tail and not resolved.endswith(tail):
        resolved += tail
    return resolved


class FileMatcher:
    """Expand pattern pairs against a workspace into a TargetPathToFiles map."""

    def __init__(self, workspace: Path, listener: Optional[logging.Logger] = None) -> None:
        self.workspace = Path(workspace)
        self.listener = listener or log

    def match_pair(self, pair: PatternPair) -> TargetPathToFiles:
        result = TargetPathToFiles()
        pattern = AntPattern(pair.source_pattern)
        if pattern.is_literal:
            candidate = pattern.base_dir(self.workspace)
            if candidate.is_file():
                result.put(resolve_target(pair.target_template, candidate), candidate)
            return result
        for path, match, relative in pattern.iter_matches(self.workspace):
            result.put(resolve_target(pair.target_template, path, match, relative), path)
        return result

    def build_target_path_to_files(self, pairs: Iterable[PatternPair]) -> TargetPathToFiles:
        result = TargetPathToFiles()
        for pair in pairs:
            publishing_data = self.match_pair(pair)
            if publishing_data:
                self.listener.info(
                    "For pattern: %s %d artifacts were found",
                    pair.source_pattern,
                    len(publishing_data),
                )
                result.put_all(publishing_data)
            else:
                self.listener.info("For pattern: %s no artifacts were found", pair.source_pattern)
        return result
