"""Parse the user's deploy-pattern text into pattern pairs."""

from __future__ import annotations

from typing import List

from artipub.modules.artifactdeploy.domain import PatternPair

PAIR_SEPARATOR = "=>"


def clean_pattern_text(text: str | None) -> str:
    """Drop one pair of quotes wrapping the whole configured value."""
    value = (text or "").strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def parse_pattern_pairs(text: str | None) -> List[PatternPair]:
    """Return one pair per non-blank line; commas count as line breaks.

    ``out/*.zip => release/`` yields ``PatternPair("out/*.zip", "release/")``;
    a line without ``=>`` deploys to the repository root.
    """
    normalized = clean_pattern_text(text).replace("\r\n", "\n").replace(",", "\n")
    pairs: List[PatternPair] = []
    for raw_line in normalized.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        source, sep, target = line.partition(PAIR_SEPARATOR)
        source = source.strip()
        if not source:
            continue
        pairs.append(PatternPair(source_pattern=source, target_template=target.strip() if sep else ""))
    return pairs
