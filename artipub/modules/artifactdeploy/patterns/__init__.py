from .matcher import (
    AntPattern,
    FileMatcher,
    TargetPathToFiles,
    calculate_artifact_path,
    normalize_artifact_path,
    resolve_target,
)
from .resolver import clean_pattern_text, parse_pattern_pairs

__all__ = [
    "AntPattern",
    "FileMatcher",
    "TargetPathToFiles",
    "calculate_artifact_path",
    "clean_pattern_text",
    "normalize_artifact_path",
    "parse_pattern_pairs",
    "resolve_target",
]
