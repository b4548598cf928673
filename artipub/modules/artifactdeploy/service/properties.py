"""Build-provenance properties attached to every deployed artifact."""

from __future__ import annotations

import logging
import re
from typing import Dict, Mapping, Optional

from artipub.modules.artifactdeploy.domain import BuildContext
from artipub.modules.artifactdeploy.domain.constants import (
    BUILD_NAME,
    BUILD_NUMBER,
    BUILD_PARENT_NAME,
    BUILD_PARENT_NUMBER,
    BUILD_TIMESTAMP,
    VCS_REVISION,
    VCS_REVISION_ENV_KEYS,
)

log = logging.getLogger(__name__)

MACRO = re.compile(r"\$(\{[A-Za-z0-9_.]+\}|[A-Za-z0-9_]+)")
MATRIX_DELIMITERS = re.compile(r"[; ]+")
FOLDER_SEPARATOR = " :: "


def replace_macro(value: str | None, env: Mapping[str, str]) -> str:
    """Expand ``$VAR`` and ``${VAR}``; unknown variables are left untouched."""
    if not value:
        return value or ""

    def _replace(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key.startswith("{"):
            key = key[1:-1]
        return env.get(key, match.group(0))

    return MACRO.sub(_replace, value)


def sanitize_build_name(name: str) -> str:
    """Render a folder job's full name (``team/app``) as ``team :: app``."""
    return (name or "").strip("/").replace("/", FOLDER_SEPARATOR)


def get_vcs_revision(env: Mapping[str, str]) -> Optional[str]:
    for key in VCS_REVISION_ENV_KEYS:
        value = (env.get(key) or "").strip()
        if value:
            return value
    return None


def parse_matrix_params(text: str | None, env: Mapping[str, str]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for token in MATRIX_DELIMITERS.split(text or ""):
        parts = [part for part in token.split("=") if part]
        if len(parts) != 2:
            if token:
                log.debug("Ignoring malformed matrix param %r", token)
            continue
        params[parts[0]] = replace_macro(parts[1], env)
    return params


class PropertySetBuilder:
    """Assemble build.* / vcs.revision / matrix properties for one build."""

    def __init__(self, context: BuildContext, matrix_params: str | None = None) -> None:
        self.context = context
        self.matrix_params = matrix_params or ""

    def build(self) -> Dict[str, str]:
        context = self.context
        properties: Dict[str, str] = {
            BUILD_NAME: sanitize_build_name(context.job_name),
            BUILD_NUMBER: str(context.build_number),
            BUILD_TIMESTAMP: str(context.timestamp_millis),
        }
        if context.upstream is not None:
            properties[BUILD_PARENT_NAME] = sanitize_build_name(context.upstream.project)
            properties[BUILD_PARENT_NUMBER] = str(context.upstream.build_number)
        revision = get_vcs_revision(context.env)
        if revision:
            properties[VCS_REVISION] = revision
        properties.update(parse_matrix_params(self.matrix_params, context.env))
        return properties
