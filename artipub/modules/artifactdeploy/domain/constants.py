"""Constants shared across artifactdeploy domain models."""

from __future__ import annotations

from enum import Enum

MD5 = "MD5"
SHA1 = "SHA1"

BUILD_NAME = "build.name"
BUILD_NUMBER = "build.number"
BUILD_TIMESTAMP = "build.timestamp"
BUILD_PARENT_NAME = "build.parentName"
BUILD_PARENT_NUMBER = "build.parentNumber"
VCS_REVISION = "vcs.revision"

# Checked in order; the first non-blank value wins.
VCS_REVISION_ENV_KEYS = ("SVN_REVISION", "GIT_COMMIT", "P4_CHANGELIST")

CHECKSUM_MD5_HEADER = "X-Checksum-Md5"
CHECKSUM_SHA1_HEADER = "X-Checksum-Sha1"
PROPERTY_HEADER_PREFIX = "X-Artifactory-Property-"
PROPERTIES_HEADER = "X-Artifactory-Properties"


class PropertyEncoding(str, Enum):
    """How the property set travels with an upload request."""

    HEADERS = "headers"
    SINGLE = "single"
    MATRIX = "matrix"
