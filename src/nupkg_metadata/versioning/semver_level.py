# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from enum import Enum
from typing import Iterable

from nupkg_metadata.versioning.nuget_version import NuGetVersion, requires_semver2
from nupkg_metadata.versioning.version_range import VersionRange


class SemVerLevel(Enum):
    UNKNOWN = "Unknown"
    SEMVER2 = "SemVer2"


def get_semver_level(
    version: NuGetVersion,
    dependency_groups: Iterable[Iterable[VersionRange | None]],
) -> SemVerLevel:
    """Classify a package as SemVer 2 if its own version or any bound of any
    of its dependency ranges needs SemVer 2 parsing.

    Dependencies without a range (including the empty group sentinels) do
    not count.
    """
    if requires_semver2(version):
        return SemVerLevel.SEMVER2

    for group in dependency_groups:
        for version_range in group:
            if version_range is None:
                continue
            if (
                version_range.min_version is not None
                and requires_semver2(version_range.min_version)
            ) or (
                version_range.max_version is not None
                and requires_semver2(version_range.max_version)
            ):
                return SemVerLevel.SEMVER2

    return SemVerLevel.UNKNOWN
