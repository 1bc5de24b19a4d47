# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from .nuget_version import NuGetVersion, requires_semver2
from .semver_level import SemVerLevel, get_semver_level
from .version_range import VersionRange

__all__ = [
    "NuGetVersion",
    "SemVerLevel",
    "VersionRange",
    "get_semver_level",
    "requires_semver2",
]
