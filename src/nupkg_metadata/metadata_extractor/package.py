# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from dataclasses import dataclass
from datetime import datetime

from nupkg_metadata.versioning.nuget_version import NuGetVersion
from nupkg_metadata.versioning.semver_level import SemVerLevel


@dataclass(frozen=True)
class PackageDependency:
    """A dependency of a package on a given target framework.

    An entry with neither id nor version range means the framework was
    declared with no dependencies at all.
    """

    id: str | None
    version_range: str | None
    target_framework: str


@dataclass(frozen=True)
class PackageType:
    name: str
    version: str


@dataclass(frozen=True)
class TargetFramework:
    moniker: str


@dataclass(frozen=True)
class Package:
    """Registry ready metadata of a package archive."""

    id: str
    version: NuGetVersion
    authors: tuple[str, ...]
    description: str
    has_readme: bool
    has_embedded_icon: bool
    is_prerelease: bool
    language: str
    release_notes: str
    listed: bool
    min_client_version: str | None
    published: datetime
    require_license_acceptance: bool
    semver_level: SemVerLevel
    summary: str
    title: str
    icon_url: str | None
    license_url: str | None
    project_url: str | None
    repository_url: str | None
    repository_type: str | None
    dependencies: tuple[PackageDependency, ...]
    tags: tuple[str, ...]
    package_types: tuple[PackageType, ...]
    target_frameworks: tuple[TargetFramework, ...]
