# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

"""Metadata extractor turns the manifest and content of a package archive
into the Package record ingested by the registry."""

import logging
import threading
from datetime import datetime
from typing import BinaryIO, Callable

from nupkg_metadata.adaptors.datetime import get_datetime_now
from nupkg_metadata.archive.abstract_archive_reader import ArchiveReader
from nupkg_metadata.config.extraction_configs import ExtractionConfig, default_config
from nupkg_metadata.errors import (
    ExtractionCancelledError,
    PackageFormatError,
    PackageIntegrityError,
)
from nupkg_metadata.manifest.abstract_manifest_reader import (
    ManifestDependencyGroup,
    ManifestReader,
)
from nupkg_metadata.metadata_extractor.field_parsers import (
    parse_authors,
    parse_repository_metadata,
    parse_tags,
    parse_uri,
)
from nupkg_metadata.metadata_extractor.package import (
    Package,
    PackageDependency,
    PackageType,
    TargetFramework,
)
from nupkg_metadata.versioning.nuget_version import NuGetVersion
from nupkg_metadata.versioning.semver_level import get_semver_level
from nupkg_metadata.versioning.version_range import VersionRange

logger = logging.getLogger("nupkg_metadata")

# Package type versions are legacy four part versions
_EMPTY_PACKAGE_TYPE_VERSION = "0.0.0.0"


def strip_leading_directory_separators(path: str) -> str:
    return path.lstrip("/\\")


def _check_cancelled(cancellation: threading.Event | None) -> None:
    if cancellation is not None and cancellation.is_set():
        raise ExtractionCancelledError("The package metadata extraction was cancelled")


def _parse_version(value: str | None, field_name: str) -> NuGetVersion:
    if not value:
        raise PackageFormatError(f"The package {field_name} is missing")
    try:
        return NuGetVersion.parse(value)
    except ValueError as e:
        raise PackageFormatError(
            f"The package {field_name} '{value}' is invalid: {e}"
        ) from e


def _parse_version_range(value: str | None, dependency_id: str) -> VersionRange | None:
    if not value or not value.strip():
        return None
    try:
        return VersionRange.parse(value)
    except ValueError as e:
        raise PackageFormatError(
            f"The version range '{value}' of dependency {dependency_id} is invalid: {e}"
        ) from e


class MetadataExtractor:
    def __init__(
        self,
        config: ExtractionConfig = default_config,
        clock: Callable[[], datetime] = get_datetime_now,
    ) -> None:
        self.config = config
        self.clock = clock

    def extract(
        self,
        manifest: ManifestReader,
        archive: ArchiveReader,
        cancellation: threading.Event | None = None,
    ) -> Package:
        """Build the Package record of an archive.

        Raises:
            PackageFormatError: If the version, the min client version, a URL
                or a dependency version range cannot be parsed
            PackageValidationError: If the repository type is too long
            PackageIntegrityError: If the declared readme or icon is not in
                the archive
            ExtractionCancelledError: If ``cancellation`` is set while the
                archive is being read
        """
        _check_cancelled(cancellation)

        version = _parse_version(manifest.get_version(), "version")
        package_id = manifest.get_id() or ""
        logger.debug(f"Extracting metadata of {package_id} {version}")

        has_readme = self._has_content(
            manifest.get_readme(), "readme", archive, cancellation
        )
        has_embedded_icon = self._has_content(
            manifest.get_icon(), "icon", archive, cancellation
        )

        min_client_version = None
        if manifest.get_min_client_version():
            min_client_version = _parse_version(
                manifest.get_min_client_version(), "min client version"
            ).to_normalized_string()

        repository_url, repository_type = parse_repository_metadata(
            manifest.get_repository_metadata(),
            max_type_length=self.config.max_repository_type_length,
            allowed_schemes=self.config.allowed_repository_schemes,
        )

        dependency_groups = manifest.get_dependency_groups()
        dependencies, dependency_ranges = self._get_dependencies(dependency_groups)

        package = Package(
            id=package_id,
            version=version,
            authors=tuple(parse_authors(manifest.get_authors())),
            description=manifest.get_description() or "",
            has_readme=has_readme,
            has_embedded_icon=has_embedded_icon,
            is_prerelease=version.is_prerelease,
            language=manifest.get_language() or "",
            release_notes=manifest.get_release_notes() or "",
            listed=True,
            min_client_version=min_client_version,
            published=self.clock(),
            require_license_acceptance=manifest.get_require_license_acceptance(),
            semver_level=get_semver_level(version, dependency_ranges),
            summary=manifest.get_summary() or "",
            title=manifest.get_title() or "",
            icon_url=parse_uri(manifest.get_icon_url(), "icon URL"),
            license_url=parse_uri(manifest.get_license_url(), "license URL"),
            project_url=parse_uri(manifest.get_project_url(), "project URL"),
            repository_url=repository_url,
            repository_type=repository_type,
            dependencies=tuple(dependencies),
            tags=tuple(parse_tags(manifest.get_tags())),
            package_types=tuple(self._get_package_types(manifest)),
            target_frameworks=tuple(self._get_target_frameworks(manifest)),
        )
        return package

    def open_readme(
        self,
        manifest: ManifestReader,
        archive: ArchiveReader,
        cancellation: threading.Event | None = None,
    ) -> BinaryIO:
        return self._open_content(
            manifest.get_readme(), "readme", archive, cancellation
        )

    def open_icon(
        self,
        manifest: ManifestReader,
        archive: ArchiveReader,
        cancellation: threading.Event | None = None,
    ) -> BinaryIO:
        return self._open_content(manifest.get_icon(), "icon", archive, cancellation)

    def _has_content(
        self,
        path: str | None,
        kind: str,
        archive: ArchiveReader,
        cancellation: threading.Event | None,
    ) -> bool:
        if not path:
            return False
        _check_cancelled(cancellation)
        if not archive.exists(strip_leading_directory_separators(path)):
            raise PackageIntegrityError(
                f"The package declares the {kind} '{path}' but does not contain it"
            )
        return True

    def _open_content(
        self,
        path: str | None,
        kind: str,
        archive: ArchiveReader,
        cancellation: threading.Event | None,
    ) -> BinaryIO:
        if not path:
            raise PackageIntegrityError(f"The package does not declare a {kind}")
        self._has_content(path, kind, archive, cancellation)

        stream = archive.open(strip_leading_directory_separators(path))
        if cancellation is not None and cancellation.is_set():
            stream.close()
            _check_cancelled(cancellation)
        return stream

    def _get_dependencies(
        self, dependency_groups: list[ManifestDependencyGroup]
    ) -> tuple[list[PackageDependency], list[list[VersionRange | None]]]:
        dependencies = []
        dependency_ranges = []

        for group in dependency_groups:
            target_framework = group.target_framework
            group_ranges: list[VersionRange | None] = []

            # A framework declared without dependencies is kept as an entry
            # with neither id nor range.
            if not group.packages:
                dependencies.append(
                    PackageDependency(
                        id=None, version_range=None, target_framework=target_framework
                    )
                )

            for dependency in group.packages:
                version_range = _parse_version_range(
                    dependency.version_range, dependency.id
                )
                group_ranges.append(version_range)
                dependencies.append(
                    PackageDependency(
                        id=dependency.id,
                        version_range=(
                            version_range.to_normalized_string()
                            if version_range is not None
                            and not version_range.is_unbounded
                            else None
                        ),
                        target_framework=target_framework,
                    )
                )

            dependency_ranges.append(group_ranges)

        return dependencies, dependency_ranges

    def _get_package_types(self, manifest: ManifestReader) -> list[PackageType]:
        package_types = [
            PackageType(
                name=package_type.name,
                version=package_type.version or _EMPTY_PACKAGE_TYPE_VERSION,
            )
            for package_type in manifest.get_package_types()
        ]

        # Default to the standard "dependency" package type if no types were found.
        if not package_types:
            package_types.append(
                PackageType(
                    name=self.config.default_package_type.name,
                    version=self.config.default_package_type.version,
                )
            )

        return package_types

    def _get_target_frameworks(self, manifest: ManifestReader) -> list[TargetFramework]:
        target_frameworks = [
            TargetFramework(moniker=framework)
            for framework in manifest.get_supported_frameworks()
        ]

        # Default to the "any" framework if no frameworks were found.
        if not target_frameworks:
            target_frameworks.append(
                TargetFramework(moniker=self.config.default_target_framework)
            )

        return target_frameworks
