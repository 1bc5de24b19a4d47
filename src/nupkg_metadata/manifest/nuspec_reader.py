# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

import logging
import xml.etree.ElementTree as ET
from typing import Iterable

from nupkg_metadata.errors import PackageFormatError
from nupkg_metadata.frameworks.framework_name_parser import (
    ANY_FRAMEWORK,
    UNSUPPORTED_FRAMEWORK,
    get_framework_from_path,
    get_short_folder_name,
)
from nupkg_metadata.manifest.abstract_manifest_reader import (
    ManifestDependency,
    ManifestDependencyGroup,
    ManifestPackageType,
    ManifestReader,
    ManifestRepositoryMetadata,
)

logger = logging.getLogger("nupkg_metadata")


def _local_name(element: ET.Element) -> str:
    # Nuspec files exist under several schema namespaces, match on the local name
    return element.tag.rsplit("}", 1)[-1]


def _children(element: ET.Element | None, name: str) -> list[ET.Element]:
    if element is None:
        return []
    return [child for child in element if _local_name(child) == name]


def _child(element: ET.Element | None, name: str) -> ET.Element | None:
    children = _children(element, name)
    return children[0] if children else None


class NuspecReader(ManifestReader):
    """Manifest reader over the XML content of a .nuspec file.

    The supported frameworks are derived from the archive entries passed in
    ``content_paths`` and from the framework assemblies and references
    declared in the nuspec.
    """

    def __init__(self, nuspec: bytes | str, content_paths: Iterable[str] = ()) -> None:
        try:
            root = ET.fromstring(nuspec)
        except ET.ParseError as e:
            raise PackageFormatError(f"The nuspec is not valid XML: {e}") from e

        metadata = _child(root, "metadata")
        if _local_name(root) != "package" or metadata is None:
            raise PackageFormatError(
                "The nuspec must have a <package> root with a <metadata> element"
            )
        self.metadata = metadata
        self.content_paths = list(content_paths)

    def _get_value(self, name: str) -> str | None:
        element = _child(self.metadata, name)
        if element is None:
            return None
        return element.text or ""

    def get_id(self) -> str | None:
        value = self._get_value("id")
        return value.strip() if value is not None else None

    def get_version(self) -> str | None:
        value = self._get_value("version")
        return value.strip() if value is not None else None

    def get_authors(self) -> str | None:
        return self._get_value("authors")

    def get_description(self) -> str | None:
        return self._get_value("description")

    def get_summary(self) -> str | None:
        return self._get_value("summary")

    def get_title(self) -> str | None:
        return self._get_value("title")

    def get_language(self) -> str | None:
        return self._get_value("language")

    def get_release_notes(self) -> str | None:
        return self._get_value("releaseNotes")

    def get_tags(self) -> str | None:
        return self._get_value("tags")

    def get_readme(self) -> str | None:
        return self._get_value("readme")

    def get_icon(self) -> str | None:
        return self._get_value("icon")

    def get_icon_url(self) -> str | None:
        return self._get_value("iconUrl")

    def get_license_url(self) -> str | None:
        return self._get_value("licenseUrl")

    def get_project_url(self) -> str | None:
        return self._get_value("projectUrl")

    def get_min_client_version(self) -> str | None:
        return self.metadata.get("minClientVersion")

    def get_require_license_acceptance(self) -> bool:
        value = self._get_value("requireLicenseAcceptance")
        return value is not None and value.strip().lower() == "true"

    def get_repository_metadata(self) -> ManifestRepositoryMetadata | None:
        repository = _child(self.metadata, "repository")
        if repository is None:
            return None
        return ManifestRepositoryMetadata(
            type=repository.get("type", ""),
            url=repository.get("url", ""),
            branch=repository.get("branch", ""),
            commit=repository.get("commit", ""),
        )

    def get_dependency_groups(self) -> list[ManifestDependencyGroup]:
        dependencies = _child(self.metadata, "dependencies")
        groups = _children(dependencies, "group")
        if groups:
            return [
                ManifestDependencyGroup(
                    target_framework=get_short_folder_name(
                        group.get("targetFramework", "")
                    ),
                    packages=self._read_dependencies(group),
                )
                for group in groups
            ]

        # Legacy nuspecs list dependencies without groups, those apply to any
        # framework. An empty legacy list declares nothing.
        packages = self._read_dependencies(dependencies)
        if not packages:
            return []
        return [ManifestDependencyGroup(ANY_FRAMEWORK, packages)]

    def _read_dependencies(
        self, element: ET.Element | None
    ) -> list[ManifestDependency]:
        packages = []
        for dependency in _children(element, "dependency"):
            dependency_id = dependency.get("id", "").strip()
            if not dependency_id:
                raise PackageFormatError("A dependency in the nuspec is missing its id")
            packages.append(
                ManifestDependency(
                    id=dependency_id,
                    version_range=dependency.get("version") or None,
                )
            )
        return packages

    def get_package_types(self) -> list[ManifestPackageType]:
        package_types = _child(self.metadata, "packageTypes")
        return [
            ManifestPackageType(
                name=package_type.get("name", ""),
                version=package_type.get("version"),
            )
            for package_type in _children(package_types, "packageType")
        ]

    def get_supported_frameworks(self) -> list[str]:
        """Return the short names of the frameworks the package targets.

        This is broader than NuGet's own GetSupportedFrameworks: ref/,
        buildTransitive/ and contentFiles/ entries count too. It is also
        narrower, since "any" and "unsupported" are left out so that a
        package with no framework specific content falls back to the
        configured default. Frameworks come in archive order followed by
        the framework assemblies and references, and are not sorted.
        """
        frameworks: list[str] = []

        def add(framework: str | None) -> None:
            if framework is None or framework in (ANY_FRAMEWORK, UNSUPPORTED_FRAMEWORK):
                return
            if framework not in frameworks:
                frameworks.append(framework)

        for path in self.content_paths:
            add(get_framework_from_path(path))

        assemblies = _child(self.metadata, "frameworkAssemblies")
        for assembly in _children(assemblies, "frameworkAssembly"):
            for name in assembly.get("targetFramework", "").split(","):
                if name.strip():
                    add(get_short_folder_name(name))

        references = _child(self.metadata, "frameworkReferences")
        for group in _children(references, "group"):
            add(get_short_folder_name(group.get("targetFramework", "")))

        logger.debug(f"Supported frameworks found in the package: {frameworks}")
        return frameworks
