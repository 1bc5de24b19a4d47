# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class ManifestDependency:
    id: str
    version_range: str | None  # raw range text, None when not constrained


@dataclass
class ManifestDependencyGroup:
    target_framework: str  # short folder name
    packages: list[ManifestDependency] = field(default_factory=list)


@dataclass
class ManifestPackageType:
    name: str
    version: str | None


@dataclass
class ManifestRepositoryMetadata:
    type: str = ""
    url: str = ""
    branch: str = ""
    commit: str = ""


class ManifestReader(ABC):
    """Read access to the fields of a package manifest.

    String getters return None when the field is not present in the
    manifest. Normalization and validation of these values is left to the
    metadata extractor.
    """

    @abstractmethod
    def get_id(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_version(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_authors(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_description(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_summary(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_title(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_language(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_release_notes(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_tags(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_readme(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_icon(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_icon_url(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_license_url(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_project_url(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_min_client_version(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_require_license_acceptance(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_repository_metadata(self) -> ManifestRepositoryMetadata | None:
        raise NotImplementedError

    @abstractmethod
    def get_dependency_groups(self) -> list[ManifestDependencyGroup]:
        raise NotImplementedError

    @abstractmethod
    def get_package_types(self) -> list[ManifestPackageType]:
        raise NotImplementedError

    @abstractmethod
    def get_supported_frameworks(self) -> list[str]:
        """Short folder names of the frameworks the package content targets."""
        raise NotImplementedError
