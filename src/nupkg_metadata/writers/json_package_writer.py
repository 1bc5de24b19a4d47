# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

import io
import json

from nupkg_metadata.adaptors.datetime import as_utc
from nupkg_metadata.metadata_extractor.package import Package
from nupkg_metadata.writers.abstract_package_writer import PackageWriter


class JSONPackageWriter(PackageWriter):
    """
    Writes the extracted package record as a JSON object, versions and
    timestamps rendered as strings.
    """

    def write(self, package: Package) -> str:
        json_package = {
            "id": package.id,
            "version": package.version.to_normalized_string(),
            "full_version": package.version.to_full_string(),
            "authors": list(package.authors),
            "description": package.description,
            "has_readme": package.has_readme,
            "has_embedded_icon": package.has_embedded_icon,
            "is_prerelease": package.is_prerelease,
            "language": package.language,
            "release_notes": package.release_notes,
            "listed": package.listed,
            "min_client_version": package.min_client_version,
            "published": as_utc(package.published).isoformat(),
            "require_license_acceptance": package.require_license_acceptance,
            "semver_level": package.semver_level.value,
            "summary": package.summary,
            "title": package.title,
            "icon_url": package.icon_url,
            "license_url": package.license_url,
            "project_url": package.project_url,
            "repository_url": package.repository_url,
            "repository_type": package.repository_type,
            "dependencies": [
                {
                    "id": dependency.id,
                    "version_range": dependency.version_range,
                    "target_framework": dependency.target_framework,
                }
                for dependency in package.dependencies
            ],
            "tags": list(package.tags),
            "package_types": [
                {"name": package_type.name, "version": package_type.version}
                for package_type in package.package_types
            ],
            "target_frameworks": [
                framework.moniker for framework in package.target_frameworks
            ],
        }

        output = io.StringIO()
        json.dump(json_package, output, indent=2)
        json_string = output.getvalue()
        output.close()

        return json_string
