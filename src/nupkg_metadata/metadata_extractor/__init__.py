# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from nupkg_metadata.errors import (
    ExtractionCancelledError,
    PackageFormatError,
    PackageIntegrityError,
    PackageMetadataError,
    PackageValidationError,
)
from nupkg_metadata.metadata_extractor.metadata_extractor import MetadataExtractor
from nupkg_metadata.metadata_extractor.package import (
    Package,
    PackageDependency,
    PackageType,
    TargetFramework,
)

__all__ = [
    "ExtractionCancelledError",
    "MetadataExtractor",
    "Package",
    "PackageDependency",
    "PackageFormatError",
    "PackageIntegrityError",
    "PackageMetadataError",
    "PackageType",
    "PackageValidationError",
    "TargetFramework",
]
