# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.


class PackageMetadataError(Exception):
    """Base class for every reason a package archive is rejected."""


class PackageFormatError(PackageMetadataError, ValueError):
    """A structured field (version, URL, version range) could not be parsed."""


class PackageValidationError(PackageMetadataError, ValueError):
    """A field breaks a shape or length constraint."""


class PackageIntegrityError(PackageMetadataError):
    """The manifest points at content that is not in the archive."""


class ExtractionCancelledError(PackageMetadataError):
    pass
