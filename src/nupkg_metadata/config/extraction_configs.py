# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from dataclasses import dataclass


@dataclass
class PackageTypeConfig:
    name: str
    version: str


@dataclass
class ExtractionConfig:
    max_repository_type_length: int
    allowed_repository_schemes: list[str]
    default_package_type: PackageTypeConfig
    default_target_framework: str


default_config = ExtractionConfig(
    max_repository_type_length=100,
    allowed_repository_schemes=[
        "http",
        "https",
    ],
    # Packages that do not declare a type are plain dependencies
    default_package_type=PackageTypeConfig(name="Dependency", version="0.0.0.0"),
    default_target_framework="any",
)
