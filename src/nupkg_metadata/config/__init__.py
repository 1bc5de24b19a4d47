# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from .extraction_configs import ExtractionConfig, PackageTypeConfig, default_config
from .json_config_parser import JsonConfigParser

__all__ = [
    "ExtractionConfig",
    "PackageTypeConfig",
    "default_config",
    "JsonConfigParser",
]
