# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from .framework_name_parser import (
    ANY_FRAMEWORK,
    get_framework_from_path,
    get_short_folder_name,
)

__all__ = ["ANY_FRAMEWORK", "get_framework_from_path", "get_short_folder_name"]
