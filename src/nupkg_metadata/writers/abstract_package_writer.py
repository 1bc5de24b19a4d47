# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from abc import ABC, abstractmethod

from nupkg_metadata.metadata_extractor.package import Package


class PackageWriter(ABC):
    @abstractmethod
    def write(self, package: Package) -> str:
        raise NotImplementedError
