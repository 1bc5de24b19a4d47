# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from abc import ABC, abstractmethod
from typing import BinaryIO


class ArchiveReader(ABC):
    @abstractmethod
    def exists(self, path: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def open(self, path: str) -> BinaryIO:
        """Open an archive entry for reading.

        Raises:
            FileNotFoundError: If the archive has no entry at this path
        """
        raise NotImplementedError
