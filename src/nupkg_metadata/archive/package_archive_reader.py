# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

import logging
import zipfile
from types import TracebackType
from typing import BinaryIO
from urllib.parse import unquote

from nupkg_metadata.archive.abstract_archive_reader import ArchiveReader
from nupkg_metadata.errors import PackageFormatError
from nupkg_metadata.manifest.nuspec_reader import NuspecReader

logger = logging.getLogger("nupkg_metadata")


def _normalize_entry_path(path: str) -> str:
    return unquote(path.replace("\\", "/")).lstrip("/")


class PackageArchiveReader(ArchiveReader):
    """Reads a .nupkg archive.

    Entry names are matched after URI unescaping (packing tools escape
    spaces and other characters) and with both separators treated alike.

    The reader owns the zip handle, close it when done or use it as a context
    manager. It must not be shared between concurrent extractions.
    """

    def __init__(self, package_path: str | BinaryIO) -> None:
        self.zip_file = zipfile.ZipFile(package_path, "r")
        self.entries: dict[str, zipfile.ZipInfo] = {}
        for info in self.zip_file.infolist():
            if info.is_dir():
                continue
            self.entries.setdefault(_normalize_entry_path(info.filename), info)
        self._nuspec_reader: NuspecReader | None = None

    def __enter__(self) -> "PackageArchiveReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self.zip_file.close()

    def get_files(self) -> list[str]:
        return list(self.entries)

    def _find_nuspec_path(self) -> str:
        nuspec_paths = [
            path
            for path in self.entries
            if "/" not in path and path.lower().endswith(".nuspec")
        ]
        if not nuspec_paths:
            raise PackageFormatError("The package does not contain a .nuspec file")
        if len(nuspec_paths) > 1:
            raise PackageFormatError(
                f"The package contains multiple .nuspec files: {nuspec_paths}"
            )
        return nuspec_paths[0]

    @property
    def nuspec_reader(self) -> NuspecReader:
        if self._nuspec_reader is None:
            nuspec_path = self._find_nuspec_path()
            logger.debug(f"Reading manifest {nuspec_path}")
            with self.open(nuspec_path) as stream:
                content = stream.read()
            self._nuspec_reader = NuspecReader(content, self.get_files())
        return self._nuspec_reader

    def exists(self, path: str) -> bool:
        return _normalize_entry_path(path) in self.entries

    def open(self, path: str) -> BinaryIO:
        info = self.entries.get(_normalize_entry_path(path))
        if info is None:
            raise FileNotFoundError(f"The package does not contain '{path}'")
        return self.zip_file.open(info, "r")  # type: ignore[return-value]
