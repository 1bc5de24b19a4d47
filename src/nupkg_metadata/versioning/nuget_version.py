# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

import re
from dataclasses import dataclass, field
from functools import total_ordering

_IDENTIFIER_PATTERN = re.compile(r"^[0-9A-Za-z-]+$")
_NUMERIC_PATTERN = re.compile(r"^[0-9]+$")


def _is_numeric_label(label: str) -> bool:
    return _NUMERIC_PATTERN.match(label) is not None


def _parse_identifiers(text: str, kind: str, original: str) -> tuple[str, ...]:
    labels = tuple(text.split("."))
    for label in labels:
        if not _IDENTIFIER_PATTERN.match(label):
            raise ValueError(f"Invalid {kind} '{text}' in version '{original}'")
    return labels


def _compare_labels(left: tuple[str, ...], right: tuple[str, ...]) -> int:
    # A version without release labels has higher precedence than one with.
    if not left and not right:
        return 0
    if not left:
        return 1
    if not right:
        return -1
    for left_label, right_label in zip(left, right):
        left_numeric = _is_numeric_label(left_label)
        right_numeric = _is_numeric_label(right_label)
        if left_numeric and right_numeric:
            if int(left_label) != int(right_label):
                return -1 if int(left_label) < int(right_label) else 1
        elif left_numeric:
            return -1
        elif right_numeric:
            return 1
        elif left_label.lower() != right_label.lower():
            return -1 if left_label.lower() < right_label.lower() else 1
    if len(left) != len(right):
        return -1 if len(left) < len(right) else 1
    return 0


@total_ordering
@dataclass(frozen=True, eq=False)
class NuGetVersion:
    """A package version as written in a nuspec.

    Accepts one to four numeric parts (the fourth one being the legacy
    revision), optional dot separated pre-release labels after a ``-`` and
    optional build metadata after a ``+``.
    """

    major: int
    minor: int = 0
    patch: int = 0
    revision: int = 0
    release_labels: tuple[str, ...] = ()
    metadata: str | None = None
    original: str | None = field(default=None, compare=False)

    @classmethod
    def parse(cls, value: str) -> "NuGetVersion":
        if value is None or not value.strip():
            raise ValueError("Version string cannot be empty")
        text = value.strip()

        metadata = None
        if "+" in text:
            text, metadata = text.split("+", 1)
            _parse_identifiers(metadata, "build metadata", value)

        release_labels: tuple[str, ...] = ()
        if "-" in text:
            text, release = text.split("-", 1)
            release_labels = _parse_identifiers(release, "release label", value)

        parts = text.split(".")
        if len(parts) > 4 or not all(_NUMERIC_PATTERN.match(p) for p in parts):
            raise ValueError(f"'{value}' is not a valid version string")
        numbers = [int(p) for p in parts] + [0] * (4 - len(parts))

        return cls(
            major=numbers[0],
            minor=numbers[1],
            patch=numbers[2],
            revision=numbers[3],
            release_labels=release_labels,
            metadata=metadata,
            original=value,
        )

    @classmethod
    def try_parse(cls, value: str | None) -> "NuGetVersion | None":
        if value is None:
            return None
        try:
            return cls.parse(value)
        except ValueError:
            return None

    @property
    def release(self) -> str:
        return ".".join(self.release_labels)

    @property
    def is_prerelease(self) -> bool:
        return len(self.release_labels) > 0

    @property
    def has_metadata(self) -> bool:
        return bool(self.metadata)

    @property
    def is_legacy_version(self) -> bool:
        return self.revision > 0

    @property
    def is_semver2(self) -> bool:
        return requires_semver2(self)

    def to_normalized_string(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision > 0:
            text += f".{self.revision}"
        if self.is_prerelease:
            text += f"-{self.release}"
        return text

    def to_full_string(self) -> str:
        text = self.to_normalized_string()
        if self.has_metadata:
            text += f"+{self.metadata}"
        return text

    def _precedence_key(self) -> tuple[int, int, int, int]:
        return (self.major, self.minor, self.patch, self.revision)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NuGetVersion):
            return NotImplemented
        return (
            self._precedence_key() == other._precedence_key()
            and _compare_labels(self.release_labels, other.release_labels) == 0
        )

    def __lt__(self, other: "NuGetVersion") -> bool:
        if not isinstance(other, NuGetVersion):
            return NotImplemented
        if self._precedence_key() != other._precedence_key():
            return self._precedence_key() < other._precedence_key()
        return _compare_labels(self.release_labels, other.release_labels) < 0

    def __hash__(self) -> int:
        labels = tuple(
            str(int(label)) if _is_numeric_label(label) else label.lower()
            for label in self.release_labels
        )
        return hash((self._precedence_key(), labels))

    def __str__(self) -> str:
        return self.to_normalized_string()


def requires_semver2(version: NuGetVersion) -> bool:
    """Tell whether a version can only be understood by SemVer 2 aware clients.

    That is the case when it carries build metadata, when its pre-release
    part has more than one dot separated label, or when any of those labels
    is purely numeric.
    """
    if version.has_metadata:
        return True
    if len(version.release_labels) > 1:
        return True
    return any(_is_numeric_label(label) for label in version.release_labels)
