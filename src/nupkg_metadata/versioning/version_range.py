# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

from dataclasses import dataclass

from nupkg_metadata.versioning.nuget_version import NuGetVersion


@dataclass(frozen=True)
class VersionRange:
    """A dependency version range in NuGet interval notation.

    Examples:
        ``1.0``        -> 1.0 <= x
        ``[1.0]``      -> x == 1.0
        ``(,1.0]``     -> x <= 1.0
        ``[1.0,2.0)``  -> 1.0 <= x < 2.0
        ``1.0.*``      -> floating, resolved against 1.0.0 as the minimum
    """

    min_version: NuGetVersion | None
    max_version: NuGetVersion | None
    is_min_inclusive: bool = True
    is_max_inclusive: bool = False
    float_pattern: str | None = None

    @classmethod
    def parse(cls, value: str) -> "VersionRange":
        if value is None or not value.strip():
            raise ValueError("Version range cannot be empty")
        text = value.strip()

        if text[0] not in "[(":
            if "*" in text:
                return cls._parse_float(text)
            # A bare version means "this version or higher".
            return cls(
                min_version=NuGetVersion.parse(text),
                max_version=None,
                is_min_inclusive=True,
                is_max_inclusive=False,
            )

        if len(text) < 3 or text[-1] not in "])":
            raise ValueError(f"'{value}' is not a valid version range")
        is_min_inclusive = text[0] == "["
        is_max_inclusive = text[-1] == "]"
        bounds = text[1:-1].split(",")

        if len(bounds) == 1:
            # Only [x] is allowed as a single bound range.
            if not (is_min_inclusive and is_max_inclusive):
                raise ValueError(f"'{value}' is not a valid version range")
            exact = NuGetVersion.parse(bounds[0])
            return cls(exact, exact, True, True)

        if len(bounds) != 2:
            raise ValueError(f"'{value}' is not a valid version range")

        min_text, max_text = (bound.strip() for bound in bounds)
        min_version = NuGetVersion.parse(min_text) if min_text else None
        max_version = NuGetVersion.parse(max_text) if max_text else None

        if min_version is not None and max_version is not None:
            if min_version > max_version:
                raise ValueError(
                    f"'{value}' has a minimum version greater than its maximum version"
                )
            if min_version == max_version and not (
                is_min_inclusive and is_max_inclusive
            ):
                raise ValueError(f"'{value}' is an empty version range")

        return cls(min_version, max_version, is_min_inclusive, is_max_inclusive)

    @classmethod
    def _parse_float(cls, text: str) -> "VersionRange":
        if text.count("*") != 1 or not text.endswith("*"):
            raise ValueError(f"'{text}' is not a valid floating version")
        stem = text[:-1]
        if stem == "":
            min_version = NuGetVersion(0)
        elif stem.endswith("-"):
            # 1.0.0-* floats over every pre-release of 1.0.0, starting at 1.0.0-0
            min_version = NuGetVersion.parse(stem + "0")
        elif stem.endswith("."):
            min_version = NuGetVersion.parse(stem + "0")
        elif "-" in stem:
            # 1.0.0-beta* floats over pre-release labels starting with beta
            min_version = NuGetVersion.parse(stem)
        else:
            raise ValueError(f"'{text}' is not a valid floating version")
        return cls(min_version, None, True, False, float_pattern=text)

    @property
    def has_lower_bound(self) -> bool:
        return self.min_version is not None

    @property
    def has_upper_bound(self) -> bool:
        return self.max_version is not None

    @property
    def is_unbounded(self) -> bool:
        return not self.has_lower_bound and not self.has_upper_bound

    def to_normalized_string(self) -> str:
        if self.float_pattern is not None:
            return f"[{self.float_pattern}, )"
        if (
            self.min_version is not None
            and self.min_version == self.max_version
            and self.is_min_inclusive
            and self.is_max_inclusive
        ):
            return f"[{self.min_version.to_normalized_string()}]"
        lower = "[" if self.is_min_inclusive else "("
        upper = "]" if self.is_max_inclusive else ")"
        min_text = ""
        if self.min_version is not None:
            min_text = self.min_version.to_normalized_string()
        max_text = ""
        if self.max_version is not None:
            max_text = self.max_version.to_normalized_string()
        return f"{lower}{min_text}, {max_text}{upper}"

    def __str__(self) -> str:
        return self.to_normalized_string()
