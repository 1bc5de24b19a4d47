# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

"""Translation of target framework names into the short folder names used
inside packages, e.g. ".NETFramework,Version=v4.5" -> "net45"."""

import re

ANY_FRAMEWORK = "any"
UNSUPPORTED_FRAMEWORK = "unsupported"

# Full framework identifiers (lower case) and their short counterparts
_FULL_IDENTIFIERS = {
    ".netframework": "net",
    ".netstandard": "netstandard",
    ".netcoreapp": "netcoreapp",
    ".netcore": "netcore",
    ".netplatform": "dotnet",
    ".netportable": "portable",
    ".netmicroframework": "netmf",
    "silverlight": "sl",
    "windowsphone": "wp",
    "windowsphoneapp": "wpa",
    "windows": "win",
    "uap": "uap",
    "monoandroid": "monoandroid",
    "monotouch": "monotouch",
    "monomac": "monomac",
    "xamarin.ios": "xamarinios",
    "xamarin.mac": "xamarinmac",
    "xamarin.tvos": "xamarintvos",
    "xamarin.watchos": "xamarinwatchos",
    "tizen": "tizen",
    "native": "native",
    "any": ANY_FRAMEWORK,
    "agnostic": "agnostic",
    "unsupported": UNSUPPORTED_FRAMEWORK,
}

_SHORT_IDENTIFIERS = set(_FULL_IDENTIFIERS.values())

# Identifiers whose versions are written with dots (netstandard2.0)
_DOTTED_IDENTIFIERS = {"netstandard", "netcoreapp", "uap", "tizen"}

# Folders whose first sub folder names the target framework
_FRAMEWORK_FOLDERS = {"lib", "ref", "build", "buildtransitive", "tools", "content"}

_FRAMEWORK_PATTERN = re.compile(r"^(\.?[a-z][a-z.]*?)(\d[\d.]*)?(?:-(.+))?$")
_FULL_NAME_VERSION_PATTERN = re.compile(r"^v?\d[\d.]*$")


def _version_parts(version: str) -> list[int]:
    if "." in version:
        return [int(part) for part in version.split(".") if part]
    # net45 style, one digit per part
    return [int(digit) for digit in version]


def _format_short_name(identifier: str, version: str, platform: str | None) -> str:
    version = version.lstrip("v")
    if not version:
        return identifier
    parts = _version_parts(version)

    # .NET 5 and above dropped the netcoreapp prefix
    if identifier in ("net", "netcoreapp") and parts[0] >= 5:
        identifier = "net"
        dotted = True
    else:
        dotted = identifier in _DOTTED_IDENTIFIERS

    # net40 and netstandard2.0 keep two parts, win8 and sl5 keep one
    min_parts = 2 if dotted or identifier == "net" else 1

    if not dotted and "." not in version:
        # Already compact (net45, xamarinios10), only net4 needs padding
        return identifier + version + "0" * (min_parts - len(version))

    while len(parts) > min_parts and parts[-1] == 0:
        parts = parts[:-1]
    if len(parts) < min_parts:
        parts = parts + [0] * (min_parts - len(parts))

    separator = "." if dotted or any(part > 9 for part in parts) else ""
    name = identifier + separator.join(str(part) for part in parts)
    if platform and identifier == "net" and dotted:
        name += "-" + platform
    return name


def _parse_full_name(text: str) -> str:
    pieces = [piece.strip() for piece in text.split(",")]
    identifier = pieces[0]
    version = ""
    profile = None
    for piece in pieces[1:]:
        key, _, value = piece.partition("=")
        key = key.strip()
        if key == "version":
            version = value.strip()
        elif key == "profile":
            profile = value.strip()

    short_identifier = _FULL_IDENTIFIERS.get(identifier)
    if short_identifier is None:
        if identifier not in _SHORT_IDENTIFIERS:
            return text
        short_identifier = identifier
    if short_identifier == "portable" and profile:
        return f"portable-{profile}"
    if version and not _FULL_NAME_VERSION_PATTERN.match(version):
        return text
    return _format_short_name(short_identifier, version, None)


def get_short_folder_name(framework: str) -> str:
    """Return the short folder name of a target framework.

    Full names (".NETFramework,Version=v4.5"), compact full names
    (".NETStandard2.0") and short names ("net4.5", "netcoreapp5.0") are all
    accepted. Names that are not recognized are returned lower cased.
    """
    text = framework.strip().lower() if framework else ""
    if not text:
        return ANY_FRAMEWORK
    if "," in text:
        return _parse_full_name(text)
    if text.startswith("portable-") or text.startswith("portable40-"):
        return text

    match = _FRAMEWORK_PATTERN.match(text)
    if match is None:
        return text
    identifier, version, platform = match.groups()

    short_identifier = _FULL_IDENTIFIERS.get(identifier)
    if short_identifier is None:
        if identifier not in _SHORT_IDENTIFIERS:
            return text
        short_identifier = identifier

    return _format_short_name(short_identifier, version or "", platform)


def get_framework_from_path(path: str) -> str | None:
    """Return the framework an archive entry belongs to, if any.

    lib/netstandard2.0/Foo.dll -> "netstandard2.0"
    contentFiles/cs/net45/Foo.cs -> "net45"
    lib/Foo.dll -> "net"
    """
    parts = path.replace("\\", "/").lstrip("/").split("/")
    top = parts[0].lower()

    if top in _FRAMEWORK_FOLDERS:
        if len(parts) >= 3:
            return get_short_folder_name(parts[1])
        if len(parts) == 2 and top == "lib":
            return "net"
        return None

    if top == "contentfiles" and len(parts) >= 4:
        return get_short_folder_name(parts[2])

    return None
