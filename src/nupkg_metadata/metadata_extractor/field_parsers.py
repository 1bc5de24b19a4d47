# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

"""Parsers turning raw manifest strings into normalized package fields."""

import logging
import re
from urllib.parse import urlsplit

from nupkg_metadata.errors import (
    PackageFormatError,
    PackageValidationError,
)
from nupkg_metadata.manifest.abstract_manifest_reader import (
    ManifestRepositoryMetadata,
)

logger = logging.getLogger("nupkg_metadata")

AUTHOR_SEPARATORS = (",", ";", "\t", "\n", "\r")
TAG_SEPARATOR = " "

_AUTHOR_SEPARATOR_PATTERN = re.compile(
    "[" + "".join(re.escape(separator) for separator in AUTHOR_SEPARATORS) + "]"
)
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")


def parse_authors(authors: str | None) -> list[str]:
    """
    Split the authors field of a manifest.

    Authors are separated by commas, though semicolons, tabs and line breaks
    are accepted too. Empty entries are dropped and the order is kept.
    See: https://learn.microsoft.com/en-us/nuget/reference/nuspec#authors
    """
    if not authors:
        return []
    return [author for author in _AUTHOR_SEPARATOR_PATTERN.split(authors) if author]


def parse_tags(tags: str | None) -> list[str]:
    """
    Split the space delimited tags field of a manifest.

    See: https://learn.microsoft.com/en-us/nuget/reference/nuspec#tags
    """
    if not tags:
        return []
    return [tag for tag in tags.split(TAG_SEPARATOR) if tag]


def try_parse_absolute_uri(uri: str) -> str | None:
    """Return the URI if it is absolute, None otherwise.

    Spaces in the path or query are accepted as they are, only the scheme
    and the authority have to be well formed.
    """
    text = uri.strip()
    if not text:
        return None
    try:
        parts = urlsplit(text)
    except ValueError:
        return None
    if not parts.scheme or not _SCHEME_PATTERN.match(parts.scheme):
        return None
    # Hierarchical URIs need a host, "mailto:" style ones need something after the colon
    if text[len(parts.scheme) + 1 :].startswith("//"):
        if any(character.isspace() for character in parts.netloc):
            return None
        if parts.hostname:
            return text
        # file:///C:/license.txt has an empty host
        if parts.scheme.lower() != "file" or not parts.path:
            return None
    elif not parts.path:
        return None
    return text


def parse_uri(uri: str | None, field_name: str = "URL") -> str | None:
    if not uri:
        return None
    parsed = try_parse_absolute_uri(uri)
    if parsed is None:
        raise PackageFormatError(f"The {field_name} '{uri}' is not an absolute URI")
    return parsed


def parse_repository_metadata(
    repository: ManifestRepositoryMetadata | None,
    max_type_length: int = 100,
    allowed_schemes: tuple[str, ...] | list[str] = ("http", "https"),
) -> tuple[str | None, str | None]:
    """
    Return the repository URL and type of a package.

    The repository is dropped without error when its URL is missing, is not
    absolute or does not use one of the allowed schemes. Once a URL is
    declared, a type longer than ``max_type_length`` rejects the package
    whether or not that URL is usable.
    """
    if repository is None or not repository.url:
        return None, None

    repository_type = repository.type or ""
    if len(repository_type) > max_type_length:
        raise PackageValidationError(
            f"Repository type must be less than or equal {max_type_length} characters"
        )

    repository_url = try_parse_absolute_uri(repository.url)
    if repository_url is None:
        logger.warning(
            f"Ignoring repository metadata, '{repository.url}' is not an absolute URI"
        )
        return None, None

    scheme = urlsplit(repository_url).scheme.lower()
    if scheme not in allowed_schemes:
        logger.warning(
            f"Ignoring repository metadata, scheme '{scheme}' is not one of "
            f"{list(allowed_schemes)}"
        )
        return None, None

    return repository_url, repository_type
