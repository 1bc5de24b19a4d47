# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

import io
import logging
import threading
from datetime import datetime
from typing import Any
from unittest.mock import Mock

import pytest
import pytest_mock
import pytz

from nupkg_metadata.archive.abstract_archive_reader import ArchiveReader
from nupkg_metadata.config.extraction_configs import (
    ExtractionConfig,
    PackageTypeConfig,
)
from nupkg_metadata.errors import (
    ExtractionCancelledError,
    PackageFormatError,
    PackageIntegrityError,
    PackageValidationError,
)
from nupkg_metadata.manifest.abstract_manifest_reader import (
    ManifestDependency,
    ManifestDependencyGroup,
    ManifestPackageType,
    ManifestReader,
    ManifestRepositoryMetadata,
)
from nupkg_metadata.metadata_extractor.metadata_extractor import (
    MetadataExtractor,
    strip_leading_directory_separators,
)
from nupkg_metadata.metadata_extractor.package import (
    PackageDependency,
    PackageType,
    TargetFramework,
)
from nupkg_metadata.versioning.nuget_version import NuGetVersion
from nupkg_metadata.versioning.semver_level import SemVerLevel

PUBLISHED = datetime(2025, 3, 14, 9, 26, 53, tzinfo=pytz.UTC)


def fixed_clock() -> datetime:
    return PUBLISHED


def create_manifest(mocker: pytest_mock.MockFixture, **fields: Any) -> Mock:
    manifest = mocker.Mock(spec=ManifestReader)
    values: dict[str, Any] = {
        "get_id": "Sample",
        "get_version": "1.0.0",
        "get_authors": None,
        "get_description": None,
        "get_summary": None,
        "get_title": None,
        "get_language": None,
        "get_release_notes": None,
        "get_tags": None,
        "get_readme": None,
        "get_icon": None,
        "get_icon_url": None,
        "get_license_url": None,
        "get_project_url": None,
        "get_min_client_version": None,
        "get_require_license_acceptance": False,
        "get_repository_metadata": None,
        "get_dependency_groups": [],
        "get_package_types": [],
        "get_supported_frameworks": [],
    }
    values.update(fields)
    for method_name, value in values.items():
        getattr(manifest, method_name).return_value = value
    return manifest


def create_archive(mocker: pytest_mock.MockFixture, *paths: str) -> Mock:
    archive = mocker.Mock(spec=ArchiveReader)
    archive.exists.side_effect = lambda path: path in paths
    return archive


@pytest.fixture
def extractor() -> MetadataExtractor:
    return MetadataExtractor(clock=fixed_clock)


def test_extracts_every_field_of_a_complete_manifest(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker,
        get_id="Datadog.Trace",
        get_version="2.1.0.0-beta",
        get_authors="Datadog;Contributors",
        get_description="Tracing library",
        get_summary="Tracing",
        get_title="Datadog APM",
        get_language="en-US",
        get_release_notes="Bug fixes",
        get_tags="apm tracing",
        get_readme="docs/README.md",
        get_icon="/images/icon.png",
        get_icon_url="https://example.com/icon.png",
        get_license_url="https://licenses.nuget.org/Apache-2.0",
        get_project_url="https://github.com/DataDog/dd-trace-dotnet",
        get_min_client_version="2.12",
        get_require_license_acceptance=True,
        get_repository_metadata=ManifestRepositoryMetadata(
            type="git", url="https://github.com/DataDog/dd-trace-dotnet"
        ),
        get_dependency_groups=[
            ManifestDependencyGroup(
                "net6.0", [ManifestDependency("System.Memory", "[4.5.4, 5.0)")]
            )
        ],
        get_package_types=[ManifestPackageType("DotnetTool", "1.0")],
        get_supported_frameworks=["net6.0", "netstandard2.0"],
    )
    archive = create_archive(mocker, "docs/README.md", "images/icon.png")

    package = extractor.extract(manifest, archive)

    assert package.id == "Datadog.Trace"
    assert package.version == NuGetVersion.parse("2.1.0-beta")
    assert package.authors == ("Datadog", "Contributors")
    assert package.description == "Tracing library"
    assert package.summary == "Tracing"
    assert package.title == "Datadog APM"
    assert package.language == "en-US"
    assert package.release_notes == "Bug fixes"
    assert package.tags == ("apm", "tracing")
    assert package.has_readme is True
    assert package.has_embedded_icon is True
    assert package.is_prerelease is True
    assert package.listed is True
    assert package.min_client_version == "2.12.0"
    assert package.published == PUBLISHED
    assert package.require_license_acceptance is True
    assert package.semver_level == SemVerLevel.UNKNOWN
    assert package.icon_url == "https://example.com/icon.png"
    assert package.license_url == "https://licenses.nuget.org/Apache-2.0"
    assert package.project_url == "https://github.com/DataDog/dd-trace-dotnet"
    assert package.repository_url == "https://github.com/DataDog/dd-trace-dotnet"
    assert package.repository_type == "git"
    assert package.dependencies == (
        PackageDependency("System.Memory", "[4.5.4, 5.0.0)", "net6.0"),
    )
    assert package.package_types == (PackageType("DotnetTool", "1.0"),)
    assert package.target_frameworks == (
        TargetFramework("net6.0"),
        TargetFramework("netstandard2.0"),
    )
    archive.exists.assert_has_calls(
        [mocker.call("docs/README.md"), mocker.call("images/icon.png")]
    )


def test_minimal_manifest_gets_the_defaults(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker)
    archive = create_archive(mocker)

    package = extractor.extract(manifest, archive)

    assert package.id == "Sample"
    assert package.description == ""
    assert package.summary == ""
    assert package.title == ""
    assert package.language == ""
    assert package.release_notes == ""
    assert package.authors == ()
    assert package.tags == ()
    assert package.has_readme is False
    assert package.has_embedded_icon is False
    assert package.is_prerelease is False
    assert package.min_client_version is None
    assert package.icon_url is None
    assert package.license_url is None
    assert package.project_url is None
    assert package.repository_url is None
    assert package.repository_type is None
    assert package.dependencies == ()
    assert package.package_types == (PackageType("Dependency", "0.0.0.0"),)
    assert package.target_frameworks == (TargetFramework("any"),)
    assert package.semver_level == SemVerLevel.UNKNOWN
    archive.exists.assert_not_called()


def test_package_is_immutable(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    package = extractor.extract(create_manifest(mocker), create_archive(mocker))

    with pytest.raises(AttributeError):
        package.id = "Other"  # type: ignore[misc]


def test_authors_keep_non_empty_tokens_in_order(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker, get_authors="b,,a;\tc\r\n")

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.authors == ("b", "a", "c")


def test_tags_are_split_on_spaces(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker, get_tags=" a  b ")

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.tags == ("a", "b")


def test_framework_without_dependencies_gets_an_empty_entry(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker, get_dependency_groups=[ManifestDependencyGroup("net6.0", [])]
    )

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.dependencies == (
        PackageDependency(id=None, version_range=None, target_framework="net6.0"),
    )


def test_dependencies_keep_group_and_declaration_order(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker,
        get_dependency_groups=[
            ManifestDependencyGroup(
                "net45",
                [
                    ManifestDependency("B", "1.0"),
                    ManifestDependency("A", None),
                ],
            ),
            ManifestDependencyGroup("netstandard2.0", []),
            ManifestDependencyGroup(
                "net6.0",
                [
                    ManifestDependency("C", "[1.0]"),
                    ManifestDependency("D", "(, )"),
                    ManifestDependency("E", "1.0.*"),
                ],
            ),
        ],
    )

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.dependencies == (
        PackageDependency("B", "[1.0.0, )", "net45"),
        PackageDependency("A", None, "net45"),
        PackageDependency(None, None, "netstandard2.0"),
        PackageDependency("C", "[1.0.0]", "net6.0"),
        PackageDependency("D", None, "net6.0"),
        PackageDependency("E", "[1.0.*, )", "net6.0"),
    )


def test_invalid_dependency_range_is_rejected(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker,
        get_dependency_groups=[
            ManifestDependencyGroup("any", [ManifestDependency("A", "[2.0,1.0]")])
        ],
    )

    with pytest.raises(PackageFormatError, match="dependency A"):
        extractor.extract(manifest, create_archive(mocker))


def test_declared_package_types_are_kept_verbatim(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker,
        get_package_types=[
            ManifestPackageType("Template", "2.0"),
            ManifestPackageType("Dependency", None),
        ],
    )

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.package_types == (
        PackageType("Template", "2.0"),
        PackageType("Dependency", "0.0.0.0"),
    )


def test_non_http_repository_is_dropped_without_error(
    mocker: pytest_mock.MockFixture,
    extractor: MetadataExtractor,
    caplog: pytest.LogCaptureFixture,
) -> None:
    manifest = create_manifest(
        mocker,
        get_repository_metadata=ManifestRepositoryMetadata(
            type="git", url="ftp://x/y"
        ),
    )

    with caplog.at_level(logging.WARNING, logger="nupkg_metadata"):
        package = extractor.extract(manifest, create_archive(mocker))

    assert package.repository_url is None
    assert package.repository_type is None
    assert "Ignoring repository metadata" in caplog.text


def test_repository_without_type_has_an_empty_type(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker,
        get_repository_metadata=ManifestRepositoryMetadata(
            url="https://github.com/org/repo"
        ),
    )

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.repository_url == "https://github.com/org/repo"
    assert package.repository_type == ""


def test_repository_type_of_101_characters_is_rejected(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker,
        get_repository_metadata=ManifestRepositoryMetadata(
            type="x" * 101, url="https://github.com/org/repo"
        ),
    )

    with pytest.raises(PackageValidationError):
        extractor.extract(manifest, create_archive(mocker))


def test_version_with_build_metadata_is_semver2(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker,
        get_version="1.0.0+build",
        get_dependency_groups=[
            ManifestDependencyGroup("any", [ManifestDependency("A", "[1.0,2.0)")])
        ],
    )

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.semver_level == SemVerLevel.SEMVER2
    assert package.version.to_full_string() == "1.0.0+build"


def test_semver2_dependency_bound_makes_the_package_semver2(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker,
        get_version="1.0.0",
        get_dependency_groups=[
            ManifestDependencyGroup("any", [ManifestDependency("A", "2.0.0-rc.1.2")])
        ],
    )

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.semver_level == SemVerLevel.SEMVER2


def test_classic_dependency_ranges_keep_the_package_unknown(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker,
        get_version="1.0.0",
        get_dependency_groups=[
            ManifestDependencyGroup("any", [ManifestDependency("A", "[1.0,2.0)")]),
            ManifestDependencyGroup("net6.0", []),
        ],
    )

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.semver_level == SemVerLevel.UNKNOWN


@pytest.mark.parametrize("version", [None, "", "not-a-version", "1.2.3.4.5"])
def test_missing_or_invalid_version_is_rejected(
    mocker: pytest_mock.MockFixture,
    extractor: MetadataExtractor,
    version: str | None,
) -> None:
    manifest = create_manifest(mocker, get_version=version)

    with pytest.raises(PackageFormatError):
        extractor.extract(manifest, create_archive(mocker))


def test_invalid_min_client_version_is_rejected(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker, get_min_client_version="latest")

    with pytest.raises(PackageFormatError, match="min client version"):
        extractor.extract(manifest, create_archive(mocker))


@pytest.mark.parametrize(
    "field", ["get_icon_url", "get_license_url", "get_project_url"]
)
def test_relative_urls_are_rejected(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor, field: str
) -> None:
    manifest = create_manifest(mocker, **{field: "www.example.com/page"})

    with pytest.raises(PackageFormatError):
        extractor.extract(manifest, create_archive(mocker))


@pytest.mark.parametrize(
    "field", ["get_icon_url", "get_license_url", "get_project_url"]
)
def test_empty_urls_are_absent(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor, field: str
) -> None:
    manifest = create_manifest(mocker, **{field: ""})

    package = extractor.extract(manifest, create_archive(mocker))

    assert getattr(package, field.removeprefix("get_")) is None


def test_readme_missing_from_the_archive_is_rejected(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker, get_readme="README.md")
    archive = create_archive(mocker, "docs/README.md")

    with pytest.raises(PackageIntegrityError, match="README.md"):
        extractor.extract(manifest, archive)


def test_icon_missing_from_the_archive_is_rejected(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker, get_icon="icon.png")

    with pytest.raises(PackageIntegrityError, match="icon"):
        extractor.extract(manifest, create_archive(mocker))


def test_readme_path_is_looked_up_without_leading_separators(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker, get_readme="\\/docs/README.md")
    archive = create_archive(mocker, "docs/README.md")

    package = extractor.extract(manifest, archive)

    assert package.has_readme is True
    archive.exists.assert_called_once_with("docs/README.md")


def test_strip_leading_directory_separators() -> None:
    assert strip_leading_directory_separators("/\\a/b\\c") == "a/b\\c"
    assert strip_leading_directory_separators("a") == "a"


def test_configuration_changes_the_limits_and_defaults(
    mocker: pytest_mock.MockFixture,
) -> None:
    config = ExtractionConfig(
        max_repository_type_length=3,
        allowed_repository_schemes=["ssh"],
        default_package_type=PackageTypeConfig("Template", "1.0"),
        default_target_framework="netstandard2.0",
    )
    extractor = MetadataExtractor(config=config, clock=fixed_clock)
    manifest = create_manifest(
        mocker,
        get_repository_metadata=ManifestRepositoryMetadata(
            type="git", url="ssh://host/repo"
        ),
    )

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.repository_url == "ssh://host/repo"
    assert package.package_types == (PackageType("Template", "1.0"),)
    assert package.target_frameworks == (TargetFramework("netstandard2.0"),)


def test_published_comes_from_the_clock(mocker: pytest_mock.MockFixture) -> None:
    clock = mocker.Mock(return_value=PUBLISHED)
    extractor = MetadataExtractor(clock=clock)

    package = extractor.extract(create_manifest(mocker), create_archive(mocker))

    assert package.published == PUBLISHED
    clock.assert_called_once_with()


def test_extraction_cancelled_before_start(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    cancellation = threading.Event()
    cancellation.set()
    manifest = create_manifest(mocker)

    with pytest.raises(ExtractionCancelledError):
        extractor.extract(manifest, create_archive(mocker), cancellation)
    manifest.get_version.assert_not_called()


def test_extraction_cancelled_while_reading_the_archive(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    cancellation = threading.Event()
    manifest = create_manifest(mocker, get_readme="README.md", get_icon="icon.png")
    archive = mocker.Mock(spec=ArchiveReader)

    def exists(path: str) -> bool:
        cancellation.set()
        return True

    archive.exists.side_effect = exists

    with pytest.raises(ExtractionCancelledError):
        extractor.extract(manifest, archive, cancellation)
    archive.exists.assert_called_once_with("README.md")


def test_extraction_with_unset_cancellation_completes(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker, get_readme="README.md")
    archive = create_archive(mocker, "README.md")

    package = extractor.extract(manifest, archive, threading.Event())

    assert package.has_readme is True


def test_open_readme_returns_the_stream(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker, get_readme="/docs/README.md")
    archive = create_archive(mocker, "docs/README.md")
    archive.open.return_value = io.BytesIO(b"# Sample")

    with extractor.open_readme(manifest, archive) as stream:
        assert stream.read() == b"# Sample"
    archive.open.assert_called_once_with("docs/README.md")


def test_open_icon_returns_the_stream(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker, get_icon="images/icon.png")
    archive = create_archive(mocker, "images/icon.png")
    archive.open.return_value = io.BytesIO(b"PNG")

    with extractor.open_icon(manifest, archive) as stream:
        assert stream.read() == b"PNG"


def test_open_readme_without_declaration_is_rejected(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    archive = create_archive(mocker)

    with pytest.raises(PackageIntegrityError, match="does not declare a readme"):
        extractor.open_readme(create_manifest(mocker), archive)
    archive.open.assert_not_called()


def test_open_icon_missing_from_the_archive_is_rejected(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(mocker, get_icon="icon.png")
    archive = create_archive(mocker)

    with pytest.raises(PackageIntegrityError):
        extractor.open_icon(manifest, archive)
    archive.open.assert_not_called()


def test_open_readme_cancelled_after_open_closes_the_stream(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    cancellation = threading.Event()
    manifest = create_manifest(mocker, get_readme="README.md")
    archive = create_archive(mocker, "README.md")
    stream = io.BytesIO(b"# Sample")

    def open_and_cancel(path: str) -> io.BytesIO:
        cancellation.set()
        return stream

    archive.open.side_effect = open_and_cancel

    with pytest.raises(ExtractionCancelledError):
        extractor.open_readme(manifest, archive, cancellation)
    assert stream.closed


def test_open_icon_cancelled_before_open(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    cancellation = threading.Event()
    cancellation.set()
    manifest = create_manifest(mocker, get_icon="icon.png")
    archive = create_archive(mocker, "icon.png")

    with pytest.raises(ExtractionCancelledError):
        extractor.open_icon(manifest, archive, cancellation)
    archive.exists.assert_not_called()
    archive.open.assert_not_called()


def test_repository_without_url_is_ignored_whatever_its_type(
    mocker: pytest_mock.MockFixture, extractor: MetadataExtractor
) -> None:
    manifest = create_manifest(
        mocker,
        get_repository_metadata=ManifestRepositoryMetadata(type="x" * 101, url=""),
    )

    package = extractor.extract(manifest, create_archive(mocker))

    assert package.repository_url is None
    assert package.repository_type is None


def test_extraction_only_logs_at_debug_level(
    mocker: pytest_mock.MockFixture,
    extractor: MetadataExtractor,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.DEBUG, logger="nupkg_metadata"):
        extractor.extract(create_manifest(mocker), create_archive(mocker))

    assert caplog.records
    assert all(record.levelno == logging.DEBUG for record in caplog.records)
    assert "Extracting metadata of Sample 1.0.0" in caplog.text
