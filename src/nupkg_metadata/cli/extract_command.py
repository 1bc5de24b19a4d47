# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

# Command extracting the registry metadata of a .nupkg file

import json
import logging
import zipfile
from typing import Annotated

import typer

from nupkg_metadata.adaptors.os import path_exists, write_file, write_stream
from nupkg_metadata.archive.package_archive_reader import PackageArchiveReader
from nupkg_metadata.config.extraction_configs import ExtractionConfig, default_config
from nupkg_metadata.config.json_config_parser import JsonConfigParser
from nupkg_metadata.errors import PackageMetadataError
from nupkg_metadata.metadata_extractor.metadata_extractor import MetadataExtractor
from nupkg_metadata.utils.logging import parse_log_level, setup_logging
from nupkg_metadata.writers.json_package_writer import JSONPackageWriter

logger = logging.getLogger("nupkg_metadata")


def log_level_callback(value: str) -> str:
    try:
        parse_log_level(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    return value


def extract(
    package_file: Annotated[
        str,
        typer.Argument(help="Path to the .nupkg file to extract metadata from."),
    ],
    output_file: Annotated[
        str | None,
        typer.Option(
            "--output",
            "-o",
            help="Path to write the JSON metadata to. Default is stdout.",
        ),
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option(
            "--config",
            help="Path to a JSON file overriding the extraction configuration.",
        ),
    ] = None,
    readme_output: Annotated[
        str | None,
        typer.Option(
            "--readme-output",
            help="Copy the package readme to this path, if the package has one.",
        ),
    ] = None,
    icon_output: Annotated[
        str | None,
        typer.Option(
            "--icon-output",
            help="Copy the embedded package icon to this path, if there is one.",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
            callback=log_level_callback,
        ),
    ] = "WARNING",
) -> None:
    """
    Extract the registry metadata of a package archive and print it as JSON.
    """
    setup_logging(parse_log_level(log_level))

    if not path_exists(package_file):
        typer.echo(f"Error: File '{package_file}' not found.", err=True)
        raise typer.Exit(code=1)

    config: ExtractionConfig = default_config
    if config_file is not None:
        try:
            config = JsonConfigParser.load_extraction_config(config_file)
        except (OSError, json.JSONDecodeError, ValueError) as e:
            typer.echo(f"Error: Invalid configuration file: {e}", err=True)
            raise typer.Exit(code=1)

    extractor = MetadataExtractor(config)
    try:
        with PackageArchiveReader(package_file) as archive:
            manifest = archive.nuspec_reader
            package = extractor.extract(manifest, archive)

            if readme_output is not None and package.has_readme:
                with extractor.open_readme(manifest, archive) as readme:
                    write_stream(readme_output, readme)
                logger.info(f"Readme written to {readme_output}")
            if icon_output is not None and package.has_embedded_icon:
                with extractor.open_icon(manifest, archive) as icon:
                    write_stream(icon_output, icon)
                logger.info(f"Icon written to {icon_output}")
    except zipfile.BadZipFile as e:
        typer.echo(f"Error: '{package_file}' is not a valid package: {e}", err=True)
        raise typer.Exit(code=1)
    except PackageMetadataError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    json_output = JSONPackageWriter().write(package)
    if output_file is None:
        typer.echo(json_output)
    else:
        write_file(output_file, json_output)
        typer.echo(f"Metadata of {package.id} written to {output_file}", err=True)
