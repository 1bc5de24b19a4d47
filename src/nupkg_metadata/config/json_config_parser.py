# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

import dataclasses
import json
import logging
from typing import Any

from nupkg_metadata.adaptors.os import open_file
from nupkg_metadata.config.extraction_configs import (
    ExtractionConfig,
    PackageTypeConfig,
    default_config,
)

logger = logging.getLogger("nupkg_metadata")


class JsonConfigParser:
    """Parser for JSON configuration files used by nupkg-metadata."""

    @staticmethod
    def parse_extraction_config(config_dict: dict[str, Any]) -> ExtractionConfig:
        """Build an extraction config from a JSON object.

        Keys that are not present keep their default value.

        JSON format:
            {
                "max_repository_type_length": 100,
                "allowed_repository_schemes": ["http", "https"],
                "default_package_type": {"name": "Dependency", "version": "0.0.0.0"},
                "default_target_framework": "any"
            }

        Raises:
            ValueError: If the object has unknown keys or values of the wrong type
        """
        if not isinstance(config_dict, dict):
            raise ValueError("The extraction configuration must be a JSON object")

        known_keys = {f.name for f in dataclasses.fields(ExtractionConfig)}
        unknown_keys = set(config_dict) - known_keys
        if unknown_keys:
            raise ValueError(
                f"Unknown extraction configuration keys: {sorted(unknown_keys)}. "
                f"Valid keys: {sorted(known_keys)}"
            )

        config = dataclasses.replace(default_config)

        if "max_repository_type_length" in config_dict:
            max_length = config_dict["max_repository_type_length"]
            if (
                not isinstance(max_length, int)
                or isinstance(max_length, bool)
                or max_length < 0
            ):
                raise ValueError(
                    "max_repository_type_length must be a non negative integer"
                )
            config.max_repository_type_length = max_length

        if "allowed_repository_schemes" in config_dict:
            schemes = config_dict["allowed_repository_schemes"]
            if not isinstance(schemes, list) or not all(
                isinstance(scheme, str) for scheme in schemes
            ):
                raise ValueError("allowed_repository_schemes must be a list of strings")
            config.allowed_repository_schemes = [scheme.lower() for scheme in schemes]

        if "default_package_type" in config_dict:
            package_type = config_dict["default_package_type"]
            if (
                not isinstance(package_type, dict)
                or not isinstance(package_type.get("name"), str)
                or not isinstance(package_type.get("version"), str)
            ):
                raise ValueError(
                    "default_package_type must be an object with 'name' and 'version'"
                )
            config.default_package_type = PackageTypeConfig(
                name=package_type["name"], version=package_type["version"]
            )

        if "default_target_framework" in config_dict:
            framework = config_dict["default_target_framework"]
            if not isinstance(framework, str) or not framework:
                raise ValueError("default_target_framework must be a non empty string")
            config.default_target_framework = framework

        return config

    @staticmethod
    def load_extraction_config(config_file_path: str) -> ExtractionConfig:
        """Load the extraction configuration from a JSON file.

        Raises:
            FileNotFoundError: If the configuration file is not found
            json.JSONDecodeError: If the JSON file is invalid
            ValueError: If the configuration format is invalid
        """
        try:
            config_dict = json.loads(open_file(config_file_path))
            return JsonConfigParser.parse_extraction_config(config_dict)
        except FileNotFoundError:
            logger.error(f"Configuration file not found: {config_file_path}")
            raise
        except json.JSONDecodeError:
            logger.error(f"Invalid JSON in configuration file: {config_file_path}")
            raise
        except Exception as e:
            logger.error(f"Failed to load the extraction configuration: {str(e)}")
            raise
