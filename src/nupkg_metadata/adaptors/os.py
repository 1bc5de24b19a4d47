# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2025-present Datadog, Inc.

"""Here we collect a set of OS wrappers and adaptors to be easily replaced during testing and debugging."""

import os
import shutil
from typing import BinaryIO


def path_exists(file_path: str) -> bool:
    return os.path.exists(file_path)


def open_file(file_path: str) -> str:
    with open(file_path, "r", encoding="utf-8") as file:
        return file.read()


def write_file(file_path: str, content: str) -> None:
    with open(file_path, "w", encoding="utf-8") as file:
        file.write(content)


def write_stream(file_path: str, stream: BinaryIO) -> None:
    with open(file_path, "wb") as file:
        shutil.copyfileobj(stream, file)
