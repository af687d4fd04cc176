# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os
import logging

logger = logging.getLogger(__name__)

# Tried in this order when nothing matches the requested extension.
FALLBACK_EXTENSIONS = [".pgm", ".ppm", ".jpg", ".png", ".bmp"]


def normalize_extension(extension):
    """Lower case an extension and make sure it starts with a dot."""
    extension = extension.strip().lower()
    if not extension.startswith("."):
        extension = "." + extension
    return extension


def get_image_files(directory, extension):
    """Recursively list the files under a directory with a given extension

    The extension is matched case insensitively. Files are returned in the
    order the filesystem enumerates them, which is not sorted.

    Args:
        directory (str): Root directory to scan
        extension (str): File extension, with or without the leading dot

    Returns:
        list: Paths of the matching files
    """
    extension = normalize_extension(extension)
    image_files = []

    if not os.path.isdir(directory):
        logger.warning("Input directory does not exist: %s" % directory)
        return image_files

    def on_error(err):
        # Keep whatever was collected so far.
        logger.error("Filesystem error: %s" % str(err))

    for root, _, files in os.walk(directory, onerror=on_error):
        for filename in files:
            filepath = os.path.join(root, filename)
            if not os.path.isfile(filepath):
                continue
            if os.path.splitext(filename)[1].lower() == extension:
                image_files.append(filepath)

    return image_files


def find_image_files(directory, extension, fallback_extensions=FALLBACK_EXTENSIONS):
    """Scan a directory, falling back to common image extensions

    Returns:
        tuple: (files, extension) where extension is the one that matched.
         files is empty if no extension matched.
    """
    extension = normalize_extension(extension)
    image_files = get_image_files(directory, extension)
    if image_files:
        return image_files, extension

    logger.info("No images found with extension %s in %s" % (extension, directory))
    logger.info("Trying alternative extensions...")

    for ext in fallback_extensions:
        image_files = get_image_files(directory, ext)
        if image_files:
            logger.info(
                "Found %d images with %s extension" % (len(image_files), ext)
            )
            return image_files, ext

    return [], extension
