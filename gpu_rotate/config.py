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

"""
config

Command line parsing for the rotation tools. Arguments are parsed and
validated once and turned into an immutable configuration value which is
then handed to the pipeline.
"""

import os
import math
import logging
import argparse
from typing import NamedTuple

from .scanner import normalize_extension

INTERPOLATION_CHOICES = ["nearest", "linear", "cubic"]
LOG_LEVEL_CHOICES = ["info", "error", "debug", "warning"]

DEFAULT_SAMPLE_IMAGE = "sample.pgm"
PACKAGE_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


class BatchConfig(NamedTuple):
    input_dir: str = "data/aerials"
    output_dir: str = "output"
    angle: float = 45.0
    extension: str = ".tiff"
    interpolation: str = "linear"
    device_id: int = 0
    log_level: str = "info"


class SingleConfig(NamedTuple):
    input_path: str
    output_path: str
    angle: float = 45.0
    interpolation: str = "nearest"
    device_id: int = 0
    log_level: str = "info"


def find_file_path(filename, search_dirs=None):
    """Look a file up in a list of directories

    Args:
        filename (str): The file to look for. Returned as is if it already exists.
        search_dirs (list): Directories to search. Defaults to the working
         directory, data/, ../data/ and the data folder shipped with this package.

    Returns:
        str: The path of the first match, or None if the file was not found
    """
    if os.path.isfile(filename):
        return filename

    if search_dirs is None:
        search_dirs = [".", "data", os.path.join("..", "data"), PACKAGE_DATA_DIR]

    for directory in search_dirs:
        candidate = os.path.join(directory, filename)
        if os.path.isfile(candidate):
            return candidate

    return None


def default_single_output(input_path):
    """Derive the output path of the single file tool: a trailing .pgm, in
    any letter case, is replaced by _rotate.pgm."""
    base = input_path
    if base.lower().endswith(".pgm"):
        base = base[: -len(".pgm")]
    return base + "_rotate.pgm"


def _add_common_args(parser, interpolation):
    parser.add_argument(
        "--angle",
        default=45.0,
        type=float,
        help="The rotation angle in degrees.",
    )
    parser.add_argument(
        "--interpolation",
        type=str,
        choices=INTERPOLATION_CHOICES,
        default=interpolation,
        help="The interpolation mode used by the rotate operator.",
    )
    parser.add_argument(
        "-d",
        "--device_id",
        default=0,
        type=int,
        help="The GPU device to use.",
    )
    parser.add_argument(
        "-ll",
        "--log_level",
        type=str,
        choices=LOG_LEVEL_CHOICES,
        default="info",
        help="Sets the desired logging level.",
    )


def get_batch_arg_parser():
    """
    Prepares and returns the argparse parser of the batch rotation tool.
    """
    defaults = BatchConfig()
    parser = argparse.ArgumentParser(
        description="Rotates every image in a directory on the GPU using CV-CUDA.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--input-dir",
        dest="input_dir",
        default=defaults.input_dir,
        type=str,
        help="The directory scanned recursively for input images.",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        default=defaults.output_dir,
        type=str,
        help="The folder where rotated images and the processing log are stored.",
    )
    parser.add_argument(
        "--extension",
        default=defaults.extension,
        type=str,
        help="The extension of the files to process. A leading dot is added if missing.",
    )
    _add_common_args(parser, defaults.interpolation)
    return parser


def get_single_arg_parser():
    """
    Prepares and returns the argparse parser of the single file rotation tool.
    """
    parser = argparse.ArgumentParser(
        description="Rotates a single image on the GPU using CV-CUDA.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--input",
        dest="input_path",
        default=None,
        type=str,
        help="The image to rotate. Defaults to the bundled %s." % DEFAULT_SAMPLE_IMAGE,
    )
    parser.add_argument(
        "--output",
        dest="output_path",
        default=None,
        type=str,
        help="Where to save the result. Defaults to the input path with "
        "_rotate.pgm in place of .pgm.",
    )
    _add_common_args(parser, "nearest")
    return parser


def _validate_common(parser, args):
    if not math.isfinite(args.angle):
        parser.error("angle must be a finite number.")
    if args.device_id < 0:
        parser.error("device_id must be a value >=0.")


def parse_validate_batch_args(parser, argv=None) -> BatchConfig:
    """
    Parses and validates the batch tool arguments.
    """
    args = parser.parse_args(argv)
    _validate_common(parser, args)

    if not args.extension.strip().strip("."):
        parser.error("extension must not be empty.")

    return BatchConfig(
        input_dir=args.input_dir,
        output_dir=args.output_dir,
        angle=args.angle,
        extension=normalize_extension(args.extension),
        interpolation=args.interpolation,
        device_id=args.device_id,
        log_level=args.log_level,
    )


def parse_validate_single_args(parser, argv=None) -> SingleConfig:
    """
    Parses and validates the single file tool arguments. The input falls back
    to the bundled sample image found through `find_file_path`.
    """
    args = parser.parse_args(argv)
    _validate_common(parser, args)

    input_path = args.input_path
    output_path = args.output_path
    if input_path is None:
        input_path = find_file_path(DEFAULT_SAMPLE_IMAGE)
        if input_path is None:
            parser.error("Unable to locate the default input %s." % DEFAULT_SAMPLE_IMAGE)
        # The bundled sample may live inside the installed package, write
        # the result to the working directory instead.
        if output_path is None:
            output_path = default_single_output(os.path.basename(input_path))

    if output_path is None:
        output_path = default_single_output(input_path)

    return SingleConfig(
        input_path=input_path,
        output_path=output_path,
        angle=args.angle,
        interpolation=args.interpolation,
        device_id=args.device_id,
        log_level=args.log_level,
    )


def setup_logging(log_level):
    logging.basicConfig(
        format="[%(name)s:%(lineno)d] %(asctime)s %(levelname)-6s %(message)s",
        level=getattr(logging, log_level.upper()),
        datefmt="%Y-%m-%d %H:%M:%S",
    )
