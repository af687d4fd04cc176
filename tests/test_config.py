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
import pytest as t

from gpu_rotate.config import (
    BatchConfig,
    PACKAGE_DATA_DIR,
    default_single_output,
    find_file_path,
    get_batch_arg_parser,
    get_single_arg_parser,
    parse_validate_batch_args,
    parse_validate_single_args,
)


def test_batch_defaults():
    config = parse_validate_batch_args(get_batch_arg_parser(), [])
    assert config == BatchConfig(
        input_dir="data/aerials",
        output_dir="output",
        angle=45.0,
        extension=".tiff",
        interpolation="linear",
        device_id=0,
        log_level="info",
    )


def test_batch_flags():
    config = parse_validate_batch_args(
        get_batch_arg_parser(),
        [
            "--input-dir",
            "in",
            "--output-dir",
            "out",
            "--angle",
            "-12.5",
            "--extension",
            "PGM",
            "--interpolation",
            "cubic",
            "-d",
            "1",
            "-ll",
            "debug",
        ],
    )
    assert config.input_dir == "in"
    assert config.output_dir == "out"
    assert config.angle == -12.5
    assert config.extension == ".pgm"
    assert config.interpolation == "cubic"
    assert config.device_id == 1
    assert config.log_level == "debug"


def test_batch_config_is_immutable():
    config = BatchConfig()
    with t.raises(AttributeError):
        config.angle = 10.0


@t.mark.parametrize(
    "argv",
    [
        ["--angle", "nan"],
        ["--angle", "inf"],
        ["--extension", "."],
        ["--device_id", "-1"],
        ["--interpolation", "area"],
    ],
)
def test_batch_invalid_args(argv):
    with t.raises(SystemExit) as e:
        parse_validate_batch_args(get_batch_arg_parser(), argv)
    assert e.value.code == 2


@t.mark.parametrize(
    "input_path, expected",
    [
        ("Lena.pgm", "Lena_rotate.pgm"),
        ("dir/image.pgm", "dir/image_rotate.pgm"),
        ("photo.tiff", "photo.tiff_rotate.pgm"),
        ("IMG.PGM", "IMG_rotate.pgm"),
        ("scan.Pgm", "scan_rotate.pgm"),
    ],
)
def test_default_single_output(input_path, expected):
    assert default_single_output(input_path) == expected


def test_single_explicit_paths(tmp_path):
    src = os.path.join(tmp_path, "in.pgm")
    config = parse_validate_single_args(get_single_arg_parser(), ["--input", src])
    assert config.input_path == src
    assert config.output_path == os.path.join(tmp_path, "in_rotate.pgm")
    assert config.interpolation == "nearest"
    assert config.angle == 45.0

    config = parse_validate_single_args(
        get_single_arg_parser(), ["--input", src, "--output", "x.pgm"]
    )
    assert config.output_path == "x.pgm"


def test_single_default_input(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = parse_validate_single_args(get_single_arg_parser(), [])
    assert os.path.samefile(
        config.input_path, os.path.join(PACKAGE_DATA_DIR, "sample.pgm")
    )
    assert config.output_path == "sample_rotate.pgm"


def test_find_file_path(tmp_path):
    os.makedirs(os.path.join(tmp_path, "b"))
    target = os.path.join(tmp_path, "b", "img.pgm")
    with open(target, "w") as f:
        f.write("")

    found = find_file_path(
        "img.pgm", [os.path.join(tmp_path, "a"), os.path.join(tmp_path, "b")]
    )
    assert found == target
    assert find_file_path("other.pgm", [os.path.join(tmp_path, "b")]) is None
    assert find_file_path(target) == target
