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

import numpy as np
import pytest as t

import util

if not util.has_cuda_device():
    t.skip("A CUDA device is required to run these tests.", allow_module_level=True)

import cupy as cp  # noqa: E402
import cvcuda  # noqa: E402
import nvcv  # noqa: E402
from gpu_rotate.device import DeviceImage, device_info  # noqa: E402
from gpu_rotate.errors import RotationError  # noqa: E402
from gpu_rotate.geometry import rotate_bound  # noqa: E402
from gpu_rotate.images import HostImage  # noqa: E402
from gpu_rotate.rotate import ImageRotator, rotate_image  # noqa: E402

RNG = np.random.default_rng(0)


@t.mark.parametrize("interpolation", ["nearest", "linear", "cubic"])
def test_rotate_zero_degrees_is_identity(interpolation):
    data = util.generate_image((23, 16), rng=RNG)
    out = rotate_image(HostImage(data), 0.0, interpolation)
    assert out.size == (23, 16)
    np.testing.assert_array_equal(out.data, data)


@t.mark.parametrize(
    "size, angle",
    [((64, 48), 45.0), ((64, 48), 90.0), ((31, 17), 30.0), ((16, 16), -60.0)],
)
def test_rotate_output_is_bounding_box(size, angle):
    data = util.generate_image(size, rng=RNG)
    out = rotate_image(HostImage(data), angle, "linear")
    assert out.size == rotate_bound(size[0], size[1], angle)
    assert out.data.dtype == np.uint8


def test_rotate_corners_are_zero_filled():
    data = np.full((32, 32), 200, dtype=np.uint8)
    out = rotate_image(HostImage(data), 45.0, "nearest")
    assert out.data[0, 0] == 0
    assert out.data[-1, -1] == 0
    center = rotate_bound(32, 32, 45.0)
    assert out.data[center[1] // 2, center[0] // 2] == 200


def test_rotate_invalid_interpolation():
    with t.raises(RotationError) as e:
        rotate_image(HostImage.empty(4, 4), 10.0, "area")
    assert e.value.status == "NVCV_ERROR_INVALID_ARGUMENT"


def test_rotate_empty_image():
    with t.raises(RotationError):
        rotate_image(HostImage(np.zeros((0, 4), dtype=np.uint8)), 10.0, "linear")


def test_image_rotator_reuses_stream():
    rotator = ImageRotator()
    data = util.generate_image((12, 10))
    for angle in (0.0, 15.0, 270.0):
        out = rotator(HostImage(data), angle, "linear")
        assert out.size == rotate_bound(12, 10, angle)


def test_device_image_upload_download():
    host = HostImage(util.generate_image((9, 5)))
    with DeviceImage.upload(host) as dev:
        assert dev.size == (9, 5)
        assert dev.pitch >= 9
        assert dev.tensor() is dev.tensor()
        np.testing.assert_array_equal(dev.download().data, host.data)
    assert dev.data is None


def flush_gcbag():
    # Wrappers cleared from the cache are destroyed once the next operator runs.
    workstream = cvcuda.Stream()
    with workstream:
        cvcuda.median_blur(
            nvcv.Tensor((1, 16, 16, 1), nvcv.Type.U8, nvcv.TensorLayout.NHWC),
            [3, 3],
            stream=workstream,
        )
        workstream.sync()
    nvcv.cuda.internal.syncAuxStream()


@t.mark.parametrize("angle", [0.0, 45.0])
def test_rotate_releases_device_memory(angle):
    pool = cp.get_default_memory_pool()
    flush_gcbag()
    pool.free_all_blocks()
    start = pool.used_bytes()

    data = util.generate_image((256, 128), rng=RNG)
    for _ in range(3):
        rotate_image(HostImage(data), angle, "linear")

    flush_gcbag()
    pool.free_all_blocks()
    assert pool.used_bytes() == start


def test_device_image_released_on_error():
    with t.raises(KeyError):
        with DeviceImage.allocate(4, 4) as dev:
            raise KeyError("x")
    assert dev.data is None


def test_device_info():
    info = device_info(0)
    assert len(info["compute_capability"]) == 2
    assert info["cvcuda_version"]
