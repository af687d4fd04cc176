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
import numpy as np
from PIL import Image

from gpu_rotate.errors import RotationError, STATUS_INVALID_ARGUMENT
from gpu_rotate.geometry import rotate_bound
from gpu_rotate.images import HostImage


def has_cuda_device():
    """True if cupy can see at least one CUDA device."""
    try:
        import cupy as cp

        return cp.cuda.runtime.getDeviceCount() > 0
    except Exception:
        return False


def generate_image(size, rng=None):
    """Generate a (height, width) uint8 image

    Args:
        size (tuple): (width, height) of the image
        rng (numpy random Generator): To fill the image with random values.
         A horizontal gradient is produced if None.

    Returns:
        numpy.array: The generated image
    """
    width, height = size
    if rng is None:
        row = (np.arange(width) * 255 // max(width - 1, 1)).astype(np.uint8)
        return np.tile(row, (height, 1))
    return rng.integers(256, size=(height, width), dtype=np.uint8)


def write_image(path, data):
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    Image.fromarray(data).save(path)
    return str(path)


class FakeRotator:
    """
    A host only stand in for gpu_rotate.rotate.ImageRotator. Produces an image
    of the bounding box size, copies the source unchanged for 0 degrees and
    raises RotationError for the files named in fail_on.
    """

    def __init__(self, fail_on=(), raise_on=None):
        self.fail_on = set(fail_on)
        self.raise_on = raise_on or {}
        self.calls = []

    def __call__(self, host_image, angle_deg, interpolation):
        self.calls.append((host_image.size, angle_deg, interpolation))
        key = int(host_image.data[0, 0])
        if key in self.fail_on:
            raise RotationError(STATUS_INVALID_ARGUMENT, "forced failure")
        if key in self.raise_on:
            raise self.raise_on[key]

        if angle_deg == 0:
            return HostImage(host_image.data.copy())
        width, height = rotate_bound(host_image.width, host_image.height, angle_deg)
        return HostImage.empty(width, height)
