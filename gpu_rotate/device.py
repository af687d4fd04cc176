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
device

CUDA device selection and device side image buffers.
"""

# NOTE: One must import PyCuda driver first, before CVCUDA otherwise
# things may throw unexpected errors.
import pycuda.driver as cuda

import logging
from contextlib import contextmanager
import cupy as cp
import numpy as np
import cvcuda

from .errors import DeviceError
from .images import HostImage

logger = logging.getLogger(__name__)

MIN_COMPUTE_CAPABILITY = (3, 5)


def _format_cuda_version(version):
    # CUDA encodes versions as 1000 * major + 10 * minor
    return "%d.%d" % (version // 1000, (version % 100) // 10)


def device_info(device_id):
    """
    Collects version and capability information for a CUDA device.
    :param device_id: The GPU device to query.
    :returns: A dictionary with the library, driver and runtime versions, the
     device name and its compute capability.
    """
    try:
        cuda.init()
        if device_id < 0 or device_id >= cuda.Device.count():
            raise DeviceError(
                "device_id must be a valid value from 0 to %d."
                % (cuda.Device.count() - 1)
            )
        device = cuda.Device(device_id)
        info = {
            "cvcuda_version": cvcuda.__version__,
            "driver_version": _format_cuda_version(cuda.get_driver_version()),
            "runtime_version": _format_cuda_version(
                cp.cuda.runtime.runtimeGetVersion()
            ),
            "name": device.name(),
            "compute_capability": device.compute_capability(),
        }
    except cuda.Error as e:
        raise DeviceError("Unable to query CUDA device %d: %s" % (device_id, str(e)))

    return info


def log_device_info(device_id):
    """
    Logs the library and CUDA versions and checks that the device meets the
    minimum compute capability. Raises `DeviceError` if it does not.
    """
    info = device_info(device_id)

    logger.info("CV-CUDA Library Version %s" % info["cvcuda_version"])
    logger.info("  CUDA Driver  Version: %s" % info["driver_version"])
    logger.info("  CUDA Runtime Version: %s" % info["runtime_version"])
    logger.info(
        "  Device %d: %s, compute capability %d.%d"
        % ((device_id, info["name"]) + tuple(info["compute_capability"]))
    )

    if tuple(info["compute_capability"]) < MIN_COMPUTE_CAPABILITY:
        raise DeviceError(
            "Device %d has compute capability %d.%d, at least %d.%d is required."
            % (
                (device_id,)
                + tuple(info["compute_capability"])
                + MIN_COMPUTE_CAPABILITY
            )
        )

    return info


@contextmanager
def device_context(device_id):
    """
    Makes the primary context of a CUDA device current for the duration of a
    `with` block.
    """
    try:
        cuda.init()
        cuda_device = cuda.Device(device_id)
        cuda_ctx = cuda_device.retain_primary_context()
        cuda_ctx.push()
    except cuda.Error as e:
        raise DeviceError("Unable to initialize CUDA device %d: %s" % (device_id, str(e)))

    try:
        with cp.cuda.Device(device_id):
            yield cuda_ctx
    finally:
        cuda_ctx.pop()


class DeviceImage:
    """
    An 8 bit single channel image resident in device memory. Use it as a
    context manager: the memory is released when the `with` block exits,
    whether it exits normally or through an exception.
    """

    def __init__(self, data):
        """
        Initializes a new instance of the `DeviceImage` class.
        :param data: A cupy uint8 array laid out as (height, width, 1).
        """
        self.data = data
        self._tensor = None

    @classmethod
    def upload(cls, host_image: HostImage):
        data = cp.asarray(host_image.data[..., np.newaxis])
        return cls(data)

    @classmethod
    def allocate(cls, width, height):
        # Zero filled, pixels outside the rotated footprint stay 0.
        return cls(cp.zeros((height, width, 1), dtype=cp.uint8))

    @property
    def width(self):
        return self.data.shape[1]

    @property
    def height(self):
        return self.data.shape[0]

    @property
    def size(self):
        return self.width, self.height

    @property
    def pitch(self):
        return self.data.strides[0]

    def tensor(self):
        """Wraps the buffer in a CV-CUDA tensor without copying it. The wrapper
        is owned by this image and dropped on release."""
        if self._tensor is None:
            self._tensor = cvcuda.as_tensor(self.data, "HWC")
        return self._tensor

    def download(self):
        return HostImage(np.ascontiguousarray(cp.asnumpy(self.data[..., 0])))

    def release(self):
        # The wrapper keeps the cupy buffer alive, drop it first. Callers
        # that ran an operator on it must also clear the nvcv cache.
        self._tensor = None
        if self.data is not None:
            self.data = None
            cp.get_default_memory_pool().free_all_blocks()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()
        return False
