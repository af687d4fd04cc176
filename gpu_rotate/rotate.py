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

# NOTE: One must import PyCuda driver first, before CVCUDA otherwise
# things may throw unexpected errors.
import pycuda.driver as cuda  # noqa: F401

import logging
import cupy as cp
import cvcuda
import nvcv

from .device import DeviceImage
from .errors import (
    RotationError,
    STATUS_CUDA_ERROR,
    STATUS_INVALID_ARGUMENT,
    status_from_message,
)
from .geometry import RotationParams
from .images import HostImage

logger = logging.getLogger(__name__)

INTERPOLATIONS = {
    "nearest": cvcuda.Interp.NEAREST,
    "linear": cvcuda.Interp.LINEAR,
    "cubic": cvcuda.Interp.CUBIC,
}


def to_cvcuda_interp(interpolation):
    try:
        return INTERPOLATIONS[interpolation]
    except KeyError:
        raise RotationError(
            STATUS_INVALID_ARGUMENT,
            "Unsupported interpolation %s. Use one of: %s."
            % (interpolation, ", ".join(INTERPOLATIONS)),
        )


def rotate_image(
    host_image: HostImage, angle_deg, interpolation="linear", stream=None
) -> HostImage:
    """Rotate a grayscale image on the GPU around its center

    The destination is sized to the bounding box of the rotated image and is
    zero filled, so pixels outside the rotated footprint are 0.

    Args:
        host_image (HostImage): The source image in host memory
        angle_deg (float): Rotation angle in degrees
        interpolation (str): One of "nearest", "linear" or "cubic"
        stream (cvcuda.Stream): Stream to run on. A new one is created if None.

    Returns:
        HostImage: The rotated image copied back to host memory

    Raises:
        RotationError: If the geometry is invalid or the library reports an error
    """
    if host_image.width <= 0 or host_image.height <= 0:
        raise RotationError(
            STATUS_INVALID_ARGUMENT,
            "Invalid source size %dx%d." % (host_image.width, host_image.height),
        )

    interp = to_cvcuda_interp(interpolation)
    params = RotationParams(host_image.size, angle_deg, interpolation)
    logger.debug("%r" % params)

    if stream is None:
        stream = cvcuda.Stream()

    try:
        with DeviceImage.upload(host_image) as src, DeviceImage.allocate(
            *params.dst_size
        ) as dst:
            logger.debug(
                "Source pitch %d, destination pitch %d" % (src.pitch, dst.pitch)
            )
            # The upload and the zero fill run on cupy's stream.
            cp.cuda.Device().synchronize()

            try:
                cvcuda.rotate_into(
                    dst=dst.tensor(),
                    src=src.tensor(),
                    angle_deg=params.angle_deg,
                    shift=list(params.shift),
                    interpolation=interp,
                    stream=stream,
                )
                stream.sync()

                return dst.download()
            finally:
                # Drop the cached wrappers so the buffers can be freed on exit.
                nvcv.clear_cache()

    except cp.cuda.runtime.CUDARuntimeError as e:
        raise RotationError(STATUS_CUDA_ERROR, str(e)) from e
    except RuntimeError as e:
        raise RotationError(status_from_message(e), str(e)) from e


class ImageRotator:
    """
    Callable used by the pipeline to rotate one image. Keeps a single
    CV-CUDA stream for the lifetime of a run.
    """

    def __init__(self):
        self.stream = cvcuda.Stream()

    def __call__(self, host_image, angle_deg, interpolation):
        return rotate_image(host_image, angle_deg, interpolation, stream=self.stream)
