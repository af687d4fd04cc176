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
images

Host side image buffers and their disk I/O. Pillow reads and writes
pgm, ppm, tiff, png, bmp and jpeg files. Every image is converted to
8 bit single channel on load.
"""

import logging
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

# Pillow modes with more than 8 bits per sample. Narrowing them would clip.
WIDE_MODES = {"I", "F"}


class HostImage:
    """
    An 8 bit grayscale image resident in host memory.
    """

    def __init__(self, data: np.ndarray):
        """
        Initializes a new instance of the `HostImage` class.
        :param data: A 2D uint8 numpy array laid out as (height, width).
        """
        if data.ndim == 3 and data.shape[-1] == 1:
            data = data[..., 0]
        if data.ndim != 2:
            raise ValueError(
                "HostImage expects a (height, width) array, got shape %s."
                % str(data.shape)
            )
        if data.dtype != np.uint8:
            raise TypeError("HostImage expects uint8 data, got %s." % str(data.dtype))
        self.data = data

    @classmethod
    def empty(cls, width, height):
        return cls(np.zeros((height, width), dtype=np.uint8))

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
        """Byte offset between the start of two consecutive rows."""
        return self.data.strides[0]

    def __repr__(self):
        return "HostImage(width=%d, height=%d, pitch=%d)" % (
            self.width,
            self.height,
            self.pitch,
        )


def load_image(path):
    """Load an image file into host memory as 8 bit grayscale

    Args:
        path (str): Path to the image file

    Returns:
        HostImage: The loaded image

    Raises:
        OSError: If the file cannot be opened or decoded, or holds more than
         8 bits per sample
    """
    with Image.open(path) as pil_img:
        if pil_img.mode in WIDE_MODES or pil_img.mode.startswith("I;16"):
            raise OSError(
                "%s is not an 8 bit image (mode %s)." % (path, pil_img.mode)
            )
        if pil_img.mode != "L":
            logger.debug("Converting %s from mode %s to L" % (path, pil_img.mode))
            pil_img = pil_img.convert("L")
        data = np.array(pil_img, dtype=np.uint8)

    return HostImage(np.ascontiguousarray(data))


def save_image(path, image: HostImage):
    """Write a host image to disk. The format follows the file extension.

    Raises:
        OSError: If the file cannot be written
    """
    try:
        Image.fromarray(image.data).save(path)
    except ValueError as e:
        # Pillow reports unknown extensions as ValueError
        raise OSError("Unable to save %s: %s" % (path, str(e))) from e
