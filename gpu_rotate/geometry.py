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

import math

# Extents are rounded to this many decimals before taking the ceiling so that
# cos/sin noise at multiples of 90 degrees does not grow the box by a pixel.
EXTENT_DECIMALS = 6


def _rotation_matrix(angle_deg):
    # Forward transform used by cvcuda.rotate: dst = R * src + shift
    angle_rad = math.radians(angle_deg)
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)
    return ((cos_a, sin_a), (-sin_a, cos_a))


def rotate_bound(width, height, angle_deg):
    """Compute the smallest axis aligned box holding a rotated rectangle

    Args:
        width (int): Source width in pixels, must be > 0
        height (int): Source height in pixels, must be > 0
        angle_deg (float): Rotation angle in degrees

    Returns:
        tuple: (width, height) of the bounding box, each at least 1
    """
    if width <= 0 or height <= 0:
        raise ValueError(
            "Image size must be positive, got %dx%d." % (width, height)
        )

    (m00, m01), (m10, m11) = _rotation_matrix(angle_deg)
    half_w = width / 2.0
    half_h = height / 2.0

    xs = []
    ys = []
    for dx, dy in (
        (-half_w, -half_h),
        (half_w, -half_h),
        (half_w, half_h),
        (-half_w, half_h),
    ):
        xs.append(m00 * dx + m01 * dy)
        ys.append(m10 * dx + m11 * dy)

    bound_w = math.ceil(round(max(xs) - min(xs), EXTENT_DECIMALS))
    bound_h = math.ceil(round(max(ys) - min(ys), EXTENT_DECIMALS))

    return max(bound_w, 1), max(bound_h, 1)


def rotation_center(width, height):
    """The geometric center of an image, truncated to integer pixels."""
    return width // 2, height // 2


def center_shift(src_size, dst_size, angle_deg):
    """Compute the shift that places the rotated source center at the
    destination center

    Args:
        src_size (tuple): (width, height) of the source image
        dst_size (tuple): (width, height) of the destination image
        angle_deg (float): Rotation angle in degrees

    Returns:
        tuple: (shift_x, shift_y) to hand over to the rotate operator
    """
    (m00, m01), (m10, m11) = _rotation_matrix(angle_deg)
    src_cx, src_cy = rotation_center(*src_size)
    dst_cx, dst_cy = rotation_center(*dst_size)

    shift_x = dst_cx - (m00 * src_cx + m01 * src_cy)
    shift_y = dst_cy - (m10 * src_cx + m11 * src_cy)
    return shift_x, shift_y


class RotationParams:
    """
    The per image parameters of one rotate call. Built fresh for every image,
    never shared between images.
    """

    def __init__(self, src_size, angle_deg, interpolation):
        """
        Initializes a new instance of the `RotationParams` class.
        :param src_size: (width, height) of the source image.
        :param angle_deg: Rotation angle in degrees.
        :param interpolation: Name of the interpolation mode, e.g. "linear".
        """
        self.src_size = tuple(src_size)
        self.angle_deg = angle_deg
        self.interpolation = interpolation
        self.center = rotation_center(*self.src_size)
        self.dst_size = rotate_bound(self.src_size[0], self.src_size[1], angle_deg)
        self.shift = center_shift(self.src_size, self.dst_size, angle_deg)

    def __repr__(self):
        return (
            "RotationParams(src_size=%s, dst_size=%s, angle_deg=%s, center=%s, "
            "shift=(%.3f, %.3f), interpolation=%s)"
            % (
                self.src_size,
                self.dst_size,
                self.angle_deg,
                self.center,
                self.shift[0],
                self.shift[1],
                self.interpolation,
            )
        )
