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
backend

Loads the GPU side of the tools on first use. The command line entry points
import this instead of the CUDA modules so that a missing or broken CUDA
stack is reported as a device error rather than an import failure.
"""

from typing import Any, Callable, NamedTuple

from .errors import DeviceError


class GpuBackend(NamedTuple):
    log_device_info: Callable
    device_context: Callable
    rotator_factory: Callable[[], Any]


def load_gpu_backend() -> GpuBackend:
    try:
        from .device import device_context, log_device_info
        from .rotate import ImageRotator
    except (ImportError, OSError) as e:
        raise DeviceError("Unable to load the CUDA libraries: %s" % str(e)) from e

    return GpuBackend(log_device_info, device_context, ImageRotator)
