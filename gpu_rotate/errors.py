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
errors

Exception types raised by the rotation tools.
"""

STATUS_INVALID_ARGUMENT = "NVCV_ERROR_INVALID_ARGUMENT"
STATUS_CUDA_ERROR = "CUDA_ERROR"
STATUS_UNKNOWN = "NVCV_ERROR_INTERNAL"


class RotateError(Exception):
    pass


class DeviceError(RotateError):
    """
    Raised when the CUDA device cannot be selected or does not meet the
    minimum requirements. Always fatal.
    """

    pass


class RotationError(RotateError):
    """
    Raised when the GPU library reports a non-success status while rotating
    a single image.
    """

    def __init__(self, status, message):
        """
        Initializes a new instance of the `RotationError` class.
        :param status: The status code reported by the library, e.g. NVCV_ERROR_INVALID_ARGUMENT.
        :param message: A human readable description of the failure.
        """
        super().__init__("%s: %s" % (status, message))
        self.status = status
        self.message = message


def status_from_message(message):
    """
    Extracts the NVCV status prefix from an error message raised by the
    library, e.g. "NVCV_ERROR_INVALID_ARGUMENT: ..." -> "NVCV_ERROR_INVALID_ARGUMENT".
    """
    head = str(message).split(":", 1)[0].strip()
    if head.startswith("NVCV_"):
        return head
    return STATUS_UNKNOWN
