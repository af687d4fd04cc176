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
import time
import logging
from collections import deque
import nvtx


class RotatePerf:
    """
    Keeps track of the wall clock time spent in named code ranges. Every range
    is also pushed as an NVTX range so that the same run can be inspected in
    Nsight Systems.

    Ranges nest like directories: pushing "batch" then "image_3" records the
    time under "<obj_name>/batch/image_3".
    """

    def __init__(self, obj_name, domain=None):
        """
        Initializes a new instance of the `RotatePerf` class.
        :param obj_name: The name of the root range.
        :param domain: Name of an NVTX domain under which all ranges are scoped.
        """
        self.obj_name = obj_name
        self.domain = domain
        self.logger = logging.getLogger(__name__)
        self.stack = deque()
        self.stack_path = self.obj_name
        self.timing_info = {}

    def push_range(self, message, color="blue", batch_idx=None):
        """
        Pushes a code range on to the stack.
        :param message: A message associated with the annotated code range.
        :param color: A color associated with the annotated code range.
        :param batch_idx: If given, appended to the message to tell repeated ranges apart.
        """
        if batch_idx is not None:
            message += "_%d" % batch_idx

        nvtx.push_range(message, color, self.domain)

        self.stack.append((message, time.perf_counter()))
        self.stack_path = os.path.join(self.stack_path, message)

    def pop_range(self):
        """
        Pops the innermost range off the stack.
        :returns: The time spent inside the range in milliseconds.
        """
        if not len(self.stack):
            raise ValueError("pop_range called without a matching push_range.")

        _, start = self.stack.pop()
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.timing_info[self.stack_path] = elapsed_ms
        self.stack_path = os.path.dirname(self.stack_path)

        nvtx.pop_range(self.domain)

        return elapsed_ms

    def finalize(self):
        """
        Checks that all ranges were closed and returns the recorded timings.
        """
        if len(self.stack):
            raise ValueError(
                "Unable to finalize timing info. The stack was non empty with %d"
                " item(s) still not popped." % len(self.stack)
            )
        self.logger.debug("Timing info: %s" % self.timing_info)
        return dict(self.timing_info)
