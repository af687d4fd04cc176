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
Batch rotation tool: rotates every image found under a directory on the GPU,
writes <stem>_rotated<ext> files and a processing_log.txt summary.
"""

import sys
import logging

from .config import get_batch_arg_parser, parse_validate_batch_args, setup_logging
from .backend import load_gpu_backend
from .errors import DeviceError, RotationError
from .perf_utils import RotatePerf
from .pipeline import run_batch

logger = logging.getLogger("gpu_rotate.batch")


def main(argv=None):
    parser = get_batch_arg_parser()
    config = parse_validate_batch_args(parser, argv)
    setup_logging(config.log_level)

    logger.info("%s Starting..." % parser.prog)

    try:
        backend = load_gpu_backend()
        backend.log_device_info(config.device_id)
        with backend.device_context(config.device_id):
            rotator = backend.rotator_factory()
            return run_batch(config, rotator, RotatePerf("rotate_batch"))

    except DeviceError as e:
        logger.error("Device error: %s" % str(e))
        logger.error("Aborting.")
        return 1
    except RotationError as e:
        logger.error("Program error! The following exception occurred: %s" % str(e))
        logger.error("Aborting.")
        return 1
    except Exception as e:
        logger.error(
            "Program error! An unexpected exception occurred: %s: %s"
            % (type(e).__name__, str(e))
        )
        logger.error("Aborting.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
