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
Single file rotation tool: rotates one image on the GPU with nearest
neighbor interpolation and saves it next to the input as <name>_rotate.pgm.
"""

import sys
import logging

from .config import get_single_arg_parser, parse_validate_single_args, setup_logging
from .backend import load_gpu_backend
from .errors import DeviceError
from .pipeline import process_image

logger = logging.getLogger("gpu_rotate.single")


def run_single(config, rotator):
    """
    Rotates the configured image. Unlike the batch tool any failure is fatal.
    :returns: The process exit code.
    """
    logger.info("Input: %s" % config.input_path)
    logger.info("Rotation angle: %g degrees" % config.angle)

    result = process_image(
        config.input_path,
        config.output_path,
        config.angle,
        config.interpolation,
        rotator,
    )
    if not result.ok:
        logger.error(
            "Unable to rotate %s (%s: %s)"
            % (config.input_path, result.outcome.value, result.detail)
        )
        return 1

    logger.info("Saved image: %s" % config.output_path)
    return 0


def main(argv=None):
    parser = get_single_arg_parser()
    config = parse_validate_single_args(parser, argv)
    setup_logging(config.log_level)

    logger.info("%s Starting..." % parser.prog)

    try:
        backend = load_gpu_backend()
        backend.log_device_info(config.device_id)
        with backend.device_context(config.device_id):
            return run_single(config, backend.rotator_factory())

    except DeviceError as e:
        logger.error("Device error: %s" % str(e))
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
