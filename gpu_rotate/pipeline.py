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
pipeline

The per image load -> rotate -> save pipeline and the batch loop built on
top of it. The GPU work is delegated to a rotator callable with the
signature `rotator(host_image, angle_deg, interpolation) -> HostImage`,
normally `gpu_rotate.rotate.ImageRotator`.
"""

import os
import enum
import logging
from datetime import datetime
from typing import List, NamedTuple, Optional

from .config import BatchConfig
from .errors import RotationError
from .images import load_image, save_image
from .perf_utils import RotatePerf
from .scanner import find_image_files

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = "_rotated"
LOG_FILENAME = "processing_log.txt"
SEPARATOR = "=" * 50


class Outcome(enum.Enum):
    SUCCESS = "success"
    LIBRARY_ERROR = "library_error"
    IO_ERROR = "io_error"
    UNKNOWN_ERROR = "unknown_error"


class ImageResult(NamedTuple):
    input_path: str
    output_path: str
    outcome: Outcome
    detail: Optional[str] = None
    elapsed_ms: float = 0.0

    @property
    def ok(self):
        return self.outcome is Outcome.SUCCESS


class BatchSummary(NamedTuple):
    config: BatchConfig
    extension: str
    image_files: List[str]
    results: List[ImageResult]
    total_ms: float

    @property
    def success_count(self):
        return sum(1 for r in self.results if r.ok)

    @property
    def fail_count(self):
        return sum(1 for r in self.results if not r.ok)

    @property
    def average_ms(self):
        if not self.image_files:
            return 0
        return int(self.total_ms) // len(self.image_files)


def output_path_for(input_path, output_dir, suffix=OUTPUT_SUFFIX):
    """Build the output path: <output_dir>/<stem><suffix><ext>"""
    stem, ext = os.path.splitext(os.path.basename(input_path))
    return os.path.join(output_dir, stem + suffix + ext)


def process_image(
    input_path, output_path, angle_deg, interpolation, rotator
) -> ImageResult:
    """Load, rotate and save a single image

    Per image failures never propagate. They are logged and reported through
    the returned outcome.

    Args:
        input_path (str): The image to rotate
        output_path (str): Where to save the result
        angle_deg (float): Rotation angle in degrees
        interpolation (str): Interpolation mode name
        rotator (callable): Does the device side work, see module docstring

    Returns:
        ImageResult: The tagged outcome of this image
    """
    logger.info("Processing: %s" % input_path)

    try:
        host_src = load_image(input_path)
        logger.debug("Loaded %r" % host_src)

        host_dst = rotator(host_src, angle_deg, interpolation)

        save_image(output_path, host_dst)
        logger.info("  Saved: %s (%dx%d)" % (output_path, host_dst.width, host_dst.height))

        return ImageResult(input_path, output_path, Outcome.SUCCESS)

    except RotationError as e:
        logger.error("  Rotation error [%s]: %s" % (e.status, e.message))
        return ImageResult(input_path, output_path, Outcome.LIBRARY_ERROR, e.status)
    except OSError as e:
        logger.error("  I/O error: %s" % str(e))
        return ImageResult(input_path, output_path, Outcome.IO_ERROR, str(e))
    except Exception as e:
        logger.error("  Unknown error: %s" % str(e))
        return ImageResult(input_path, output_path, Outcome.UNKNOWN_ERROR, str(e))


def log_summary(summary: BatchSummary):
    logger.info(SEPARATOR)
    logger.info("PROCESSING SUMMARY")
    logger.info(SEPARATOR)
    logger.info("Total images processed: %d" % len(summary.image_files))
    logger.info("Successful: %d" % summary.success_count)
    logger.info("Failed: %d" % summary.fail_count)
    logger.info("Total time: %d ms" % int(summary.total_ms))
    logger.info("Average time per image: %d ms" % summary.average_ms)
    logger.info("Output directory: %s" % summary.config.output_dir)
    logger.info(SEPARATOR)


def write_processing_log(log_path, summary: BatchSummary, now=None):
    """
    Writes the plain text processing log. The list of processed files holds
    every discovered file, whether it succeeded or not.
    """
    if now is None:
        now = datetime.now()
    config = summary.config

    lines = [
        "GPU Image Rotation Processing Log",
        "==================================",
        "",
        "Date: %s" % now.strftime("%Y-%m-%d %H:%M:%S"),
        "Input directory: %s" % config.input_dir,
        "Output directory: %s" % config.output_dir,
        "Rotation angle: %g degrees" % config.angle,
        "Interpolation: %s" % config.interpolation,
        "Extension filter: %s" % summary.extension,
        "",
        "Results:",
        "  Total images: %d" % len(summary.image_files),
        "  Successful: %d" % summary.success_count,
        "  Failed: %d" % summary.fail_count,
        "  Total time: %d ms" % int(summary.total_ms),
        "  Average time: %d ms" % summary.average_ms,
        "",
    ]

    failures = [r for r in summary.results if not r.ok]
    if failures:
        lines.append("Failures:")
        for r in failures:
            lines.append("  - %s: %s (%s)" % (r.input_path, r.outcome.value, r.detail))
        lines.append("")

    lines.append("Processed files:")
    for path in summary.image_files:
        lines.append("  - %s" % path)

    with open(log_path, "w") as f:
        f.write("\n".join(lines) + "\n")


def run_batch(config: BatchConfig, rotator, perf=None) -> int:
    """Rotate every matching image of a directory

    Args:
        config (BatchConfig): The batch configuration
        rotator (callable): Does the device side work, see module docstring
        perf (RotatePerf): Timing helper. A new one is created if None.

    Returns:
        int: The process exit code. 0 if every image succeeded, 1 otherwise.
    """
    if perf is None:
        perf = RotatePerf("rotate_batch")

    os.makedirs(config.output_dir, exist_ok=True)

    logger.info("Scanning directory: %s" % config.input_dir)
    logger.info("Looking for files with extension: %s" % config.extension)
    image_files, extension = find_image_files(config.input_dir, config.extension)

    if not image_files:
        logger.error("No supported image files found!")
        return 1

    logger.info("Found %d image(s) to process" % len(image_files))
    logger.info("Rotation angle: %g degrees" % config.angle)

    results = []
    written = {}
    perf.push_range("batch")
    for idx, input_path in enumerate(image_files):
        logger.info("[%d/%d]" % (idx + 1, len(image_files)))
        output_path = output_path_for(input_path, config.output_dir)
        if output_path in written:
            logger.warning(
                "  Output %s of %s overwrites the result of %s"
                % (output_path, input_path, written[output_path])
            )
        written[output_path] = input_path

        perf.push_range("image", batch_idx=idx)
        result = process_image(
            input_path, output_path, config.angle, config.interpolation, rotator
        )
        elapsed_ms = perf.pop_range()
        logger.info("  Time: %d ms" % int(elapsed_ms))

        results.append(result._replace(elapsed_ms=elapsed_ms))
    total_ms = perf.pop_range()
    perf.finalize()

    summary = BatchSummary(config, extension, image_files, results, total_ms)
    log_summary(summary)

    log_path = os.path.join(config.output_dir, LOG_FILENAME)
    try:
        write_processing_log(log_path, summary)
        logger.info("Log file saved: %s" % log_path)
    except OSError as e:
        logger.error("Unable to write log file %s: %s" % (log_path, str(e)))

    return 0 if summary.fail_count == 0 else 1
