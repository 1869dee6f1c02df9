"""
Breathing Processor (processor.py)
==================================
Applies the breathing envelope to a list of WAV files and writes each
result beside its source as <name>_breath<ext>.

Usage:
    from breathwav.processor import apply_breathing
    apply_breathing(["sounds/brown_noise.wav"])
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .config import OUTPUT_SUFFIX, ProcessingConfig
from .errors import WavFormatError
from .transformations import Transformations
from .wav import parse_wav, serialize_wav

logger = logging.getLogger(__name__)


@dataclass
class ProcessingResult:
    """Outcome of processing a single file."""
    input_path: Path
    status: str  # 'written', 'skipped' or 'failed'
    output_path: Optional[Path] = None
    error: Optional[str] = None
    sample_count: int = 0
    sample_rate: int = 0


def derive_output_path(path, suffix: str = OUTPUT_SUFFIX) -> Path:
    """sounds/brown_noise.wav -> sounds/brown_noise_breath.wav"""
    path = Path(path)
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")


def write_atomic(path: Path, data: bytes) -> None:
    """Write to a temp file in the target directory, then rename over the target."""
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # mkstemp creates 0600 files
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class BreathProcessor:
    """
    Runs the breathing envelope over a list of files.

    Files are independent: each one is read whole, transformed and written
    before the next is opened. Missing files are skipped with a warning.
    Malformed files are logged and counted as failed unless strict mode is
    on, in which case the first one aborts the run.
    """

    def __init__(self, config: Optional[ProcessingConfig] = None):
        self.config = config or ProcessingConfig()

        # Processing statistics
        self.processed_count = 0
        self.skipped_count = 0
        self.failed_count = 0

    def process_files(self, paths: Optional[List[str]] = None) -> List[ProcessingResult]:
        """
        Process every path in order.

        Args:
            paths: Files to process (default: the configured list)

        Returns:
            One ProcessingResult per input path
        """
        if paths is None:
            paths = self.config.files

        logger.info("Applying breathing envelope (rise / fall)...")

        results = []
        for path in paths:
            results.append(self.process_file(path))

        logger.info(
            f"Done. Written: {self.processed_count}, "
            f"skipped: {self.skipped_count}, failed: {self.failed_count}"
        )
        return results

    def process_file(self, path) -> ProcessingResult:
        """Process a single file and write its _breath counterpart."""
        input_path = Path(path)

        if not input_path.is_file():
            logger.warning(f"Skip: {input_path} (not found)")
            self.skipped_count += 1
            return ProcessingResult(input_path=input_path, status="skipped")

        data = input_path.read_bytes()

        try:
            container = parse_wav(data, self.config.chunk_search)
        except WavFormatError as e:
            if self.config.strict:
                raise
            logger.error(f"Failed: {input_path} ({e})")
            self.failed_count += 1
            return ProcessingResult(input_path=input_path, status="failed", error=str(e))

        envelope = Transformations.breathing_envelope(
            container.sample_count, container.sample_rate
        )
        processed = Transformations.apply_envelope(container.samples, envelope)
        logger.debug(
            f"  {input_path.name}: {container.sample_count} samples @ {container.sample_rate}Hz, "
            f"peak {Transformations.peak_level(container.samples):.3f} -> "
            f"{Transformations.peak_level(processed):.3f}"
        )

        output_path = derive_output_path(input_path, self.config.suffix)
        write_atomic(output_path, serialize_wav(container, processed.astype("<i2").tobytes()))

        logger.info(f"✓ {output_path}")
        self.processed_count += 1
        return ProcessingResult(
            input_path=input_path,
            status="written",
            output_path=output_path,
            sample_count=container.sample_count,
            sample_rate=container.sample_rate,
        )


def apply_breathing(
    paths: Optional[List[str]] = None,
    strict: bool = False,
    chunk_search: str = "walk"
) -> Tuple[int, int, int]:
    """
    Apply the breathing envelope to a list of files.

    Args:
        paths: Files to process (default: DEFAULT_TARGET_FILES)
        strict: Abort on the first malformed file instead of continuing
        chunk_search: 'walk' or 'search' chunk location

    Returns:
        Tuple of (processed_count, skipped_count, failed_count)
    """
    config = ProcessingConfig(strict=strict, chunk_search=chunk_search)
    if paths is not None:
        config.files = list(paths)

    processor = BreathProcessor(config)
    processor.process_files()

    return processor.processed_count, processor.skipped_count, processor.failed_count
