"""
Processing configuration for the breathing processor.
"""

from dataclasses import dataclass, field
from typing import List

# Target files, relative to the working directory
DEFAULT_TARGET_FILES = [
    "sounds/brown_noise.wav",
    "sounds/nature_bonfire.wav",
    "sounds/nature_rain.wav",
    "sounds/nature_sea.wav",
]

OUTPUT_SUFFIX = "_breath"


@dataclass
class ProcessingConfig:
    """Options for one processing run."""
    files: List[str] = field(default_factory=lambda: list(DEFAULT_TARGET_FILES))
    suffix: str = OUTPUT_SUFFIX
    strict: bool = False  # abort the batch on the first malformed file
    chunk_search: str = "walk"
