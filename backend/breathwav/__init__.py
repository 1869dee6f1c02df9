"""
Breathing Envelope
==================
Applies a fixed "breathing" volume curve (cosine rise over the first half,
cosine fall over the second half) to mono 16-bit PCM WAV files.

Modules:
- transformations.py: Envelope generation and the 16-bit gain stage
- wav.py: RIFF/WAVE parsing and rewriting with patched size fields
- processor.py: Batch processing of a file list into _breath.wav files
- samples.py: Synthetic test clip generator
- cli.py: Command line entry point
"""

__version__ = "1.0.0"

from .config import DEFAULT_TARGET_FILES, ProcessingConfig
from .errors import (
    MissingDataChunk,
    MissingFmtChunk,
    NotRiffWave,
    UnsupportedBitDepth,
    UnsupportedChannels,
    UnsupportedFormat,
    WavFormatError,
)
from .processor import BreathProcessor, apply_breathing, derive_output_path
from .transformations import Transformations
from .wav import WavContainer, parse_wav, render_breathing, serialize_wav
