"""
Error taxonomy for malformed WAV input.

Every validation step in the parser has its own exception class so callers
can tell a stereo file apart from a truncated one without parsing messages.
"""


class WavFormatError(ValueError):
    """Base class for input that is not a supported RIFF/WAVE PCM file."""


class NotRiffWave(WavFormatError):
    """Missing the RIFF/WAVE magic bytes."""


class MissingFmtChunk(WavFormatError):
    """No usable 'fmt ' chunk."""


class UnsupportedFormat(WavFormatError):
    """Audio format code is not linear PCM (1)."""


class UnsupportedChannels(WavFormatError):
    """Only mono input is supported."""


class UnsupportedBitDepth(WavFormatError):
    """Only 16-bit samples are supported."""


class MissingDataChunk(WavFormatError):
    """No usable 'data' chunk."""
