"""
Minimal RIFF/WAVE transcoder for mono 16-bit PCM.

Splits a file into the verbatim header (everything up to and including the
data chunk header) and the sample payload, then rebuilds a file from a new
payload with the RIFF and data size fields patched.
"""

import logging
import struct
from dataclasses import dataclass

import numpy as np

from .errors import (
    MissingDataChunk,
    MissingFmtChunk,
    NotRiffWave,
    UnsupportedBitDepth,
    UnsupportedChannels,
    UnsupportedFormat,
)
from .transformations import Transformations

logger = logging.getLogger(__name__)

CHUNK_STRATEGIES = ("walk", "search")

RIFF_HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8

# Offsets relative to the 'fmt ' tag
FMT_AUDIO_FORMAT = 8
FMT_CHANNELS = 10
FMT_SAMPLE_RATE = 12
FMT_BITS_PER_SAMPLE = 22

PCM_FORMAT = 1


@dataclass(frozen=True)
class WavContainer:
    """A parsed mono 16-bit PCM file."""
    sample_rate: int
    channels: int
    bits_per_sample: int
    audio_format: int
    header: bytes
    payload: bytes
    data_offset: int

    @property
    def sample_count(self) -> int:
        return len(self.payload) // 2

    @property
    def duration_seconds(self) -> float:
        return self.sample_count / self.sample_rate

    @property
    def samples(self) -> np.ndarray:
        if not self.payload:
            return np.zeros(0, dtype="<i2")
        return np.frombuffer(self.payload, dtype="<i2")


def _walk_chunks(data: bytes, tag: bytes) -> int:
    """Follow declared chunk sizes from the first sub-chunk. Returns -1 if not found."""
    offset = RIFF_HEADER_SIZE
    while offset + CHUNK_HEADER_SIZE <= len(data):
        if data[offset:offset + 4] == tag:
            return offset
        size = struct.unpack_from("<I", data, offset + 4)[0]
        # Odd-sized chunks carry a pad byte
        offset += CHUNK_HEADER_SIZE + size + (size & 1)
    return -1


def find_chunk(data: bytes, tag: bytes, strategy: str = "walk") -> int:
    """
    Locate a sub-chunk tag and return its byte offset, or -1.

    'search' scans for the first literal occurrence of the tag, which can be
    fooled by the same four bytes inside an earlier chunk body. 'walk' follows
    chunk sizes and falls back to the literal scan when the walk comes up
    empty (for instance when a chunk size field is corrupt).
    """
    if strategy not in CHUNK_STRATEGIES:
        raise ValueError(f"Unknown chunk strategy: {strategy}")

    if strategy == "walk":
        offset = _walk_chunks(data, tag)
        if offset >= 0:
            return offset
        logger.debug(f"Chunk walk did not find {tag!r}, falling back to pattern search")

    return data.find(tag)


def parse_wav(data: bytes, chunk_search: str = "walk") -> WavContainer:
    """
    Parse and validate a RIFF/WAVE buffer.

    Raises the matching WavFormatError subclass on the first failed check:
    magic bytes, fmt chunk, format code, channel count, bit depth, data chunk.
    """
    if len(data) < RIFF_HEADER_SIZE or data[0:4] != b"RIFF" or data[8:12] != b"WAVE":
        raise NotRiffWave("Not a RIFF/WAVE file")

    fmt_index = find_chunk(data, b"fmt ", chunk_search)
    if fmt_index < 0:
        raise MissingFmtChunk("fmt chunk not found")
    if fmt_index + FMT_BITS_PER_SAMPLE + 2 > len(data):
        raise MissingFmtChunk(f"fmt chunk at offset {fmt_index} is truncated")

    audio_format = struct.unpack_from("<H", data, fmt_index + FMT_AUDIO_FORMAT)[0]
    channels = struct.unpack_from("<H", data, fmt_index + FMT_CHANNELS)[0]
    sample_rate = struct.unpack_from("<I", data, fmt_index + FMT_SAMPLE_RATE)[0]
    bits_per_sample = struct.unpack_from("<H", data, fmt_index + FMT_BITS_PER_SAMPLE)[0]

    if audio_format != PCM_FORMAT:
        raise UnsupportedFormat(f"Only PCM supported (format code {audio_format})")
    if channels != 1:
        raise UnsupportedChannels(f"Only mono supported ({channels} channels)")
    if bits_per_sample != 16:
        raise UnsupportedBitDepth(f"Only 16-bit supported ({bits_per_sample}-bit)")
    if sample_rate == 0:
        raise UnsupportedFormat("Sample rate is zero")

    data_index = find_chunk(data, b"data", chunk_search)
    if data_index < 0:
        raise MissingDataChunk("data chunk not found")
    if data_index + CHUNK_HEADER_SIZE > len(data):
        raise MissingDataChunk(f"data chunk header at offset {data_index} is truncated")

    declared_size = struct.unpack_from("<I", data, data_index + 4)[0]
    data_start = data_index + CHUNK_HEADER_SIZE
    payload = data[data_start:data_start + declared_size]

    if len(payload) < declared_size:
        logger.warning(
            f"data chunk declares {declared_size} bytes but only {len(payload)} are present"
        )
    if len(payload) % 2:
        logger.warning("data chunk has an odd byte count, dropping the trailing byte")
        payload = payload[:-1]

    return WavContainer(
        sample_rate=sample_rate,
        channels=channels,
        bits_per_sample=bits_per_sample,
        audio_format=audio_format,
        header=bytes(data[:data_start]),
        payload=bytes(payload),
        data_offset=data_index,
    )


def serialize_wav(container: WavContainer, payload: bytes) -> bytes:
    """
    Rebuild a file from the container header and a new payload.

    Only the RIFF size (offset 4) and the data chunk size are rewritten; every
    other header byte is copied as-is.
    """
    buffer = bytearray(container.header)
    buffer.extend(payload)

    struct.pack_into("<I", buffer, 4, len(buffer) - 8)
    struct.pack_into("<I", buffer, container.data_offset + 4, len(payload))

    return bytes(buffer)


def render_breathing(data: bytes, chunk_search: str = "walk") -> bytes:
    """Parse a WAV buffer, apply the breathing envelope and return the new file bytes."""
    container = parse_wav(data, chunk_search)
    envelope = Transformations.breathing_envelope(container.sample_count, container.sample_rate)
    processed = Transformations.apply_envelope(container.samples, envelope)
    return serialize_wav(container, processed.astype("<i2").tobytes())
