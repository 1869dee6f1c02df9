import struct

import numpy as np
import pytest


def build_wav(
    samples=(),
    sample_rate=8000,
    channels=1,
    bits_per_sample=16,
    audio_format=1,
    chunks_before_data=(),
    declared_data_size=None,
    payload=None,
    trailing=b"",
):
    """Assemble a RIFF/WAVE buffer byte by byte."""
    if payload is None:
        payload = np.asarray(samples, dtype="<i2").tobytes()
    block_align = channels * bits_per_sample // 8
    fmt_body = struct.pack(
        "<HHIIHH",
        audio_format,
        channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        bits_per_sample,
    )
    body = b"WAVE" + b"fmt " + struct.pack("<I", len(fmt_body)) + fmt_body
    for tag, chunk_body in chunks_before_data:
        body += tag + struct.pack("<I", len(chunk_body)) + chunk_body
        if len(chunk_body) % 2:
            body += b"\x00"
    size = len(payload) if declared_data_size is None else declared_data_size
    body += b"data" + struct.pack("<I", size) + payload + trailing
    return b"RIFF" + struct.pack("<I", len(body)) + body


@pytest.fixture
def make_wav():
    return build_wav


@pytest.fixture
def write_wav(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path
    return _write
