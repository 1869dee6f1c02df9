import numpy as np
import pytest

from breathwav.transformations import Transformations


ENVELOPE_CASES = [(80000, 8000), (44100, 44100), (1001, 100), (16, 4)]


def test_empty_envelope():
    envelope = Transformations.breathing_envelope(0, 8000)
    assert envelope.shape == (0,)


def test_envelope_rejects_bad_rate():
    with pytest.raises(ValueError):
        Transformations.breathing_envelope(100, 0)
    with pytest.raises(ValueError):
        Transformations.breathing_envelope(100, -8000)


@pytest.mark.parametrize("total, rate", ENVELOPE_CASES)
def test_envelope_endpoints_and_midpoint(total, rate):
    envelope = Transformations.breathing_envelope(total, rate)
    assert len(envelope) == total
    assert envelope.dtype == np.float32
    assert envelope[0] == pytest.approx(0.0, abs=1e-12)
    assert envelope[-1] == pytest.approx(0.0, abs=0.05)
    assert envelope[total // 2] == pytest.approx(1.0, abs=1e-3)


@pytest.mark.parametrize("total, rate", ENVELOPE_CASES)
def test_envelope_bounds_and_monotonicity(total, rate):
    envelope = Transformations.breathing_envelope(total, rate)
    mid = total // 2
    assert np.all(envelope >= 0.0)
    assert np.all(envelope <= 1.0)
    assert np.all(np.diff(envelope[:mid + 1]) >= -1e-7)
    assert np.all(np.diff(envelope[mid:]) <= 1e-7)


def test_envelope_is_mirror_symmetric():
    total = 80000
    envelope = Transformations.breathing_envelope(total, 8000)
    i = np.arange(1, total // 2)
    assert np.allclose(envelope[i], envelope[total - i], atol=1e-6)


def test_midpoint_is_exactly_one():
    # 10 s at 8 kHz: index 40000 sits exactly on t == 5 s
    envelope = Transformations.breathing_envelope(80000, 8000)
    assert envelope[40000] == 1.0


def test_envelope_tracks_raised_cosine():
    envelope = Transformations.breathing_envelope(80000, 8000)
    # t = 2.5 s, a quarter of the way through
    assert envelope[20000] == pytest.approx(0.5, abs=1e-6)
    # t = 7.5 s
    assert envelope[60000] == pytest.approx(0.5, abs=1e-6)


def test_apply_envelope_clamps_full_scale():
    samples = np.array([32767, 32767, -32768], dtype=np.int16)
    envelope = np.array([1.0, 0.0, 1.0], dtype=np.float32)
    out = Transformations.apply_envelope(samples, envelope)
    assert out.dtype == np.int16
    assert out.tolist() == [32767, 0, -32767]


def test_apply_envelope_truncates_toward_negative_infinity():
    samples = np.array([-101, 0], dtype=np.int16)
    envelope = np.array([0.5, 0.5], dtype=np.float32)
    out = Transformations.apply_envelope(samples, envelope)
    assert out.tolist() == [-51, 0]


def test_apply_envelope_leaves_input_untouched():
    samples = np.array([1000, -1000, 2000], dtype=np.int16)
    original = samples.copy()
    Transformations.apply_envelope(samples, np.zeros(3, dtype=np.float32))
    assert np.array_equal(samples, original)


def test_apply_envelope_length_mismatch():
    with pytest.raises(ValueError):
        Transformations.apply_envelope(
            np.zeros(4, dtype=np.int16), np.ones(3, dtype=np.float32)
        )


def test_levels():
    samples = np.array([32767, -32767, 0, 0], dtype=np.int16)
    assert Transformations.peak_level(samples) == pytest.approx(1.0)
    assert Transformations.calculate_rms_energy(samples) == pytest.approx(np.sqrt(0.5))
    assert Transformations.peak_level(np.zeros(0, dtype=np.int16)) == 0.0
