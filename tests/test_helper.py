import pytest

from xopnet.helper import avc_get_sps_pps, data_volume_display, find_startcode

SPS = bytes([0x67, 0x42, 0x00, 0x1F, 0xAB])
PPS = bytes([0x68, 0xCE, 0x3C, 0x80])
IDR = bytes([0x65, 0x88, 0x84, 0x21])


def test_find_startcode_three_byte():
    assert find_startcode(b"\x00\x00\x01\x67", 0) == 0


def test_find_startcode_four_byte_reports_leading_zero():
    assert find_startcode(b"\x00\x00\x00\x01\x67", 0) == 0


def test_find_startcode_missing_returns_length():
    data = b"\x12\x34\x56"
    assert find_startcode(data, 0) == len(data)


def test_find_startcode_from_offset():
    data = SPS + b"\x00\x00\x01" + PPS
    assert find_startcode(data, 1) == len(SPS)


def test_extracts_sps_and_pps_with_four_byte_codes():
    stream = b"\x00\x00\x00\x01" + SPS + b"\x00\x00\x00\x01" + PPS + b"\x00\x00\x00\x01" + IDR
    assert avc_get_sps_pps(stream) == (SPS, PPS)


def test_extracts_sps_and_pps_with_three_byte_codes():
    stream = b"\x00\x00\x01" + PPS + b"\x00\x00\x01" + SPS
    assert avc_get_sps_pps(stream) == (SPS, PPS)


def test_no_parameter_sets():
    assert avc_get_sps_pps(b"\x00\x00\x01" + IDR) == (None, None)


def test_no_start_code():
    assert avc_get_sps_pps(SPS + PPS) == (None, None)


def test_last_sps_wins():
    other_sps = bytes([0x27, 0x64, 0x00])
    stream = b"\x00\x00\x01" + SPS + b"\x00\x00\x01" + other_sps
    sps, pps = avc_get_sps_pps(stream)
    assert sps == other_sps
    assert pps is None


def test_zero_volume():
    assert data_volume_display(0) == "0.0 MB"


def test_small_volume_in_bytes():
    assert data_volume_display(512) == "512 bytes"


@pytest.mark.parametrize(
    "total, unit, label",
    [
        (1024, 1024, "KB"),
        (5 * 1024**2 + 1, 1024**2, "MB"),
        (3 * 1024**3, 1024**3, "GB"),
        (2 * 1024**4, 1024**4, "TB"),
    ],
)
def test_volume_units(total, unit, label):
    text = data_volume_display(total)
    number, shown_label = text.split()
    assert shown_label == label
    assert float(number) == pytest.approx(total / unit, abs=0.05)


def test_negative_volume_rejected():
    with pytest.raises(ValueError):
        data_volume_display(-1)