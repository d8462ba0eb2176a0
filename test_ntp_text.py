# test_ntp_text.py
import pytest

from ntp_errors import InvalidFieldError
from ntp_text import (
    LEAP_TABLE,
    REF_ID_TABLE,
    leap_to_text,
    mode_to_text,
    ref_id_to_text,
    stratum_to_text,
)


def _ref_id(code: bytes) -> int:
    return int.from_bytes(code, "big")


def test_leap_and_mode_text():
    assert leap_to_text(0) == "no warning"
    assert leap_to_text(3) == "unknown (clock unsynchronized)"
    assert mode_to_text(3) == "client"
    assert mode_to_text(4) == "server"


@pytest.mark.parametrize("fn,value", [(leap_to_text, 4), (mode_to_text, 8), (mode_to_text, -1)])
def test_invalid_leap_and_mode(fn, value):
    with pytest.raises(InvalidFieldError):
        fn(value)


def test_stratum_text():
    assert stratum_to_text(0) == "unspecified or invalid (0)"
    assert stratum_to_text(1) == "primary reference (1)"
    assert stratum_to_text(2) == "secondary reference (2)"
    assert stratum_to_text(15) == "secondary reference (15)"
    assert stratum_to_text(16) == "unsynchronized (16)"
    with pytest.raises(InvalidFieldError):
        stratum_to_text(17)


def test_ref_id_known_code_at_low_stratum():
    assert ref_id_to_text(_ref_id(b"GPS\0"), stratum=1) == "Global Position System"
    assert ref_id_to_text(_ref_id(b"LOCL"), stratum=0) == "uncalibrated local clock"
    assert ref_id_to_text(0, stratum=1) == "NULL"


def test_ref_id_unknown_code():
    assert ref_id_to_text(_ref_id(b"ABCD"), stratum=1) == "Unidentified reference source 'ABCD'"
    assert ref_id_to_text(_ref_id(b"XY\0\0"), stratum=1) == "Unidentified reference source 'XY'"


def test_ref_id_as_ipv4_address():
    assert ref_id_to_text(0xC0A80001) == "192.168.0.1"
    assert ref_id_to_text(_ref_id(bytes([10, 0, 0, 254])), stratum=254) == "10.0.0.254"


def test_ref_id_stratum_255_is_invalid():
    with pytest.raises(InvalidFieldError):
        ref_id_to_text(0xC0A80001, stratum=255)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        LEAP_TABLE[4] = "bogus"
    with pytest.raises(TypeError):
        del REF_ID_TABLE["GPS\0"]
