# test_ntp_stats.py
from dataclasses import fields
from datetime import datetime, timezone

import pytest

from ntp_packet import NTPPacket
from ntp_stats import NTPStats
from ntp_timestamp import NTP_DELTA


def _stats(orig=1000.0, recv=1002.0, tx=1002.5, dest=1003.0, **kwargs):
    packet = NTPPacket(orig_timestamp=orig, recv_timestamp=recv, tx_timestamp=tx, **kwargs)
    return NTPStats(packet, dest)


def test_offset_and_delay_example():
    s = _stats()
    assert s.offset == pytest.approx(0.75)
    assert s.delay == pytest.approx(2.5)


def test_zero_offset_for_symmetric_exchange():
    # サーバーとクライアントの時計が一致し、往復とも 0.1 秒
    s = _stats(orig=NTP_DELTA + 10.0, recv=NTP_DELTA + 10.1, tx=NTP_DELTA + 10.2, dest=NTP_DELTA + 10.3)
    assert s.offset == pytest.approx(0.0, abs=1e-6)
    assert s.delay == pytest.approx(0.2, abs=1e-6)


def test_offset_and_delay_are_not_stored():
    names = {f.name for f in fields(NTPStats)}
    assert names == {"packet", "dest_timestamp"}


def test_calendar_accessors():
    base = NTP_DELTA + 1700000000.0
    s = _stats(orig=base, recv=base + 1, tx=base + 2, dest=base + 3, ref_timestamp=base - 60)
    assert s.orig_time == pytest.approx(1700000000.0)
    assert s.recv_time == pytest.approx(1700000001.0)
    assert s.tx_time == pytest.approx(1700000002.0)
    assert s.dest_time == pytest.approx(1700000003.0)
    assert s.ref_time == pytest.approx(1699999940.0)
    assert s.tx_datetime == datetime(2023, 11, 14, 22, 13, 22, tzinfo=timezone.utc)


def test_header_passthrough():
    s = _stats(leap=1, version=4, mode=4, stratum=3, poll=6, precision=-23,
               root_delay=0.5, root_dispersion=0.125, ref_id=0x0A000001)
    assert (s.leap, s.version, s.mode, s.stratum) == (1, 4, 4, 3)
    assert (s.poll, s.precision) == (6, -23)
    assert s.root_delay == 0.5
    assert s.root_dispersion == 0.125
    assert s.ref_id == 0x0A000001
    assert s.orig_timestamp == 1000.0
    assert s.tx_timestamp == 1002.5


def test_to_dict_summary():
    d = _stats().to_dict()
    assert d["offset"] == pytest.approx(0.75)
    assert d["delay"] == pytest.approx(2.5)
    assert d["dest_time"] == pytest.approx(1003.0 - NTP_DELTA)
    assert set(d) >= {"leap", "stratum", "ref_id", "tx_time", "orig_time"}
