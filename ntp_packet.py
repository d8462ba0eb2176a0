"""
NTP パケット（48バイト固定ヘッダ）のエンコード / デコード

  0                   1                   2                   3
  LI | VN  |Mode |    Stratum    |     Poll      |   Precision
  Root Delay (16.16) / Root Dispersion (16.16) / Reference ID
  Reference / Originate / Receive / Transmit Timestamp (32.32)

LI / VN / Mode は3つの独立した整数として保持し、1バイトへのパックは
encode() の中だけで行う（シフト前に範囲チェック）。
"""
from __future__ import annotations

import struct
from dataclasses import dataclass

from ntp_errors import DecodingError, EncodingError
from ntp_timestamp import to_frac_part, to_int_part, to_time

PACKET_FORMAT = "!BBbb11I"
PACKET_SIZE = struct.calcsize(PACKET_FORMAT)  # 48

# ビットフィールドの上限
_LEAP_MAX = 0b11
_VERSION_MAX = 0b111
_MODE_MAX = 0b111


@dataclass(frozen=True)
class NTPPacket:
    """NTP ヘッダの各フィールド（時刻は float の NTP 秒）"""

    leap: int = 0
    version: int = 2
    mode: int = 3
    stratum: int = 0
    poll: int = 0
    precision: int = 0
    root_delay: float = 0.0
    root_dispersion: float = 0.0
    ref_id: int = 0
    ref_timestamp: float = 0.0
    orig_timestamp: float = 0.0
    recv_timestamp: float = 0.0
    tx_timestamp: float = 0.0

    def to_data(self) -> bytes:
        return encode(self)

    @classmethod
    def from_data(cls, data: bytes) -> "NTPPacket":
        return decode(data)


def _check_bitfield(name: str, value: int, upper: int) -> None:
    if not isinstance(value, int) or not 0 <= value <= upper:
        raise EncodingError(f"{name} must be in 0..{upper}, got {value!r}")


def _short(value: float) -> int:
    """root delay / root dispersion 用の 16.16 固定小数点"""
    return to_int_part(value) << 16 | to_frac_part(value, 16)


def encode(packet: NTPPacket) -> bytes:
    """
    NTPPacket を送信用の 48 バイトに変換する。
    表現できない値は EncodingError（ラップアラウンドさせない）。
    """
    _check_bitfield("leap", packet.leap, _LEAP_MAX)
    _check_bitfield("version", packet.version, _VERSION_MAX)
    _check_bitfield("mode", packet.mode, _MODE_MAX)

    try:
        return struct.pack(
            PACKET_FORMAT,
            packet.leap << 6 | packet.version << 3 | packet.mode,
            packet.stratum,
            packet.poll,
            packet.precision,
            _short(packet.root_delay),
            _short(packet.root_dispersion),
            packet.ref_id,
            to_int_part(packet.ref_timestamp),
            to_frac_part(packet.ref_timestamp),
            to_int_part(packet.orig_timestamp),
            to_frac_part(packet.orig_timestamp),
            to_int_part(packet.recv_timestamp),
            to_frac_part(packet.recv_timestamp),
            to_int_part(packet.tx_timestamp),
            to_frac_part(packet.tx_timestamp),
        )
    except (struct.error, ValueError, TypeError, OverflowError) as e:
        raise EncodingError(f"Invalid NTP packet fields: {e}") from e


def decode(data: bytes) -> NTPPacket:
    """受信した 48 バイトから NTPPacket を組み立てる（値の意味は検証しない）"""
    if len(data) != PACKET_SIZE:
        raise DecodingError(f"NTP packet must be {PACKET_SIZE} bytes, got {len(data)}")

    unpacked = struct.unpack(PACKET_FORMAT, data)
    first = unpacked[0]

    return NTPPacket(
        leap=first >> 6 & _LEAP_MAX,
        version=first >> 3 & _VERSION_MAX,
        mode=first & _MODE_MAX,
        stratum=unpacked[1],
        poll=unpacked[2],
        precision=unpacked[3],
        root_delay=unpacked[4] / 2**16,
        root_dispersion=unpacked[5] / 2**16,
        ref_id=unpacked[6],
        ref_timestamp=to_time(unpacked[7], unpacked[8]),
        orig_timestamp=to_time(unpacked[9], unpacked[10]),
        recv_timestamp=to_time(unpacked[11], unpacked[12]),
        tx_timestamp=to_time(unpacked[13], unpacked[14]),
    )
