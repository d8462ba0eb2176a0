"""
NTP 固定小数点タイムスタンプ変換

NTP の時刻は 1900-01-01 起点の秒数を「32bit 整数部 + n bit 小数部」で表す。
- タイムスタンプ (64bit): 小数部 32bit
- root delay / root dispersion (32bit): 小数部 16bit

切り捨て・丸めの方針はこのモジュールに集約し、他のモジュールは float の秒で扱う。
"""
import math
from datetime import date, datetime, timezone

SYSTEM_EPOCH = date(1970, 1, 1)
NTP_EPOCH = date(1900, 1, 1)
NTP_DELTA = 2208988800  # 1900年〜1970年の秒数

_UINT32_MAX = 0xFFFFFFFF


def to_int_part(timestamp: float) -> int:
    """整数部（0 方向への切り捨て）。負値・非有限値・32bit 超過は ValueError"""
    if not math.isfinite(timestamp):
        raise ValueError(f"non-finite timestamp: {timestamp!r}")
    if timestamp < 0:
        raise ValueError(f"negative timestamp: {timestamp!r}")
    value = int(timestamp)
    if value > _UINT32_MAX:
        raise ValueError(f"timestamp out of 32-bit range: {timestamp!r}")
    return value


def to_frac_part(timestamp: float, n: int = 32) -> int:
    """
    小数部を n bit の整数で返す。
    n は通常 32、root delay / root dispersion では 16。
    """
    return int(abs(timestamp - to_int_part(timestamp)) * 2**n)


def to_time(int_part: int, frac_part: int, n: int = 32) -> float:
    """整数部と n bit 小数部から秒数を組み立てる"""
    return int_part + frac_part / 2**n


def ntp_to_system_time(timestamp: float) -> float:
    """NTP 時刻 → UNIX 時刻"""
    return timestamp - NTP_DELTA


def system_to_ntp_time(timestamp: float) -> float:
    """UNIX 時刻 → NTP 時刻"""
    return timestamp + NTP_DELTA


def ntp_to_datetime(timestamp: float) -> datetime:
    """NTP 時刻を tz-aware (UTC) の datetime にする"""
    return datetime.fromtimestamp(ntp_to_system_time(timestamp), tz=timezone.utc)
