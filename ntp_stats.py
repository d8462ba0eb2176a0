"""
NTP 交換結果（RFC 5905 offset / delay 算出）

  t1 = orig_timestamp  クライアント送信
  t2 = recv_timestamp  サーバー受信
  t3 = tx_timestamp    サーバー送信
  t4 = dest_timestamp  クライアント受信

  offset = ((t2 - t1) + (t3 - t4)) / 2
  delay  = (t4 - t1) - (t3 - t2)

往路と復路の遅延が等しいと仮定した推定値。非対称な経路の補正はしない。
offset / delay は保持せず、毎回 5 つのタイムスタンプから計算する。
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ntp_packet import NTPPacket
from ntp_timestamp import ntp_to_datetime, ntp_to_system_time


@dataclass(frozen=True)
class NTPStats:
    packet: NTPPacket
    dest_timestamp: float

    # --- 統計 -----------------------------------------------------------------

    @property
    def offset(self) -> float:
        """クロックオフセット（秒）"""
        return ((self.recv_timestamp - self.orig_timestamp) +
                (self.tx_timestamp - self.dest_timestamp)) / 2

    @property
    def delay(self) -> float:
        """往復遅延（秒）"""
        return ((self.dest_timestamp - self.orig_timestamp) -
                (self.tx_timestamp - self.recv_timestamp))

    # --- NTP 時刻 -------------------------------------------------------------

    @property
    def ref_timestamp(self) -> float:
        return self.packet.ref_timestamp

    @property
    def orig_timestamp(self) -> float:
        return self.packet.orig_timestamp

    @property
    def recv_timestamp(self) -> float:
        return self.packet.recv_timestamp

    @property
    def tx_timestamp(self) -> float:
        return self.packet.tx_timestamp

    # --- UNIX 時刻 ------------------------------------------------------------

    @property
    def ref_time(self) -> float:
        return ntp_to_system_time(self.ref_timestamp)

    @property
    def orig_time(self) -> float:
        return ntp_to_system_time(self.orig_timestamp)

    @property
    def recv_time(self) -> float:
        return ntp_to_system_time(self.recv_timestamp)

    @property
    def tx_time(self) -> float:
        return ntp_to_system_time(self.tx_timestamp)

    @property
    def dest_time(self) -> float:
        return ntp_to_system_time(self.dest_timestamp)

    @property
    def tx_datetime(self) -> datetime:
        """サーバー送信時刻 (t3) を UTC の datetime で"""
        return ntp_to_datetime(self.tx_timestamp)

    # --- ヘッダ ---------------------------------------------------------------

    @property
    def leap(self) -> int:
        return self.packet.leap

    @property
    def version(self) -> int:
        return self.packet.version

    @property
    def mode(self) -> int:
        return self.packet.mode

    @property
    def stratum(self) -> int:
        return self.packet.stratum

    @property
    def poll(self) -> int:
        return self.packet.poll

    @property
    def precision(self) -> int:
        return self.packet.precision

    @property
    def root_delay(self) -> float:
        return self.packet.root_delay

    @property
    def root_dispersion(self) -> float:
        return self.packet.root_dispersion

    @property
    def ref_id(self) -> int:
        return self.packet.ref_id

    def to_dict(self) -> dict:
        """JSON 出力用のまとめ"""
        return {
            "offset": self.offset,
            "delay": self.delay,
            "leap": self.leap,
            "version": self.version,
            "mode": self.mode,
            "stratum": self.stratum,
            "poll": self.poll,
            "precision": self.precision,
            "root_delay": self.root_delay,
            "root_dispersion": self.root_dispersion,
            "ref_id": self.ref_id,
            "ref_time": self.ref_time,
            "orig_time": self.orig_time,
            "recv_time": self.recv_time,
            "tx_time": self.tx_time,
            "dest_time": self.dest_time,
        }
