"""
NTP クライアントモジュール（1 回の要求 / 応答で NTPStats を返す）

request(host, version, port, timeout) -> NTPStats
- 名前解決 → 要求パケット作成 → UDP 送信 → 受信 → 受信直後に t4 を記録 → デコード
- 失敗は例外で返す（ResolutionError / TransportError / EncodingError / DecodingError）
- リトライはしない（呼び出し側の責務）

get_time() -> (server_time_utc, offset_ms)
- server_time_utc : datetime (tz-aware, UTC) サーバーの送信タイムスタンプ(t3)
- offset_ms       : クロックオフセット（ミリ秒）
"""
import logging
import socket
import time

from ntp_errors import ResolutionError, TransportError
from ntp_packet import NTPPacket, decode, encode
from ntp_stats import NTPStats
from ntp_timestamp import system_to_ntp_time

logger = logging.getLogger(__name__)

NTP_PORT = 123
CLIENT_MODE = 3

# 48 バイトより長い応答も受け取り、decode() 側で長さエラーにする
_RECV_BUFSIZE = 512


def resolve_ipv4(host, port=NTP_PORT):
    """
    host の最初の IPv4 アドレスを返す。IPv4 が無ければ None、
    名前解決そのものに失敗した場合は ResolutionError。
    """
    try:
        infos = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_DGRAM)
    except (socket.gaierror, UnicodeError) as e:
        raise ResolutionError(host, f"DNS resolution failed for {host!r}: {e}") from e
    for family, _socktype, _proto, _canonname, sockaddr in infos:
        if family == socket.AF_INET:
            return sockaddr[0]
    return None


def _udp_socket():
    return socket.socket(socket.AF_INET, socket.SOCK_DGRAM)


class NTPClient:
    def __init__(self, server='pool.ntp.org', port=NTP_PORT, timeout=5.0, version=3,
                 resolver=None, socket_factory=None, clock=None):
        self.server = server
        self.port = port
        self.timeout = timeout
        self.version = version

        # 外部依存（テストで差し替え可能）
        self._resolver = resolver or resolve_ipv4
        self._socket_factory = socket_factory or _udp_socket
        self._clock = clock or time.time

    def set_server(self, server):
        self.server = server

    def request(self, host, version=2, port=NTP_PORT, timeout=5.0):
        """
        NTPサーバーへ 1 回問い合わせて NTPStats を返す。
        ソケットは成功・失敗にかかわらず必ず close される。
        """
        address = self._resolver(host, port)
        if not address:
            raise ResolutionError(host)

        # 要求パケット: mode=3 (client)、送信時刻以外は 0
        query = NTPPacket(version=version, mode=CLIENT_MODE,
                          tx_timestamp=system_to_ntp_time(self._clock()))
        query_data = encode(query)

        logger.debug("NTP request -> %s (%s:%d) version=%d timeout=%.1fs",
                     host, address, port, version, timeout)
        try:
            with self._socket_factory() as s:
                s.settimeout(timeout)
                s.connect((address, port))
                s.send(query_data)
                response_data = s.recv(_RECV_BUFSIZE)
                # t4 は受信直後に記録（delay 計算の基準）
                dest_timestamp = system_to_ntp_time(self._clock())
        except OSError as e:
            raise TransportError(host, e) from e

        stats = NTPStats(decode(response_data), dest_timestamp)
        logger.debug("NTP response <- %s stratum=%d offset=%.6fs delay=%.6fs",
                     host, stats.stratum, stats.offset, stats.delay)
        return stats

    def get_time(self):
        """
        設定済みのサーバーから時刻を取得。
        戻り値: (server_time_utc, offset_ms)
        失敗時は例外を送出（呼び出し側でキャッチすること）。
        """
        stats = self.request(self.server, version=self.version, port=self.port,
                             timeout=self.timeout)
        return stats.tx_datetime, stats.offset * 1000.0
