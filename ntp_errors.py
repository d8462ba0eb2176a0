"""
NTP クライアントの例外定義

すべて NTPException を基底とし、呼び出し側で種類ごとに捕捉できるようにする。
ライブラリ内部ではログに出して握りつぶすことはしない（必ず送出する）。
"""


class NTPException(Exception):
    """Base class of every error raised by the NTP modules."""


class ResolutionError(NTPException):
    """ホスト名から IPv4 アドレスを得られなかった"""

    def __init__(self, host, message=None):
        self.host = host
        super().__init__(message or f"Could not resolve an IPv4 address for {host!r}")


class TransportError(NTPException):
    """
    UDP 送受信の失敗（タイムアウト含む）。
    host と元の例外 cause を保持する。
    """

    def __init__(self, host, cause):
        self.host = host
        self.cause = cause
        super().__init__(f"No response received from {host}: {cause}")


class EncodingError(NTPException):
    """ヘッダのフィールド値がビット幅に収まらない"""


class DecodingError(NTPException):
    """受信バッファが 48 バイトではない"""


class InvalidFieldError(NTPException):
    """leap / mode / stratum / reference id をテキスト化できない"""
