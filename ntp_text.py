"""
NTP ヘッダ値のテキスト変換（leap / mode / stratum / reference id）

テーブルは読み取り専用（MappingProxyType）で、実行中に書き換えない。
"""
from types import MappingProxyType

from ntp_errors import InvalidFieldError

LEAP_TABLE = MappingProxyType({
    0: "no warning",
    1: "last minute of the day has 61 seconds",
    2: "last minute of the day has 59 seconds",
    3: "unknown (clock unsynchronized)",
})

MODE_TABLE = MappingProxyType({
    0: "reserved",
    1: "symmetric active",
    2: "symmetric passive",
    3: "client",
    4: "server",
    5: "broadcast",
    6: "reserved for NTP control messages",
    7: "reserved for private use",
})

STRATUM_TABLE = MappingProxyType({
    0: "unspecified or invalid",
    1: "primary reference",
})

# stratum 0/1 の参照クロック識別子（4文字、足りない分は NUL 埋め）
REF_ID_TABLE = MappingProxyType({
    "GOES": "Geostationary Orbit Environment Satellite",
    "GPS\0": "Global Position System",
    "GAL\0": "Galileo Positioning System",
    "PPS\0": "Generic pulse-per-second",
    "IRIG": "Inter-Range Instrumentation Group",
    "WWVB": "LF Radio WWVB Ft. Collins, CO 60 kHz",
    "DCF\0": "LF Radio DCF77 Mainflingen, DE 77.5 kHz",
    "HBG\0": "LF Radio HBG Prangins, HB 75 kHz",
    "MSF\0": "LF Radio MSF Anthorn, UK 60 kHz",
    "JJY\0": "LF Radio JJY Fukushima, JP 40 kHz, Saga, JP 60 kHz",
    "LORC": "MF Radio LORAN C station, 100 kHz",
    "TDF\0": "MF Radio Allouis, FR 162 kHz",
    "CHU\0": "HF Radio CHU Ottawa, Ontario",
    "WWV\0": "HF Radio WWV Ft. Collins, CO",
    "WWVH": "HF Radio WWVH Kauai, HI",
    "NIST": "NIST telephone modem",
    "ACTS": "NIST telephone modem",
    "USNO": "USNO telephone modem",
    "PTB\0": "European telephone modem",
    "LOCL": "uncalibrated local clock",
    "CESM": "calibrated Cesium clock",
    "RBDM": "calibrated Rubidium clock",
    "OMEG": "OMEGA radionavigation system",
    "DCN\0": "DCN routing protocol",
    "TSP\0": "TSP time protocol",
    "DTS\0": "Digital Time Service",
    "ATOM": "Atomic clock (calibrated)",
    "VLF\0": "VLF radio (OMEGA,, etc.)",
    "1PPS": "External 1 PPS input",
    "FREE": "(Internal clock)",
    "INIT": "(Initialization)",
    "ROA\0": "Real Observatorio de la Armada",
    "\0\0\0\0": "NULL",
})


def leap_to_text(leap):
    if leap not in LEAP_TABLE:
        raise InvalidFieldError(f"Invalid leap indicator: {leap!r}")
    return LEAP_TABLE[leap]


def mode_to_text(mode):
    if mode not in MODE_TABLE:
        raise InvalidFieldError(f"Invalid mode: {mode!r}")
    return MODE_TABLE[mode]


def stratum_to_text(stratum):
    """stratum を "説明 (番号)" の形にする。17 以上は予約値としてエラー"""
    if stratum in STRATUM_TABLE:
        return f"{STRATUM_TABLE[stratum]} ({stratum})"
    if 1 < stratum < 16:
        return f"secondary reference ({stratum})"
    if stratum == 16:
        return f"unsynchronized ({stratum})"
    raise InvalidFieldError(f"Invalid stratum or reserved: {stratum!r}")


def ref_id_to_text(ref_id, stratum=2):
    """
    reference id を stratum に応じてテキスト化する。
    - stratum <= 1 : 4文字の ASCII コードとしてテーブル参照
    - 2..254       : IPv4 アドレス (a.b.c.d)
    - 255          : 不正
    """
    fields = (ref_id >> 24 & 0xff, ref_id >> 16 & 0xff, ref_id >> 8 & 0xff, ref_id & 0xff)

    if stratum <= 1:
        text = bytes(fields).decode("ascii", errors="replace")
        if text not in REF_ID_TABLE:
            return f"Unidentified reference source '{text.rstrip(chr(0))}'"
        return REF_ID_TABLE[text]

    if stratum < 255:
        return "%d.%d.%d.%d" % fields

    raise InvalidFieldError(f"Invalid stratum: {stratum!r}")
