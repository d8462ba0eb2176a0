"""
NTP 問い合わせツール
コマンドライン エントリポイント

  python main.py [server] [-p PORT] [-V VERSION] [-t TIMEOUT] [-c CONFIG] [--save] [--json] [--debug]

License: MIT
"""
from __future__ import annotations

import argparse
import json
import logging
import logging.handlers
import sys
from typing import Optional

from config import DEFAULT_CONFIG_FILE, Config
from ntp_client import NTPClient
from ntp_errors import InvalidFieldError, NTPException
from ntp_text import leap_to_text, mode_to_text, ref_id_to_text, stratum_to_text

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    引数解析
    - 指定のないものは設定ファイル（--config）の値を使う
    """
    p = argparse.ArgumentParser(description="Query an NTP server and print offset/delay.")
    p.add_argument("server", nargs="?", default=None, help="NTP server host name or address")
    p.add_argument("-p", "--port", type=int, default=None)
    p.add_argument("-V", "--ntp-version", dest="version", type=int, choices=[1, 2, 3, 4], default=None)
    p.add_argument("-t", "--timeout", type=float, default=None, help="send/receive timeout in seconds")
    p.add_argument("-c", "--config", default=DEFAULT_CONFIG_FILE)
    p.add_argument("--save", action="store_true", help="store server/port/version/timeout in the config file")
    p.add_argument("--json", action="store_true", help="print the result as JSON")
    p.add_argument("--debug", action="store_true")
    return p.parse_args(argv)


def _setup_logging(config: Config, debug: bool = False) -> None:
    """ログ設定（必要ならローテーション付きのファイル出力を追加）"""
    level = logging.DEBUG if (debug or config.get('debug')) else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if config.get('logging', 'save_to_file'):
        max_mb = config.get('logging', 'max_log_size_mb') or 10
        handlers.append(logging.handlers.RotatingFileHandler(
            config.get('logging', 'log_file') or 'ntp_client.log',
            maxBytes=int(max_mb * 1024 * 1024),
            backupCount=3,
            encoding='utf-8',
        ))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def _text_or_raw(fn, *args) -> str:
    """テーブルに無い値（予約値など）は数値のまま表示する"""
    try:
        return fn(*args)
    except InvalidFieldError:
        return str(args[0])


def format_stats(server: str, stats) -> str:
    lines = [
        f"server:          {server}",
        f"offset:          {stats.offset:+.6f} s",
        f"delay:           {stats.delay:.6f} s",
        f"leap:            {_text_or_raw(leap_to_text, stats.leap)}",
        f"version:         {stats.version}",
        f"mode:            {_text_or_raw(mode_to_text, stats.mode)}",
        f"stratum:         {_text_or_raw(stratum_to_text, stats.stratum)}",
        f"poll:            {stats.poll}",
        f"precision:       {stats.precision}",
        f"root delay:      {stats.root_delay:.6f} s",
        f"root dispersion: {stats.root_dispersion:.6f} s",
        f"reference id:    {_text_or_raw(ref_id_to_text, stats.ref_id, stats.stratum)}",
        f"server time:     {stats.tx_datetime.isoformat()}",
    ]
    return "\n".join(lines)


def main(argv: list[str], client: Optional[NTPClient] = None) -> int:
    ns = parse_args(argv)
    config = Config(ns.config)
    _setup_logging(config, ns.debug)
    log = logging.getLogger("ntp.main")

    server = ns.server or config.get('ntp', 'server')
    port = ns.port if ns.port is not None else config.get('ntp', 'port')
    version = ns.version if ns.version is not None else config.get('ntp', 'version')
    timeout = ns.timeout if ns.timeout is not None else config.get('ntp', 'timeout')

    log.debug("query: server=%s port=%s version=%s timeout=%s", server, port, version, timeout)

    if ns.save:
        # コマンドラインで指定した値を次回の既定値にする
        for key, value in (('server', server), ('port', port), ('version', version), ('timeout', timeout)):
            config.set('ntp', key, value=value)
        if not config.save():
            log.warning("could not save settings to %s", config.config_file)

    client = client or NTPClient(server=server, port=port, timeout=timeout, version=version)
    try:
        stats = client.request(server, version=version, port=port, timeout=timeout)
    except NTPException as e:
        log.error("NTP query failed: %s", e)
        return 1

    if ns.json:
        print(json.dumps({"server": server, **stats.to_dict()}, indent=2))
    else:
        print(format_stats(server, stats))
    return 0


def run() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
