"""
設定管理モジュール
JSON形式で設定を保存/読み込み
"""
import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = 'ntp_client_config.json'


class Config:
    def __init__(self, config_file=DEFAULT_CONFIG_FILE):
        self.config_file = config_file
        self.settings = self._load_default_settings()
        self.load()

    def _load_default_settings(self):
        """デフォルト設定"""
        return {
            # NTP設定
            'ntp': {
                'server': 'pool.ntp.org',
                'port': 123,
                'version': 3,
                'timeout': 5.0,  # 送信・受信それぞれのタイムアウト（秒）
            },

            # デバッグモード
            'debug': False,

            # ログ設定
            'logging': {
                'save_to_file': False,
                'log_file': 'ntp_client.log',
                'max_log_size_mb': 10,
            },
        }

    def load(self):
        """設定をファイルから読み込み"""
        if not os.path.exists(self.config_file):
            return False
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("設定読み込みエラー: %s (%s)", self.config_file, e)
            return False
        if not isinstance(loaded, dict):
            logger.warning("設定ファイルの形式が不正です: %s", self.config_file)
            return False
        # デフォルト設定にマージ（新しいキーがあっても対応）
        self._merge_settings(self.settings, loaded)
        return True

    def _merge_settings(self, default, loaded):
        """デフォルト設定に読み込んだ設定をマージ"""
        for key, value in loaded.items():
            if key in default:
                if isinstance(value, dict) and isinstance(default[key], dict):
                    self._merge_settings(default[key], value)
                else:
                    default[key] = value

    def save(self):
        """設定をファイルに保存"""
        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.settings, f, indent=4, ensure_ascii=False)
            return True
        except OSError as e:
            logger.warning("設定保存エラー: %s (%s)", self.config_file, e)
            return False

    def get(self, *keys):
        """設定を取得（ネストされたキーに対応）"""
        value = self.settings
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return None
        return value

    def set(self, *keys, value):
        """設定を変更（ネストされたキーに対応）"""
        if len(keys) == 0:
            return False

        settings = self.settings
        for key in keys[:-1]:
            if key not in settings:
                settings[key] = {}
            settings = settings[key]

        settings[keys[-1]] = value
        return True
