import yaml
from pathlib import Path

DEFAULT_CONFIG = {
    "scheduler": {
        "report_time": "09:30",
        "report_days": "mon-fri",
    },
    "time_rules": {
        "on_time_cutoff": "09:00",
    },
    "queries": {
        "max_lookback_days": 365,
    },
    "event_log": {
        "path": "events.tsv",
        "on_malformed": "skip",
    },
    "slack": {
        "enabled": True,
        "notify_channel": "",
        "notify_events": True,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """ベース設定にオーバーライドをマージする"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: str = "config.yaml") -> dict:
    """YAML設定ファイルをロードし、デフォルト設定とマージして返す"""
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
        return _deep_merge(DEFAULT_CONFIG, user_config)
    return DEFAULT_CONFIG.copy()
