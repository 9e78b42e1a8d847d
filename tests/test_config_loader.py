import os
import tempfile
from services.config_loader import load_config


def test_load_config_defaults():
    """デフォルト設定が正しくロードされること"""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write("scheduler:\n  report_time: \"10:00\"\n")
        f.flush()
        config = load_config(f.name)
    os.unlink(f.name)
    assert config["scheduler"]["report_time"] == "10:00"
    assert config["scheduler"]["report_days"] == "mon-fri"


def test_load_config_nested():
    """ネストされた設定が正しく取得できること"""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write(
            "event_log:\n"
            "  path: /var/lib/attendance/events.tsv\n"
            "  on_malformed: abort\n"
        )
        f.flush()
        config = load_config(f.name)
    os.unlink(f.name)
    assert config["event_log"]["path"] == "/var/lib/attendance/events.tsv"
    assert config["event_log"]["on_malformed"] == "abort"
    assert config["time_rules"]["on_time_cutoff"] == "09:00"


def test_load_config_empty_file():
    """空ファイルの場合デフォルト設定になること"""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.flush()
        config = load_config(f.name)
    os.unlink(f.name)
    assert config["queries"]["max_lookback_days"] == 365


def test_load_config_file_not_found():
    """存在しないファイルの場合デフォルト設定を返すこと"""
    config = load_config("nonexistent.yaml")
    assert "scheduler" in config
    assert config["queries"] == {"max_lookback_days": 365}
