# test_config.py
import json

from config import Config


def test_defaults_when_file_missing(tmp_path):
    c = Config(str(tmp_path / "missing.json"))
    assert c.get('ntp', 'server') == 'pool.ntp.org'
    assert c.get('ntp', 'port') == 123
    assert c.get('ntp', 'version') == 3
    assert c.get('ntp', 'timeout') == 5.0
    assert c.get('logging', 'save_to_file') is False
    assert c.get('ntp', 'nope') is None


def test_save_and_reload(tmp_path):
    path = str(tmp_path / "cfg.json")
    c = Config(path)
    c.set('ntp', 'server', value='time.google.com')
    c.set('ntp', 'timeout', value=1.5)
    assert c.save()

    c2 = Config(path)
    assert c2.get('ntp', 'server') == 'time.google.com'
    assert c2.get('ntp', 'timeout') == 1.5
    assert c2.get('ntp', 'port') == 123


def test_partial_file_is_merged_with_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({'ntp': {'version': 4}, 'unknown': 1}), encoding='utf-8')

    c = Config(str(path))
    assert c.get('ntp', 'version') == 4
    assert c.get('ntp', 'server') == 'pool.ntp.org'
    assert c.get('unknown') is None


def test_broken_file_keeps_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{not json", encoding='utf-8')

    c = Config(str(path))
    assert c.load() is False
    assert c.get('ntp', 'server') == 'pool.ntp.org'
