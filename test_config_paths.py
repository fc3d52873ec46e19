import json
import tempfile
from pathlib import Path

import config_paths


def _with_config(tmp, payload=None, raw=None):
    cfg_dir = Path(tmp) / "tabula"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    cfg_path = cfg_dir / "config.json"
    if raw is not None:
        cfg_path.write_text(raw)
    elif payload is not None:
        cfg_path.write_text(json.dumps(payload))

    orig_dir = config_paths.CONFIG_DIR
    orig_json = config_paths.CONFIG_JSON
    try:
        config_paths.CONFIG_DIR = str(cfg_dir)
        config_paths.CONFIG_JSON = str(cfg_path)
        return config_paths.load_config()
    finally:
        config_paths.CONFIG_DIR = orig_dir
        config_paths.CONFIG_JSON = orig_json


def test_load_config_defaults_without_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _with_config(tmp)
        assert cfg["PAGE_SIZE"] == 10
        assert cfg["VISIBLE_COLUMNS"] == ["name", "email", "age", "role"]
        assert cfg["SEED_DEMO_ROWS"] is True


def test_load_config_reads_json_overrides():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _with_config(
            tmp,
            {
                "page_size": 25,
                "visible_columns": ["name", "location"],
                "seed_demo_rows": False,
            },
        )
        assert cfg["PAGE_SIZE"] == 25
        assert cfg["VISIBLE_COLUMNS"] == ["name", "location"]
        assert cfg["SEED_DEMO_ROWS"] is False


def test_load_config_ignores_invalid_values():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _with_config(
            tmp, {"page_size": 12, "visible_columns": ["name", 3], "seed_demo_rows": "no"}
        )
        assert cfg["PAGE_SIZE"] == 10
        assert cfg["VISIBLE_COLUMNS"] == ["name", "email", "age", "role"]
        assert cfg["SEED_DEMO_ROWS"] is True


def test_load_config_survives_broken_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _with_config(tmp, raw="{not json")
        assert cfg["PAGE_SIZE"] == 10


def test_ensure_config_dirs_creates_directory():
    with tempfile.TemporaryDirectory() as tmp:
        orig_dir = config_paths.CONFIG_DIR
        try:
            config_paths.CONFIG_DIR = str(Path(tmp) / "nested" / "tabula")
            config_paths.ensure_config_dirs()
            assert Path(config_paths.CONFIG_DIR).is_dir()
        finally:
            config_paths.CONFIG_DIR = orig_dir
