import json
import logging
import os

from default_table_initializer import STARTER_VISIBLE_COLUMNS
from table_state import DEFAULT_PAGE_SIZE, PAGE_SIZE_CHOICES

logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "tabula")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
PAGE_SIZE_DEFAULT = DEFAULT_PAGE_SIZE
VISIBLE_COLUMNS_DEFAULT = list(STARTER_VISIBLE_COLUMNS)
SEED_DEMO_ROWS_DEFAULT = True


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def load_config():
    cfg = {
        "PAGE_SIZE": PAGE_SIZE_DEFAULT,
        "VISIBLE_COLUMNS": list(VISIBLE_COLUMNS_DEFAULT),
        "SEED_DEMO_ROWS": SEED_DEMO_ROWS_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_JSON, exc)
        return cfg

    if not isinstance(data, dict):
        return cfg

    page_size = data.get("page_size")
    if isinstance(page_size, int) and page_size in PAGE_SIZE_CHOICES:
        cfg["PAGE_SIZE"] = page_size

    visible = data.get("visible_columns")
    if isinstance(visible, list) and all(isinstance(item, str) for item in visible):
        cfg["VISIBLE_COLUMNS"] = list(visible)

    seed = data.get("seed_demo_rows")
    if isinstance(seed, bool):
        cfg["SEED_DEMO_ROWS"] = seed

    return cfg
