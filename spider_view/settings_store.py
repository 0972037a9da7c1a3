import configparser
import logging
from pathlib import Path

from spider.Core import GameConfig
from spider_view.view_config import VARIANT_ORDER

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "game"

DEFAULT_SETTINGS = {
    "variant": "1",
    "seed": "",
}


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: str(v) for k, v in settings.items() if k in DEFAULT_SETTINGS and v is not None})

    raw_variant = data["variant"].strip()
    try:
        variant = int(raw_variant)
    except ValueError:
        variant = int(DEFAULT_SETTINGS["variant"])
    if variant not in VARIANT_ORDER:
        variant = int(DEFAULT_SETTINGS["variant"])
    data["variant"] = str(variant)

    raw_seed = data["seed"].strip()
    try:
        data["seed"] = str(int(raw_seed)) if raw_seed else ""
    except ValueError:
        data["seed"] = ""
    return data


def load_settings(path: Path = None):
    path = Path(path) if path is not None else SETTINGS_PATH
    parser = configparser.ConfigParser()
    if not path.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.Error, OSError, UnicodeDecodeError) as e:
        logger.warning("ignoring unreadable settings file %s: %s", path, e)
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {
        "variant": parser[SECTION].get("variant", ""),
        "seed": parser[SECTION].get("seed", ""),
    }
    return _sanitize(raw)


def save_settings(settings, path: Path = None):
    path = Path(path) if path is not None else SETTINGS_PATH
    parser = configparser.ConfigParser()
    parser[SECTION] = _sanitize(settings)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        parser.write(f)


def to_game_config(settings) -> GameConfig:
    data = _sanitize(settings)
    seed = int(data["seed"]) if data["seed"] else None
    return GameConfig(variant=int(data["variant"]), seed=seed)
