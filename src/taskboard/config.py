import os
import logging
from pathlib import Path

import yaml
from dotenv import load_dotenv

log = logging.getLogger("taskboard.config")

# Project root is two levels up from src/taskboard/
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

DEFAULT_API_URL = "http://127.0.0.1:8080/api"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def load_config(config_path: str = None) -> dict:
    """Load configuration from YAML file with .env overrides."""
    load_dotenv(PROJECT_ROOT / ".env")

    yaml_path = Path(config_path) if config_path else CONFIG_DIR / "taskboard.yaml"
    if not yaml_path.exists():
        log.warning("Config file not found: %s, using defaults", yaml_path)
        config = {}
    else:
        with open(yaml_path) as f:
            config = yaml.safe_load(f) or {}

    # Environment variable overrides
    api = config.setdefault("api", {})
    api["base_url"] = os.environ.get("TASKBOARD_API_URL", api.get("base_url", DEFAULT_API_URL))
    timeout = os.environ.get("TASKBOARD_API_TIMEOUT", api.get("timeout"))
    api["timeout"] = float(timeout) if timeout not in (None, "") else None

    auth = config.setdefault("auth", {})
    auth["token"] = os.environ.get("TASKBOARD_TOKEN", auth.get("token")) or None
    auth["require_login"] = _env_bool("TASKBOARD_REQUIRE_LOGIN",
                                      bool(auth.get("require_login", False)))

    ui = config.setdefault("ui", {})
    ui["templates"] = os.environ.get("TASKBOARD_TEMPLATES", ui.get("templates")) or None
    ui["snapshot"] = os.environ.get("TASKBOARD_SNAPSHOT", ui.get("snapshot")) or None

    log.info(
        "Config loaded: API %s, timeout %s, login %s",
        api["base_url"],
        api["timeout"],
        "required" if auth["require_login"] else "off",
    )
    return config
