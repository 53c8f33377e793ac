import json
import logging
import os
from typing import Optional

from .base import PackageManager
from .bun import BunManager
from .cnpm import CnpmManager
from .deno import DenoManager
from .generic import GenericManager
from .npm import NpmManager
from .pnpm import PnpmManager
from .yarn import YarnManager

ENV_OVERRIDE = "UNIPM_PACKAGE_MANAGER"
ENV_USER_AGENT = "npm_config_user_agent"
FALLBACK = "npm"

# Lock file priority: first match wins
MANAGERS = [
    DenoManager(),
    BunManager(),
    PnpmManager(),
    YarnManager(),
    NpmManager(),
    CnpmManager(),
]

_BY_NAME = {manager.name: manager for manager in MANAGERS}


def get_manager(name: str) -> PackageManager:
    """Returns the manager for name; unknown names get the generic table."""
    manager = _BY_NAME.get(name)
    if manager is None:
        logging.debug(f"Unknown package manager '{name}', using generic commands.")
        return GenericManager(name)
    return manager


def detect_manager(path: str = ".") -> PackageManager:
    """Figures out which package manager drives the project at path."""
    override = os.environ.get(ENV_OVERRIDE, "").strip()
    if override:
        logging.debug(f"{ENV_OVERRIDE} set: {override}")
        return get_manager(override)

    from_agent = _from_user_agent(os.environ.get(ENV_USER_AGENT, ""))
    if from_agent:
        logging.debug(f"Detected from user agent: {from_agent}")
        return get_manager(from_agent)

    from_package_json = _from_package_json(path)
    if from_package_json:
        logging.debug(f"Detected from package.json: {from_package_json}")
        return get_manager(from_package_json)

    try:
        files = os.listdir(path)
    except OSError as e:
        logging.warning(f"Cannot list {path}: {e}")
        files = []

    for manager in MANAGERS:
        if manager.detect(files):
            logging.debug(f"Detected from lock files: {manager.name}")
            return manager

    logging.debug(f"Nothing detected, falling back to {FALLBACK}")
    return get_manager(FALLBACK)


def _from_user_agent(agent: str) -> Optional[str]:
    # e.g. "pnpm/8.6.0 npm/? node/v18.16.0 linux x64"
    if not agent.strip():
        return None
    return agent.split()[0].split("/", 1)[0] or None


def _from_package_json(path: str) -> Optional[str]:
    package_json = os.path.join(path, "package.json")
    if not os.path.exists(package_json):
        return None

    try:
        with open(package_json, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logging.warning(f"Error reading {package_json}: {e}")
        return None

    if not isinstance(data, dict):
        return None

    # e.g. "pnpm@8.6.0+sha256.abc"
    field = data.get("packageManager")
    if not isinstance(field, str) or not field.strip():
        return None
    return field.strip().split("@", 1)[0] or None
