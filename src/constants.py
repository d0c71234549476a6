"""Constants used in the project."""

import logging
import os
from enum import Enum

import yaml

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FAILURE = 1


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    WILDCARD = "x"
    PROJECT_MARKER_FILE = ".flowconfig"
    PACKAGE_JSON_FILE = "package.json"
    INSTALL_SUBDIR = ("flow-typed", "npm")
    DEFINITIONS_SUBDIR = ("definitions", "npm")
    DEFINITIONS_VERSION_FILE = "VERSION"
    DEFINITIONS_VERSION_UNKNOWN = "unknown"
    DEFAULT_DEFINITIONS_DIR = os.path.join("~", ".flowdef", "cache")
    DEFINITIONS_REPO_URL = "https://github.com/flowtype/flow-typed/"
    SIGNATURE_PREFIX = "// flowdef signature: "
    VERSION_PREFIX = "// flowdef version: "
    LOG_FORMAT = "[%(levelname)s] %(message)s"

    ENV_DEFINITIONS_DIR = "FLOWDEF_DEFINITIONS_DIR"
    ENV_FLOW_VERSION = "FLOWDEF_FLOW_VERSION"
    ENV_LOG_LEVEL = "FLOWDEF_LOG_LEVEL"
    CONFIG_FILE_NAMES = ("flowdef.yml", ".flowdef.yml")


def _config_search_paths():
    """Return candidate YAML config locations in precedence order."""
    paths = [os.path.join(os.getcwd(), name) for name in Constants.CONFIG_FILE_NAMES]
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        paths.append(os.path.join(xdg, "flowdef", "flowdef.yml"))
    paths.append(os.path.expanduser(os.path.join("~", ".config", "flowdef", "flowdef.yml")))
    return paths


def _load_yaml_config(path=None):
    """Load the first readable YAML config.

    An explicit ``path`` is the only location consulted when given. Invalid
    or unreadable files are logged and ignored.

    Returns:
        dict: Parsed configuration mapping (empty when none found).
    """
    candidates = [path] if path else _config_search_paths()
    for candidate in candidates:
        if not candidate or not os.path.isfile(candidate):
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring config file %s: %s", candidate, e)
            continue
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: top-level mapping expected", candidate)
            continue
        logger.debug("Loaded config from %s", candidate)
        return data
    return {}


def resolve_settings(args):
    """Merge CLI args, environment and YAML config into effective settings.

    Precedence: CLI > environment > YAML > built-in defaults.

    Returns:
        dict: ``definitions_dir``, ``flow_version`` and ``overwrite``.
    """
    cfg = _load_yaml_config(getattr(args, "CONFIG", None))

    definitions_dir = (
        getattr(args, "DEFINITIONS_DIR", None)
        or os.environ.get(Constants.ENV_DEFINITIONS_DIR)
        or cfg.get("definitions_dir")
        or Constants.DEFAULT_DEFINITIONS_DIR
    )
    cfg_flow_version = cfg.get("flow_version")
    if cfg_flow_version is not None and not isinstance(cfg_flow_version, str):
        # YAML reads an unquoted 0.30 as the float 0.3; the digits are already lost.
        logger.warning(
            "Ignoring non-string flow_version %r in config; quote it (e.g. flow_version: '0.30')",
            cfg_flow_version,
        )
        cfg_flow_version = None
    flow_version = (
        getattr(args, "FLOW_VERSION", None)
        or os.environ.get(Constants.ENV_FLOW_VERSION)
        or cfg_flow_version
    )
    overwrite = bool(getattr(args, "OVERWRITE", False) or cfg.get("overwrite", False))

    return {
        "definitions_dir": os.path.expanduser(str(definitions_dir)),
        "flow_version": str(flow_version) if flow_version is not None else None,
        "overwrite": overwrite,
    }
