"""
Optional YAML defaults file. Command-line flags override anything set here.
Lookup: explicit path, else $NUMSTAT_CONFIG, else ~/.numstat.yaml when present.
"""
import os

import yaml

from numstat.report import check_number_format

DEFAULT_CONFIG_NAME = ".numstat.yaml"

_BOOL_KEYS = ("header", "transpose", "strict", "quiet")


def _normalize_config(payload):
    config = dict(payload or {}) if isinstance(payload, dict) else payload
    if not isinstance(config, dict):
        return config
    config.setdefault("stats", [])
    config.setdefault("percentiles", [])
    config.setdefault("quartiles", [])
    config.setdefault("delimiter", "\t")
    config.setdefault("format", "%g")
    config.setdefault("header", True)
    config.setdefault("transpose", False)
    config.setdefault("na_rep", "")
    config.setdefault("strict", False)
    config.setdefault("quiet", False)
    if isinstance(config["stats"], str):
        config["stats"] = [config["stats"]]
    return config


def _validate_config(config):
    if not isinstance(config, dict):
        raise ValueError("config must be a mapping")
    known = {"stats", "percentiles", "quartiles", "delimiter", "format", "na_rep", *_BOOL_KEYS}
    unknown = sorted(set(config) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    if not isinstance(config["stats"], list) or not all(isinstance(s, str) for s in config["stats"]):
        raise ValueError("config.stats must be a list of statistic names")
    for key, kinds in (("percentiles", (int, float)), ("quartiles", int)):
        values = config[key]
        if not isinstance(values, list):
            raise ValueError(f"config.{key} must be a list")
        for value in values:
            if isinstance(value, bool) or not isinstance(value, kinds):
                raise ValueError(f"config.{key} entries must be numeric")
    for key in ("delimiter", "format", "na_rep"):
        if not isinstance(config[key], str):
            raise ValueError(f"config.{key} must be a string")
    if config["delimiter"] == "":
        raise ValueError("config.delimiter must not be empty")
    for key in _BOOL_KEYS:
        if not isinstance(config[key], bool):
            raise ValueError(f"config.{key} must be true or false")
    check_number_format(config["format"])
    return config


def default_config_path():
    env_path = os.environ.get("NUMSTAT_CONFIG")
    if env_path:
        return env_path
    home_path = os.path.join(os.path.expanduser("~"), DEFAULT_CONFIG_NAME)
    if os.path.isfile(home_path):
        return home_path
    return None


def load_config(path=None):
    """Load, normalize and validate the defaults file. No file -> built-in defaults."""
    path = path or default_config_path()
    if path is None:
        return _validate_config(_normalize_config({}))
    with open(path, "r") as f:
        payload = yaml.safe_load(f) or {}
    config = _normalize_config(payload)
    return _validate_config(config)
