from constants import *
import copy
import yaml
import os

import logging

# Retrieve main logger
logger = logging.getLogger("main")

# Environment variables that override settings.yaml
ENV_OVERRIDES = {
    "DATABASE_URL": ("database", "url"),
    "LOG_QUERY": ("logging", "log_query"),
    "LOG_FORMAT": ("logging", "format"),
    "LOG_LEVEL": ("logging", "level"),
    "APP_ENV": ("app", "env"),
}

TRUTHY = ("1", "true", "yes", "on")


# Cache variable
_cached_settings = None


def _merge_defaults(settings):
    # Deep merge with defaults to ensure new keys are present
    merged_settings = copy.deepcopy(DEFAULT_SETTINGS)
    for section, values in settings.items():
        if isinstance(values, dict) and section in merged_settings and isinstance(merged_settings[section], dict):
            merged_settings[section].update(values)
        else:
            merged_settings[section] = values
    return merged_settings


def _apply_env_overrides(settings, environ=None):
    environ = os.environ if environ is None else environ
    for var, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(var)
        if value is None or value == "":
            continue
        if key == "log_query":
            value = value.strip().lower() in TRUTHY
        settings.setdefault(section, {})[key] = value
    return settings


def load_settings(force=False, config_file=None):
    global _cached_settings

    if _cached_settings and not force:
        return _cached_settings

    config_file = config_file or CONFIG_FILE
    if os.path.exists(config_file):
        logger.debug(f"Reading configuration file: {config_file}")
        with open(config_file, "r") as yaml_file:
            settings = yaml.safe_load(yaml_file) or {}
        settings = _merge_defaults(settings)
    else:
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        if os.path.isdir(os.path.dirname(config_file)):
            with open(config_file, "w") as yaml_file:
                yaml.dump(settings, yaml_file)

    settings = _apply_env_overrides(settings)

    _cached_settings = settings
    return settings


def is_production(settings=None):
    settings = settings or load_settings()
    return settings["app"]["env"] == "production"


def reload_conf():
    """Reload application settings cache"""
    global _cached_settings
    _cached_settings = None
    return load_settings(force=True)
