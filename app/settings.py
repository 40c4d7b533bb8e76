from constants import *
import copy
import yaml
import os

import logging

# Retrieve main logger
logger = logging.getLogger("main")


# Cache variable
_cached_settings = None


def _merge_with_defaults(settings):
    # Deep merge with defaults to ensure new keys are present
    merged_settings = copy.deepcopy(DEFAULT_SETTINGS)
    for section, values in (settings or {}).items():
        if isinstance(values, dict) and section in merged_settings and isinstance(merged_settings[section], dict):
            merged_settings[section].update(values)
        else:
            merged_settings[section] = values
    return merged_settings


def _write_settings(settings):
    os.makedirs(CONFIG_DIR, exist_ok=True)
    with open(CONFIG_FILE, "w") as yaml_file:
        yaml.dump(settings, yaml_file)


def load_settings(force=False):
    global _cached_settings

    if _cached_settings and not force:
        return _cached_settings

    if os.path.exists(CONFIG_FILE):
        logger.debug(f"Reading configuration file: {CONFIG_FILE}")
        with open(CONFIG_FILE, "r") as yaml_file:
            settings = yaml.safe_load(yaml_file) or {}
        settings = _merge_with_defaults(settings)
    else:
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        _write_settings(settings)

    _cached_settings = settings
    return settings


def get_savefile_settings():
    return load_settings()["savefile"]


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def verify_settings(section, data):
    success = True
    errors = []
    if section == "savefile":
        if not isinstance(data, dict):
            return False, [{"path": "savefile", "error": "Settings must be an object."}]

        for key in data:
            if key not in DEFAULT_SETTINGS["savefile"]:
                success = False
                errors.append({"path": f"savefile/{key}", "error": f"Unknown setting {key}."})

        if "roster_mode" in data and data["roster_mode"] not in ROSTER_MODES:
            success = False
            errors.append({"path": "savefile/roster_mode", "error": f"Unknown roster mode {data['roster_mode']}."})

        if "dex_milestone_threshold" in data:
            threshold = data["dex_milestone_threshold"]
            if not isinstance(threshold, int) or isinstance(threshold, bool) or not 0 <= threshold <= 100:
                success = False
                errors.append({"path": "savefile/dex_milestone_threshold", "error": "Threshold must be between 0 and 100."})

        if "max_upload_mb" in data and not (_is_number(data["max_upload_mb"]) and data["max_upload_mb"] > 0):
            success = False
            errors.append({"path": "savefile/max_upload_mb", "error": "Upload size must be positive."})

        for flag in ("strict_game_match", "debug_trace"):
            if flag in data and not isinstance(data[flag], bool):
                success = False
                errors.append({"path": f"savefile/{flag}", "error": "Must be true or false."})

        if "allowed_extensions" in data:
            extensions = data["allowed_extensions"]
            if not isinstance(extensions, list) or not all(
                isinstance(ext, str) and ext.startswith(".") and len(ext) > 1 for ext in extensions
            ):
                success = False
                errors.append({"path": "savefile/allowed_extensions", "error": "Must be a list of extensions like \".sav\"."})
    return success, errors


def set_savefile_settings(data):
    success, errors = verify_settings("savefile", data)
    if not success:
        return success, errors

    settings = load_settings()
    settings["savefile"].update(data)
    _write_settings(settings)
    reload_conf()
    return success, errors


def reload_conf():
    """Reload application settings cache"""
    global _cached_settings
    _cached_settings = None
    return load_settings(force=True)
