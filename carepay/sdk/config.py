"""Configuration management for carepay.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - profile: path to profile.yaml (optional, if not colocated)
   - tax_rules_dir: directory of YYYY.yaml tax rules overriding the bundled ones
   - pay_frequency: default pay frequency for the household

2. profile.yaml - Household configuration
   - caregivers: per-caregiver base rate, premium multipliers and
     withholding elections (W-4) with effective dates

Config directory resolution:
1. CAREPAY_CONFIG_PATH environment variable (if set)
2. ~/.config/carepay/ (XDG_CONFIG_HOME fallback)

Tax rules directory resolution:
1. CAREPAY_TAX_RULES_DIR environment variable
2. settings.json "tax_rules_dir" key
3. tax_rules/ bundled with the package
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml


APP_NAME = "carepay"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"
BUNDLED_TAX_RULES_DIR = Path(__file__).parent.parent / "tax_rules"

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s: %(message)s"


class ProfileNotFoundError(Exception):
    """Raised when no profile is found."""
    pass


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from LOG_LEVEL (default WARNING).

    Args:
        level: Explicit level name, overrides LOG_LEVEL
    """
    level_name = (level or os.environ.get("LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. CAREPAY_CONFIG_PATH environment variable
    2. ~/.config/carepay/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("CAREPAY_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_tax_rules_dir() -> Path:
    """Get the directory holding YYYY.yaml tax rules files."""
    env_path = os.environ.get("CAREPAY_TAX_RULES_DIR")
    if env_path:
        return Path(env_path)

    custom_dir = get_setting("tax_rules_dir")
    if custom_dir:
        return Path(custom_dir)

    return BUNDLED_TAX_RULES_DIR


def get_profile_path(require_exists: bool = False) -> Path:
    """Get the path to the profile.yaml file.

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in config directory

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    custom_profile = get_setting("profile")
    if custom_profile:
        profile_path = Path(custom_profile)
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(
                f"Profile not found at configured path: {profile_path}\n\n"
                f"Update settings.json 'profile' or remove it to use {get_config_dir() / PROFILE_FILENAME}"
            )
        return profile_path

    profile_path = get_config_dir() / PROFILE_FILENAME
    if require_exists and not profile_path.exists():
        raise ProfileNotFoundError(
            f"No profile found. Checked:\n"
            f"  1. settings.json 'profile' key (not set)\n"
            f"  2. {profile_path} (not found)"
        )

    return profile_path


def load_profile(require_exists: bool = True) -> dict:
    """Load the household profile from profile.yaml.

    Args:
        require_exists: If True, raises ProfileNotFoundError if missing

    Returns:
        Profile dictionary (empty dict if missing and not required)
    """
    profile_path = get_profile_path(require_exists=require_exists)

    if not profile_path.exists():
        return {}

    with open(profile_path, "r") as f:
        return yaml.safe_load(f) or {}


def get_caregiver_profile(caregiver_id: str, profile: Optional[dict] = None) -> dict:
    """Get one caregiver's section of the profile.

    Returns:
        Caregiver dict (empty dict if the caregiver is not configured)
    """
    if profile is None:
        profile = load_profile(require_exists=False)
    # Unquoted YAML keys like `1:` load as ints
    caregivers = {str(k): v for k, v in (profile.get("caregivers") or {}).items()}
    return caregivers.get(str(caregiver_id)) or {}


def get_data_path() -> Path:
    """Get the data directory path (XDG_DATA_HOME/carepay/).

    Returns:
        Path to the data directory (created if doesn't exist)
    """
    xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
    data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path
