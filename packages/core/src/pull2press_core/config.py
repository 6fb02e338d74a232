import os
from pathlib import Path
from typing import Optional

import yaml

from pull2press_core.models import RegenerationPreset

DEFAULT_CONFIG: dict = {
    "provider": "openai",  # openai | anthropic | proxy
    "model": None,  # None = the provider's default model
    "proxy_url": None,
    "store": "noop",
    "store_path": ".pull2press.db",
    "max_commits": 20,
    "max_files": 50,
    "parallel_fetch": True,
    "include_discussion": False,  # also fetch PR comments and reviews
    "autosave_delay": 1.0,
    "presets": None,  # None = use built-in presets; set to a path string to override
    "user": None,  # None = PULL2PRESS_USER or the OS account name
}

BUILTIN_PRESETS = Path(__file__).parent / "presets.yml"


def load_config(config_path: str = ".pull2press.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .pull2press.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Credentials only ever come from the environment, never from the YAML file.
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")
    config["proxy_key"] = os.environ.get("PULL2PRESS_PROXY_KEY")
    if os.environ.get("PULL2PRESS_PROXY_URL"):
        config["proxy_url"] = os.environ["PULL2PRESS_PROXY_URL"]

    return config


def load_presets(config: dict) -> list[RegenerationPreset]:
    """
    Load regeneration presets.

    If ``presets`` is set in config, loads from that YAML path (relative to cwd).
    Otherwise falls back to the bundled presets.
    """
    custom_path = config.get("presets")
    if custom_path:
        p = Path(custom_path)
        if not p.exists():
            raise FileNotFoundError(f"Presets file not found: {custom_path}")
    else:
        p = BUILTIN_PRESETS
        if not p.exists():
            raise FileNotFoundError("No presets configured and the built-in presets file is missing.")

    entries = yaml.safe_load(p.read_text()) or []
    return [
        RegenerationPreset(
            name=entry["name"],
            description=entry.get("description", ""),
            system_prompt_modifier=entry.get("system_prompt_modifier", ""),
            user_prompt_modifier=entry.get("user_prompt_modifier", ""),
            temperature=float(entry.get("temperature", 0.7)),
            is_default=bool(entry.get("is_default", False)),
        )
        for entry in entries
    ]


def find_preset(presets: list[RegenerationPreset], name: str) -> RegenerationPreset | None:
    """Case-insensitive lookup by preset name."""
    wanted = name.strip().lower()
    for preset in presets:
        if preset.name.lower() == wanted:
            return preset
    return None
