"""Configuration management for nginx-route-check profiles.

A profile gives a short name to an nginx configuration file and,
optionally, a default URL to test against it.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


@dataclass
class Profile:
    """A saved configuration file reference."""

    name: str
    path: str
    url: str | None = None


class ConfigManager:
    """Manages profiles stored in YAML format."""

    def __init__(self, config_dir: Path | None = None) -> None:
        if config_dir is None:
            # Check for environment variable override
            env_config = os.getenv("NGINX_ROUTE_CHECK_CONFIG")
            if env_config:
                config_dir = Path(env_config).expanduser().resolve()
            else:
                # Default to ~/.nginx-route-check
                config_dir = Path.home() / ".nginx-route-check"

        self.config_dir = config_dir
        self.profiles_file = config_dir / "profiles.yaml"

    def _load_profiles(self) -> dict[str, Any]:
        """Load all profiles from the YAML file."""
        if not self.profiles_file.exists():
            return {}

        with open(self.profiles_file, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.profiles_file} must contain a mapping of profiles")
        return data

    def _save_profiles(self, profiles: dict[str, Any]) -> None:
        """Save profiles to the YAML file, creating the directory on first use."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.profiles_file, "w") as f:
            yaml.safe_dump(profiles, f)

    def add_profile(self, name: str, path: str, url: str | None = None) -> Profile:
        """Add or update a profile. The file path is stored absolute."""
        profiles = self._load_profiles()
        resolved = str(Path(path).expanduser().resolve())
        profiles[name] = {"path": resolved, "url": url}
        self._save_profiles(profiles)
        return Profile(name=name, path=resolved, url=url)

    def get_profile(self, name: str) -> Profile | None:
        """Get a profile by name."""
        data = self._load_profiles().get(name)
        if not data:
            return None
        return Profile(name=name, path=data["path"], url=data.get("url"))

    def list_profiles(self) -> dict[str, Any]:
        """List all available profiles."""
        return self._load_profiles()

    def remove_profile(self, name: str) -> bool:
        """Remove a profile."""
        profiles = self._load_profiles()
        if name in profiles:
            del profiles[name]
            self._save_profiles(profiles)
            return True
        return False
