#!/usr/bin/env python3

import os
import json
import tempfile
import tomllib
from pathlib import Path

import logging
import sys

import yaml

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("dotsync")

# Environment variables that switch the whole pass off
GLOBAL_DISABLE_ENV = "SYNC_DISABLED"

ENV_PREFIX = "DOTSYNC_"


def get_config_path(env=None):
    """Get the path to the configuration file.

    Checks in order:
    1. DOTSYNC_CONFIG environment variable
    2. ~/.dotsync/ directory (config.json, config.toml, config.yaml, config.yml)
    """
    env = os.environ if env is None else env
    if env.get('DOTSYNC_CONFIG'):
        path = Path(env['DOTSYNC_CONFIG']).expanduser()
        if path.exists():
            return path

    dotsync_dir = Path.home() / '.dotsync'
    for filename in ['config.json', 'config.toml', 'config.yaml', 'config.yml']:
        path = dotsync_dir / filename
        if path.exists() and path.stat().st_size > 0:
            return path

    # If no file exists, return default path
    return dotsync_dir / 'config.json'


def load_config(env=None):
    """Load configuration from file, then apply environment overrides.

    Args:
        env: Mapping used for environment lookups (default: os.environ)
    """
    env = os.environ if env is None else env
    config_path = get_config_path(env)

    config = get_default_config()

    if config_path.exists():
        try:
            if config_path.suffix.lower() == '.toml':
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
            else:
                with open(config_path, 'r') as f:
                    file_config = json.load(f)

            config = merge_configs(config, file_config)
        except Exception as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    config = apply_env_overrides(config, env)
    config = apply_domain_env(config, env)

    return config


def get_default_config():
    """Get default configuration."""
    return {
        "general": {
            "interval_seconds": 4 * 60 * 60,
            "ignore_seconds": 24 * 60 * 60,
            "state_dir": tempfile.gettempdir(),
            "git_timeout_seconds": None,
        },
        "circuit_breaker": {
            "max_failures": 3,
            "window_seconds": 60 * 60,
            "scope": "global",
        },
        "ui": {
            "selector": "auto",
        },
        "logging": {
            "level": "WARNING",
        },
        "domains": [
            {
                "name": "dotfiles",
                "ledger_tag": "dotfiles",
                "label": "Dotfiles",
                "path": "~/.dotfiles",
                "path_env": "DOTFILES_PATH",
                "remote": "origin",
                "branch": "main",
                "disable_env": "DOTFILES_SYNC_DISABLED",
                "track_local_changes": True,
            },
            {
                "name": "agent-config",
                "ledger_tag": "claude",
                "label": "Claude config",
                "path": "~/.claude",
                "path_env": "CLAUDE_DIR",
                "remote": "origin",
                "branch": "main",
                "clone_url": "",
                "clone_url_env": "CLAUDE_REPO_URL",
                "disable_env": "CLAUDE_SYNC_DISABLED",
                "track_local_changes": False,
                "change_detector": "scripts/check-claude-changes.sh",
            },
        ],
    }


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        elif key == "domains" and isinstance(value, list):
            merged[key] = merge_domains(merged.get(key, []), value)
        else:
            merged[key] = value

    return merged


def merge_domains(base_domains, override_domains):
    """Merge domain descriptors by name; unknown names are appended in order."""
    merged = [dict(d) for d in base_domains]
    by_name = {d.get("name"): d for d in merged}

    for domain in override_domains:
        name = domain.get("name")
        if name in by_name:
            by_name[name].update(domain)
        else:
            entry = dict(domain)
            merged.append(entry)
            by_name[name] = entry

    return merged


def apply_env_overrides(config, env=None):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: DOTSYNC_SECTION_KEY
    For example: DOTSYNC_GENERAL_INTERVAL_SECONDS=600
    """
    env = os.environ if env is None else env

    for env_key, value in env.items():
        if not env_key.startswith(ENV_PREFIX) or env_key == 'DOTSYNC_CONFIG':
            continue

        key_parts = env_key[len(ENV_PREFIX):].lower().split('_')

        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if matched_key:
                if i + best_match_len == len(key_parts):
                    current_level[matched_key] = typed_value
                    break

                if isinstance(current_level[matched_key], dict):
                    current_level = current_level[matched_key]
                    i += best_match_len
                else:
                    # Path conflict, e.g., env var is longer but we found a non-dict value
                    break
            else:
                break

    return config


def apply_domain_env(config, env=None):
    """Resolve per-domain path and clone URL variables (DOTFILES_PATH, CLAUDE_DIR, ...)."""
    env = os.environ if env is None else env

    for domain in config.get("domains", []):
        path_env = domain.get("path_env")
        if path_env and path_env in env:
            domain["path"] = env[path_env]

        url_env = domain.get("clone_url_env")
        if url_env and env.get(url_env):
            domain["clone_url"] = env[url_env]

    return config


def configure_logging(config, verbose=False):
    """Set the dotsync logger level from configuration."""
    level_name = "DEBUG" if verbose else str(config.get("logging", {}).get("level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)
    logger.setLevel(level)
    return level
