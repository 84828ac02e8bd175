"""
Configuration loading for the portal scraper.

Defaults live in code; ``portal.yaml`` under CONFIG_PATH and caller overrides
are merged on top with OmegaConf.
"""

import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.dictconfig import DictConfig

load_dotenv()
CONFIG_PATH = Path(os.getenv("CONFIG_PATH", "config"))

DEFAULT_PORTAL_CONFIG = {
    "base_url": "https://www.seduc.pa.gov.br/portal/boletim_online/",
    "result_path": "visualizaBoletim.php",
    "session_cookie": "PHPSESSID",
    "timeout": 30,
    "min_year": 2020,
    "max_year": 2025,
    "user_agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
}


def merge_configs(config_paths: List[Union[str, Path]]) -> DictConfig:
    """
    Merge multiple YAML configuration files with precedence. Later configs override earlier ones.

    Args:
        config_paths: List of paths to YAML config files. Later configs take precedence.

    Returns:
        DictConfig: Merged configuration object

    Raises:
        ValueError: If config_paths is empty
        FileNotFoundError: If any config file doesn't exist

    Example:
        >>> config = merge_configs(["config/portal.yaml", "config/local.yaml"])
        >>> config.timeout
        30
    """
    if not config_paths:
        raise ValueError("config_paths is empty!")

    merged = OmegaConf.load(config_paths[0])

    for config_path in config_paths[1:]:
        config = OmegaConf.load(config_path)
        merged = OmegaConf.unsafe_merge(merged, config)

    return merged


def load_portal_config(
    overrides: Optional[Union[DictConfig, dict, Sequence[Union[str, Path]]]] = None,
    config_dir: Path = CONFIG_PATH,
) -> DictConfig:
    """
    Build the portal configuration.

    Precedence (lowest to highest): built-in defaults, ``portal.yaml`` in
    ``config_dir`` when present, then ``overrides``.

    Args:
        overrides: A DictConfig, a plain dict, or a list of YAML paths merged in order
        config_dir: Directory holding ``portal.yaml`` (default: CONFIG_PATH from environment)

    Returns:
        DictConfig with every key of DEFAULT_PORTAL_CONFIG

    Raises:
        TypeError: If overrides is of an unsupported type
    """
    config = OmegaConf.create(DEFAULT_PORTAL_CONFIG)

    portal_yaml = Path(config_dir) / "portal.yaml"
    if portal_yaml.exists():
        config = OmegaConf.merge(config, OmegaConf.load(portal_yaml))

    if overrides is None:
        return config

    if isinstance(overrides, (DictConfig, dict)):
        return OmegaConf.merge(config, overrides)
    elif isinstance(overrides, (list, tuple)):
        return OmegaConf.merge(config, merge_configs(list(overrides)))
    else:
        raise TypeError(
            f"overrides must be DictConfig, dict, or a list of paths, got {type(overrides)}"
        )
