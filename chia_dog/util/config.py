from __future__ import annotations

import copy
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Optional, Union, cast

import importlib_resources
import yaml

log = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "config.yaml"
SERVICE_NAME = "dog_driver"


def initial_config_file(filename: Union[str, Path]) -> str:
    initial_config_path = importlib_resources.files(__name__.rpartition(".")[0]).joinpath(f"initial-{filename}")
    contents: str = initial_config_path.read_text(encoding="utf-8")
    return contents


def default_config() -> dict[str, Any]:
    r: dict[str, Any] = yaml.safe_load(initial_config_file(DEFAULT_CONFIG_FILENAME))
    return r


def config_path_for_filename(root_path: Path, filename: Union[str, Path]) -> Path:
    path_filename = Path(filename)
    if path_filename.is_absolute():
        return path_filename
    return root_path / "config" / filename


def save_config(root_path: Path, filename: Union[str, Path], config_data: Any) -> None:
    path: Path = config_path_for_filename(root_path, filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(dir=path.parent) as tmp_dir:
        tmp_path: Path = Path(tmp_dir) / Path(filename).name
        with open(tmp_path, "w") as f:
            yaml.safe_dump(config_data, f)
        try:
            os.replace(str(tmp_path), path)
        except PermissionError:
            shutil.move(str(tmp_path), str(path))


def _merge(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    root_path: Optional[Path] = None,
    filename: Union[str, Path] = DEFAULT_CONFIG_FILENAME,
    sub_config: Optional[str] = None,
) -> dict[str, Any]:
    """
    Returns the shipped defaults with the config file at `root_path/config/filename`
    layered on top. A missing file is not an error, the defaults are used as is.
    """
    config = default_config()
    if root_path is not None:
        path = config_path_for_filename(root_path, filename)
        if path.is_file():
            with open(path) as opened_config_file:
                r = yaml.safe_load(opened_config_file)
            if r is None:
                log.warning(f"yaml.safe_load returned None: {path}")
            elif not isinstance(r, dict):
                raise ValueError(f"Config file {path} does not contain a mapping")
            else:
                config = _merge(config, r)
        else:
            log.debug(f"No config file at {path}, using defaults")
    if sub_config is not None:
        config = cast(dict[str, Any], config.get(sub_config))
    return config


def traverse_dict(d: dict[str, Any], key_path: str) -> Any:
    """
    Traverse nested dictionaries to find the element pointed-to by key_path.
    Key path components are separated by a ':' e.g.
      "root:child:a"
    """
    if type(d) is not dict:
        raise TypeError(f"unable to traverse into non-dict value with key path: {key_path}")

    # Extract one path component at a time
    components = key_path.split(":", maxsplit=1)
    if components is None or len(components) == 0:
        raise KeyError(f"invalid config key path: {key_path}")

    key = components[0]
    remaining_key_path = components[1] if len(components) > 1 else None

    val: Any = d.get(key, None)
    if val is not None:
        if remaining_key_path is not None:
            return traverse_dict(val, remaining_key_path)
        return val
    else:
        raise KeyError(f"value not found for key: {key}")
