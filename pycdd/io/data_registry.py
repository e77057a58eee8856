"""
Discovery of bundled scorer parameter presets.

This module provides functions to:

- Locate the TOPAS parameter files shipped under :mod:`pycdd.data.defaults`
- List the available presets

All paths are resolved with :mod:`importlib.resources`, with a fallback to the source
tree for development checkouts.
"""

import os
import importlib.util
from typing import List
from pathlib import Path

PRESET_SUFFIX = ".txt"


def get_default_parameter_path(name: str) -> str:
    """
    Locate a bundled parameter preset.

    :param name: Preset name, with or without the ``.txt`` suffix (e.g. ``"topas_nbio"``).
    :type name: str

    :returns: Absolute path to the preset file.
    :rtype: str

    :raises FileNotFoundError: If the preset cannot be found.
    """
    filename = name if name.endswith(PRESET_SUFFIX) else f"{name}{PRESET_SUFFIX}"
    try:
        spec = importlib.util.find_spec("pycdd.data.defaults")
        if spec is not None and spec.origin is not None:
            full_path = os.path.join(os.path.dirname(spec.origin), filename)
            if os.path.exists(full_path):
                return full_path
    except ModuleNotFoundError:
        pass

    local = os.path.abspath(
        os.path.join(os.path.dirname(__file__), "..", "data", "defaults", filename)
    )
    if os.path.exists(local):
        return local

    raise FileNotFoundError(f"Cannot find parameter preset '{name}'")


def list_available_defaults() -> List[str]:
    """
    List the names of the bundled parameter presets.

    :returns: Sorted preset names without suffix.
    :rtype: list[str]
    """
    try:
        from importlib.resources import files
        folder = files("pycdd.data.defaults")
        names = [f.name for f in folder.iterdir() if f.name.endswith(PRESET_SUFFIX)]
    except ModuleNotFoundError:
        folder_path = Path(__file__).parent.parent / "data" / "defaults"
        names = [f.name for f in folder_path.iterdir() if f.suffix == PRESET_SUFFIX]
    return sorted(n[: -len(PRESET_SUFFIX)] for n in names)
