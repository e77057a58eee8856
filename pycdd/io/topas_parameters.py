"""
Reading of TOPAS parameter files.

Scorer settings are usually kept in TOPAS parameter files, one parameter per line:

.. code-block:: text

    s:Sc/DNADamage/Quantity                        = "ClusteredDNADamage"
    i:Sc/DNADamage/BasePairDistanceForDefiningDSB  = 10
    d:Sc/DNADamage/EnergyThresholdForHavingSSB     = 17.5 eV
    i:Sc/DNADamage/NumberOfSplit                   = 1   # variance reduction

This module parses such files into plain Python values. Only the scalar types used by
scorers are supported (``i``, ``d``, ``u``, ``s``, ``b``); vector parameters are skipped
and dimensioned doubles are converted to eV when their unit is an energy unit.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional, Union
import re
import warnings

ENERGY_UNITS_IN_EV = {
    "meV": 1e-3,
    "eV": 1.0,
    "keV": 1e3,
    "MeV": 1e6,
    "GeV": 1e9,
}

_LINE = re.compile(r"^\s*([a-zA-Z]+):([^\s=]+)\s*=\s*(.+?)\s*$")
_UNSUPPORTED = object()


def _convert(type_code: str, raw: str, name: str):
    tokens = raw.split()
    code = type_code.lower()

    if code == "i":
        return int(tokens[0])
    if code in ("d", "u"):
        value = float(tokens[0])
        if len(tokens) > 1:
            unit = tokens[1]
            if unit not in ENERGY_UNITS_IN_EV:
                warnings.warn(f"Unit '{unit}' of parameter '{name}' is not an energy unit; value kept as is.")
                return value
            value *= ENERGY_UNITS_IN_EV[unit]
        return value
    if code == "s":
        return raw.strip().strip('"')
    if code == "b":
        return raw.strip().strip('"').lower() in ("true", "t", "1")

    return _UNSUPPORTED


def parse_topas_parameters(lines: Iterable[str], prefix: Optional[str] = None) -> Dict[str, object]:
    """
    Parse TOPAS parameter lines into a name → value dictionary.

    Comments (``#`` to end of line), blank lines and ``includeFile`` directives are
    skipped. Later definitions override earlier ones, as in TOPAS. Vector parameters
    (``iv``, ``dv``, ``sv``, ...) and other unsupported types are left out.

    When ``prefix`` is given, only parameters whose name starts with it are converted.
    Other lines, including ones that cannot be parsed (e.g. continuation lines of long
    vectors), are skipped without inspecting their values or units.

    :param lines: Lines of a parameter file.
    :type lines: Iterable[str]
    :param prefix: Optional name prefix, e.g. ``"Sc/DNADamage/"``.
    :type prefix: str, optional

    :returns: Full parameter names (e.g. ``"Sc/DNADamage/NumberOfSplit"``) mapped to
        int, float (energies in eV), str or bool.
    :rtype: dict[str, object]

    :raises ValueError: If a line cannot be parsed. With ``prefix`` set, only lines
        mentioning the prefix raise.
    """
    parameters: Dict[str, object] = {}
    for number, line in enumerate(lines, start=1):
        content = line.split("#", 1)[0].strip()
        if not content or content.lower().startswith("includefile"):
            continue
        match = _LINE.match(content)
        if match is None:
            if prefix is not None and prefix not in content:
                continue
            raise ValueError(f"Cannot parse TOPAS parameter line {number}: {line.strip()!r}")
        type_code, name, raw = match.groups()
        if prefix is not None and not name.startswith(prefix):
            continue
        value = _convert(type_code, raw, name)
        if value is not _UNSUPPORTED:
            parameters[name] = value
    return parameters


def read_topas_parameters(source: Union[str, Path], prefix: Optional[str] = None) -> Dict[str, object]:
    """
    Read a TOPAS parameter file from disk (see :func:`parse_topas_parameters`).

    :raises FileNotFoundError: If the file does not exist.
    """
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r") as f:
        return parse_topas_parameters(f, prefix)


def scorer_prefix(scorer_name: str) -> str:
    """Name prefix shared by the parameters of one scorer."""
    return f"Sc/{scorer_name}/"


def scorer_parameters(parameters: Dict[str, object], scorer_name: str) -> Dict[str, object]:
    """
    Select the parameters of one scorer, keyed by their short name.

    :param parameters: Output of :func:`parse_topas_parameters`.
    :type parameters: dict[str, object]
    :param scorer_name: Scorer name, the middle part of ``Sc/<scorer_name>/<Parameter>``.
    :type scorer_name: str

    :returns: Short parameter names mapped to values.
    :rtype: dict[str, object]
    """
    prefix = scorer_prefix(scorer_name)
    return {k[len(prefix):]: v for k, v in parameters.items() if k.startswith(prefix)}
