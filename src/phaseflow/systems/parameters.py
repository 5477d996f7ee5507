# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Parameter specification parsing.

A parameter specification is a flat mapping from identifier to real number,
supplied either as a Mapping or as JSON object text (the form typed into an
editor). Anything else is a ParameterError.

Reserved names
--------------
``x`` and ``y`` are the state variables, ``pi`` and ``e`` are constants and
the function names cannot be rebound, so none of them may be used as
parameter names.
"""

import json
import math
import numbers
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from phaseflow.exceptions import ParameterError
from phaseflow.expressions.nodes import CONSTANTS, FUNCTIONS

STATE_VARIABLES = ("x", "y")
RESERVED_NAMES = frozenset(STATE_VARIABLES + CONSTANTS + FUNCTIONS)

ParameterSpec = Union[None, str, Mapping[str, Any]]


def _check_value(name: str, value: Any) -> float:
    # bool is an Integral subclass but never a meaningful parameter
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ParameterError(
            f"Parameter '{name}' must be a real number, got {type(value).__name__} {value!r}"
        )
    value = float(value)
    if not math.isfinite(value):
        raise ParameterError(f"Parameter '{name}' must be finite, got {value}")
    return value


def _check_name(name: Any) -> str:
    if not isinstance(name, str):
        raise ParameterError(f"Parameter names must be strings, got {name!r}")
    if not name.isidentifier():
        raise ParameterError(f"Parameter name '{name}' is not a valid identifier")
    if name in RESERVED_NAMES:
        raise ParameterError(f"Parameter name '{name}' is reserved")
    return name


def parse_parameters(spec: ParameterSpec = None) -> Mapping[str, float]:
    """
    Validate a parameter specification.

    Parameters
    ----------
    spec : None, str or Mapping
        - None or blank text: no parameters
        - str: JSON object text, e.g. '{"mu": 1}'
        - Mapping: name -> number

    Returns
    -------
    Mapping[str, float]
        Read-only mapping of validated parameters

    Raises
    ------
    ParameterError
        If the text is not valid JSON, does not decode to an object, or any
        entry is not identifier -> finite real number

    Examples
    --------
    >>> dict(parse_parameters('{"mu": 1, "gamma": 0.1}'))
    {'mu': 1.0, 'gamma': 0.1}
    >>> parse_parameters('[1, 2]')
    Traceback (most recent call last):
    ...
    phaseflow.exceptions.ParameterError: Parameters must be a JSON object, got list
    """
    if spec is None:
        return MappingProxyType({})

    if isinstance(spec, str):
        if not spec.strip():
            return MappingProxyType({})
        try:
            decoded = json.loads(spec)
        except json.JSONDecodeError as e:
            raise ParameterError(f"Invalid JSON in parameters: {e}") from e
        if not isinstance(decoded, dict):
            raise ParameterError(
                f"Parameters must be a JSON object, got {type(decoded).__name__}"
            )
        spec = decoded

    if not isinstance(spec, Mapping):
        raise ParameterError(
            f"Parameters must be a mapping or JSON text, got {type(spec).__name__}"
        )

    parameters = {}
    for name, value in spec.items():
        parameters[_check_name(name)] = _check_value(name, value)

    return MappingProxyType(parameters)


def validate_parameters(spec: ParameterSpec) -> Optional[str]:
    """
    Check a specification without raising.

    Returns
    -------
    Optional[str]
        None if valid, otherwise the error message
    """
    try:
        parse_parameters(spec)
    except ParameterError as e:
        return str(e)
    return None


__all__ = [
    "STATE_VARIABLES",
    "RESERVED_NAMES",
    "ParameterSpec",
    "parse_parameters",
    "validate_parameters",
]
