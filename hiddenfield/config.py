# hiddenfield/config.py
"""
String-property configuration for checks.

Checks are configured the way analysis modules usually are: by name, with
a flat mapping of string properties::

    {
        "HiddenField": {
            "tokens": "VARIABLE_DEF, PARAMETER_DEF",
            "ignoreFormat": "^ignore",
            "ignoreSetter": "true",
            "ignoreConstructorParameter": "false",
            "severity": "warning"
        }
    }

Properties are converted and applied once, before any tree is walked.
Every conversion failure is a ``ConfigurationError``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from hiddenfield.api import DEFAULT_REGISTRY, Check, CheckRegistry
from hiddenfield.errors import ConfigurationError, ErrorCodes

_log = logging.getLogger(__name__)

_TRUE = frozenset({"true", "yes", "on", "1"})
_FALSE = frozenset({"false", "no", "off", "0"})


def to_bool(value: Union[str, bool], prop: str = "") -> bool:
    """Convert a property string to a boolean."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(
        f"cannot convert {value!r} to a boolean",
        code=ErrorCodes.INVALID_VALUE,
        prop=prop,
        value=value,
        hint="use true or false",
    )


def _to_str(value: Any, prop: str = "") -> str:
    return "" if value is None else str(value)


def to_token_list(value: Union[str, List[str]]) -> List[str]:
    """Split a comma separated token list; blanks are dropped."""
    if isinstance(value, str):
        value = value.split(",")
    return [v.strip() for v in value if v.strip()]


@dataclass
class CheckConfig:
    """Configuration of one check module."""
    name: str
    properties: Dict[str, Any] = field(default_factory=dict)


def _setters(check: Check) -> Dict[str, Callable[[Any], None]]:
    setters: Dict[str, Callable[[Any], None]] = {
        "tokens": lambda v: check.set_tokens(to_token_list(v)),
        "severity": check.set_severity,
    }
    # Check-specific properties, looked up by convention.
    specific: Dict[str, Tuple[str, Callable[[Any, str], Any]]] = {
        "ignoreFormat": ("set_ignore_format", _to_str),
        "ignoreSetter": ("set_ignore_setter", to_bool),
        "ignoreConstructorParameter": ("set_ignore_constructor_parameter", to_bool),
    }
    for prop, (attr, convert) in specific.items():
        method = getattr(check, attr, None)
        if method is not None:
            setters[prop] = lambda v, m=method, c=convert, p=prop: m(c(v, p))
    return setters


def configure(check: Check, properties: Mapping[str, Any]) -> Check:
    """Apply string ``properties`` to ``check`` and return it."""
    setters = _setters(check)
    for prop, value in properties.items():
        setter = setters.get(prop)
        if setter is None:
            raise ConfigurationError(
                f"property {prop!r} does not exist for {check.name}",
                code=ErrorCodes.UNKNOWN_PROPERTY,
                prop=prop,
                value=value,
                hint="known: " + ", ".join(sorted(setters)),
            )
        _log.debug("%s: %s=%r", check.name, prop, value)
        setter(value)
    return check


def create_check(
    config: CheckConfig,
    registry: Optional[CheckRegistry] = None,
) -> Check:
    """Instantiate and configure the check named in ``config``."""
    registry = registry or DEFAULT_REGISTRY
    cls = registry.get_by_name(config.name)
    if cls is None:
        raise ConfigurationError(
            f"unknown check {config.name!r}",
            code=ErrorCodes.UNKNOWN_CHECK,
            value=config.name,
            hint="known: " + ", ".join(registry.names),
        )
    return configure(cls(), config.properties)


def load_config(path: Union[str, Path]) -> List[CheckConfig]:
    """Read check configurations from a JSON file."""
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigurationError(
            f"cannot read configuration {p}: {exc}",
            code=ErrorCodes.INVALID_VALUE,
            value=str(p),
        ) from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"configuration {p} must be a JSON object of check modules",
            code=ErrorCodes.INVALID_VALUE,
            value=str(p),
        )
    configs = []
    for name, props in raw.items():
        if not isinstance(props, dict):
            raise ConfigurationError(
                f"properties of {name!r} must be an object",
                code=ErrorCodes.INVALID_VALUE,
                value=props,
            )
        configs.append(CheckConfig(name=name, properties=dict(props)))
    return configs


__all__ = [
    "CheckConfig",
    "configure",
    "create_check",
    "load_config",
    "to_bool",
    "to_token_list",
]
