"""Load factory configurations from YAML, TOML, or JSON files.

A config file holds one mapping::

    default = "worker"

    [instances.ui]

    [instances.worker]
    instance = "bg-worker"
    serialize = true
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, TYPE_CHECKING

from .registry import FactoryRegistry

if TYPE_CHECKING:
    from .codec.base import Codec
    from .transport import Transport

_TOP_LEVEL_KEYS = frozenset({"default", "instances"})


def load_config(path: str | Path) -> dict[str, Any]:
    """Load a configuration dict from a file, dispatched by extension.

    Supported extensions: ``.json``, ``.toml``, ``.yaml`` / ``.yml``.
    An empty file loads as ``{}``. A file whose root is not a mapping, or
    that has keys other than ``default`` and ``instances``, raises
    ``ValueError``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    loader = _LOADERS.get(suffix)
    if loader is None:
        raise ValueError(
            f"Unsupported config file extension {suffix!r}. "
            "Use .json, .toml, .yaml, or .yml."
        )
    data = loader(path)
    return _check_shape(data if data is not None else {}, path)


def registry_from_config(
    path: str | Path,
    transport: Transport,
    codec: Codec | None = None,
) -> FactoryRegistry:
    """Load a :class:`FactoryRegistry` from a config file."""
    data = load_config(path)
    return FactoryRegistry.from_config(data, transport, codec)


def _check_shape(data: Any, path: Path) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(
            f"{path}: config root must be a mapping, got {type(data).__name__}"
        )
    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ValueError(f"{path}: unknown top-level keys {sorted(unknown)}")
    return data


# ── Internal loaders ─────────────────────────────────────────────

def _load_json(path: Path) -> Any:
    text = path.read_text()
    return json.loads(text) if text.strip() else None


def _load_toml(path: Path) -> Any:
    """Load TOML using ``tomllib`` (3.11+) or ``tomli``."""
    try:
        import tomllib  # type: ignore[import-not-found]
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore[no-redef]
        except ModuleNotFoundError:
            raise ImportError(
                "TOML support requires Python 3.11+ (built-in tomllib) "
                "or the 'tomli' package. Install with: pip install callwire[toml]"
            )
    with open(path, 'rb') as f:
        return tomllib.load(f)


def _load_yaml(path: Path) -> Any:
    """Load YAML using ``pyyaml``."""
    try:
        import yaml
    except ModuleNotFoundError:
        raise ImportError(
            "YAML support requires the 'pyyaml' package. "
            "Install with: pip install callwire[yaml]"
        )
    with open(path) as f:
        return yaml.safe_load(f)


_LOADERS: dict[str, Callable[[Path], Any]] = {
    '.json': _load_json,
    '.toml': _load_toml,
    '.yaml': _load_yaml,
    '.yml': _load_yaml,
}
