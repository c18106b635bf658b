"""
Key registry - the declared set of regular translation keys.

Keys are declared explicitly, either in code or in a YAML file:

    # keys.yaml, plain list: host IDs equal the key names
    - Title
    - Description

    # keys.yaml, mapping: key name -> identifier the host knows it by
    Title: MyMod.Title
    SettingTitle: Options.SECTION[MyMod]

Temporary keys ('@@' prefix) live only inside a table and can never be
registered.
"""

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

import yaml

from .resolver import REFERENCE_MARKER


class KeyRegistry:
    """Ordered set of valid keys, each with the ID it is published under."""

    def __init__(self, keys: Iterable[str] | Mapping[str, str]) -> None:
        if isinstance(keys, Mapping):
            host_ids = {str(k): str(v) for k, v in keys.items()}
        else:
            host_ids = {str(k): str(k) for k in keys}

        for key in host_ids:
            if not key or key.startswith(REFERENCE_MARKER):
                raise ValueError(f"Invalid translation key for registry: [{key}]")
        self._host_ids = host_ids

    @classmethod
    def from_yaml(cls, path: Path) -> "KeyRegistry":
        """Load a registry from a YAML list or mapping.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the document is neither a list nor a mapping.
        """
        if not path.exists():
            raise FileNotFoundError(f"Key registry file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls([])
        if isinstance(data, (list, dict)):
            return cls(data)
        raise ValueError(f"Key registry {path} must be a YAML list or mapping")

    def host_id(self, key: str) -> str:
        return self._host_ids.get(key, key)

    @property
    def keys(self) -> list[str]:
        return list(self._host_ids)

    def __contains__(self, key: object) -> bool:
        return key in self._host_ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._host_ids)

    def __len__(self) -> int:
        return len(self._host_ids)

    def __repr__(self) -> str:
        return f"<KeyRegistry(keys={len(self)})>"
