"""
Configuration for declared column type name mappings.

Maps the declared database type name a driver reports for a column
(e.g. 'VARCHAR', 'BIGINT') to the decode kind used to materialize it.
Lookups are case-sensitive: 'varchar' and 'VARCHAR' are distinct names.
Names without a mapping resolve to the fallback kind (RAW by default).
"""
import json
import logging
import pathlib
from typing import Any, Self

from recordset.types import DecodeKind

logger = logging.getLogger(__name__)

DEFAULT_TYPE_MAPPING: dict[str, DecodeKind] = {}

for name in ['VARCHAR', 'TEXT', 'CHAR', 'UUID']:
    DEFAULT_TYPE_MAPPING[name] = DecodeKind.STRING

for name in ['BOOL']:
    DEFAULT_TYPE_MAPPING[name] = DecodeKind.BOOL

for name in ['INT', 'BIGINT', 'SMALLINT']:
    DEFAULT_TYPE_MAPPING[name] = DecodeKind.INT64

for name in ['FLOAT', 'DOUBLE', 'DECIMAL']:
    DEFAULT_TYPE_MAPPING[name] = DecodeKind.FLOAT64

for name in ['TIMESTAMP', 'DATETIME', 'DATE']:
    DEFAULT_TYPE_MAPPING[name] = DecodeKind.TIMESTAMP

DEFAULT_CONFIG_LOCATIONS = [
    pathlib.Path('~/.config/recordset/type_mapping.json').expanduser(),
    pathlib.Path('/etc/recordset/type_mapping.json'),
    pathlib.Path('type_mapping.json'),
    ]


class TypeMapping:
    """Declared type name to decode kind mapping"""

    _instance = None

    @classmethod
    def get_instance(cls) -> 'TypeMapping':
        """Get the process-wide default mapping, loading config files on first use"""
        if cls._instance is None:
            cls._instance = cls()
            for location in DEFAULT_CONFIG_LOCATIONS:
                if location.exists():
                    cls._instance.load_config(location)
                    break
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        cls._instance = None

    def __init__(self, mapping: dict[str, Any] | None = None,
                 fallback: DecodeKind = DecodeKind.RAW) -> None:
        self._mapping: dict[str, DecodeKind] = dict(DEFAULT_TYPE_MAPPING)
        self.fallback = fallback
        if mapping:
            self.update(mapping)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def resolve(self, type_name: str | None) -> DecodeKind:
        """Return the decode kind for a declared type name."""
        if type_name is None:
            return self.fallback
        return self._mapping.get(type_name, self.fallback)

    def register(self, type_name: str, kind: DecodeKind | str) -> None:
        """Map a declared type name to a decode kind, replacing any existing entry."""
        self._mapping[type_name] = DecodeKind.from_name(kind)

    def update(self, mapping: dict[str, Any]) -> None:
        for type_name, kind in mapping.items():
            self.register(type_name, kind)

    def load_config(self, config_file: str | pathlib.Path) -> None:
        """Merge mappings from a JSON file of {"TYPE NAME": "kind"} entries"""
        try:
            with pathlib.Path(config_file).open() as f:
                config = json.load(f)
            self.update(config)
            logger.info(f'Loaded type mapping configuration from {config_file}')
        except Exception as e:
            logger.warning(f'Failed to load type mapping config: {e}')

    def copy(self) -> Self:
        clone = type(self)(fallback=self.fallback)
        clone._mapping = dict(self._mapping)
        return clone

    def to_dict(self) -> dict[str, str]:
        return {type_name: kind.value for type_name, kind in self._mapping.items()}
