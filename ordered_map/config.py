from dataclasses import dataclass
from typing import Literal
import yaml


SUPPORTED_KEYS_VIEWS = ["copy", "view"]
SupportedKeysView = Literal["copy", "view"]

SUPPORTED_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _lookup(data: dict, name: str, default):
    # Accept both `keys-view` and `keys_view` spellings
    dashed = name.replace("_", "-")
    if dashed in data:
        return data[dashed]
    return data.get(name, default)


@dataclass
class OrderedMapConfig:
    keys_view: SupportedKeysView = "copy"
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.keys_view not in SUPPORTED_KEYS_VIEWS:
            raise ValueError(f"keys_view must be in {SUPPORTED_KEYS_VIEWS}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in SUPPORTED_LOG_LEVELS:
            raise ValueError(f"log_level must be in {SUPPORTED_LOG_LEVELS}")

    @classmethod
    def from_dict(cls, data) -> "OrderedMapConfig":
        data = data or {}
        return cls(
            keys_view=_lookup(data, "keys_view", cls.keys_view),
            log_level=_lookup(data, "log_level", cls.log_level),
        )

    @classmethod
    def from_yaml(cls, fileobj) -> "OrderedMapConfig":
        data = yaml.safe_load(fileobj)
        return cls.from_dict(data)
