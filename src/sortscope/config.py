"""
Engine configuration.

Public API (stable):
    EngineConfig
    load_config(path) -> EngineConfig

YAML layout (either a top-level mapping or the `engine:` block of an experiment
config):

    engine:
      pacing_seconds: 0.003     # sleep after every event; 0 disables pacing
      buffer_events: true       # keep events on the handle for handle.events()
      thread_name_prefix: sortscope-run
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

__all__ = ["EngineConfig", "load_config", "DEFAULT_PACING_SECONDS"]

# One 15 ms visual step split over the five sub-steps of an exchange.
DEFAULT_PACING_SECONDS: float = 0.003


@dataclass(frozen=True)
class EngineConfig:
    pacing_seconds: float = DEFAULT_PACING_SECONDS
    buffer_events: bool = True
    thread_name_prefix: str = "sortscope-run"

    def __post_init__(self) -> None:
        if isinstance(self.pacing_seconds, bool) or not isinstance(self.pacing_seconds, (int, float)):
            raise ValueError(f"pacing_seconds must be a number; got {self.pacing_seconds!r}")
        if self.pacing_seconds < 0:
            raise ValueError(f"pacing_seconds must be nonnegative; got {self.pacing_seconds}")
        if not isinstance(self.buffer_events, bool):
            raise ValueError(f"buffer_events must be a bool; got {self.buffer_events!r}")
        if not isinstance(self.thread_name_prefix, str) or not self.thread_name_prefix:
            raise ValueError("thread_name_prefix must be a non-empty string")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "EngineConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError("engine config must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown engine config keys: {unknown}")
        kwargs: Dict[str, Any] = dict(data)
        if "pacing_seconds" in kwargs and isinstance(kwargs["pacing_seconds"], int) \
                and not isinstance(kwargs["pacing_seconds"], bool):
            kwargs["pacing_seconds"] = float(kwargs["pacing_seconds"])
        return cls(**kwargs)


def load_config(path: Union[str, Path]) -> EngineConfig:
    """
    Load an EngineConfig from a YAML file.

    If the document has an `engine` key, that block is used; otherwise the whole
    document is treated as the engine block. An empty file yields defaults.
    """
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        doc = yaml.safe_load(f)
    if doc is None:
        return EngineConfig()
    if not isinstance(doc, dict):
        raise ValueError(f"{p}: expected a mapping at the top level")
    block = doc["engine"] if "engine" in doc else doc
    return EngineConfig.from_mapping(block)
