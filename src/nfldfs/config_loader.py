"""Persist and load CLI settings profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from nfldfs.config import OptimizationSettings


@dataclass
class SettingsProfile:
    settings: OptimizationSettings = field(default_factory=OptimizationSettings)
    lock_player_ids: List[str] = field(default_factory=list)
    exclude_player_ids: List[str] = field(default_factory=list)
    exposure_limits: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "SettingsProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            settings=OptimizationSettings.model_validate(data.get("settings", {})),
            lock_player_ids=list(data.get("lock_player_ids", [])),
            exclude_player_ids=list(data.get("exclude_player_ids", [])),
            exposure_limits={str(k): float(v) for k, v in data.get("exposure_limits", {}).items()},
        )

    def save(self, path: Path) -> None:
        payload: Dict[str, Any] = {
            "settings": self.settings.model_dump(),
            "lock_player_ids": self.lock_player_ids,
            "exclude_player_ids": self.exclude_player_ids,
            "exposure_limits": self.exposure_limits,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
