"""Runtime configuration, read from the environment.

Everything the CLI needs to know about its surroundings lives here and
is passed explicitly into the composition root. In particular the actor
recorded as an order's creator is a configuration value injected at the
boundary, never a constant inside the domain.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from stockflow.domain.exceptions import ValidationError

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    actor: str = "system"
    log_level: str = "WARNING"

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        settings = Settings(
            data_dir=Path(env.get("STOCKFLOW_DATA_DIR", str(_DEFAULT_DATA_DIR))),
            actor=env.get("STOCKFLOW_ACTOR", "system"),
            log_level=env.get("STOCKFLOW_LOG_LEVEL", "WARNING").upper(),
        )
        settings.validate()
        return settings

    def with_overrides(
        self,
        data_dir: Path | None = None,
        actor: str | None = None,
    ) -> Settings:
        updated = replace(
            self,
            data_dir=data_dir if data_dir is not None else self.data_dir,
            actor=actor if actor is not None else self.actor,
        )
        updated.validate()
        return updated

    def validate(self) -> None:
        if not self.actor or not self.actor.strip():
            raise ValidationError("STOCKFLOW_ACTOR must not be empty")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValidationError(f"Unknown log level '{self.log_level}'")
