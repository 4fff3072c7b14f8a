from pathlib import Path

import pytest

from stockflow.domain.exceptions import ValidationError
from stockflow.infrastructure.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.actor == "system"
    assert settings.log_level == "WARNING"
    assert settings.data_dir.name == "data"


def test_reads_environment():
    settings = Settings.from_env(
        {
            "STOCKFLOW_DATA_DIR": "/var/lib/stockflow",
            "STOCKFLOW_ACTOR": "warehouse-bot",
            "STOCKFLOW_LOG_LEVEL": "debug",
        }
    )
    assert settings.data_dir == Path("/var/lib/stockflow")
    assert settings.actor == "warehouse-bot"
    assert settings.log_level == "DEBUG"


def test_overrides_win():
    settings = Settings.from_env({"STOCKFLOW_ACTOR": "env-user"}).with_overrides(
        data_dir=Path("/tmp/x"), actor="cli-user"
    )
    assert (settings.data_dir, settings.actor) == (Path("/tmp/x"), "cli-user")


def test_none_overrides_keep_values():
    base = Settings.from_env({"STOCKFLOW_ACTOR": "env-user"})
    assert base.with_overrides() == base


def test_unknown_log_level():
    with pytest.raises(ValidationError, match="Unknown log level"):
        Settings.from_env({"STOCKFLOW_LOG_LEVEL": "chatty"})


def test_blank_actor():
    with pytest.raises(ValidationError, match="STOCKFLOW_ACTOR"):
        Settings.from_env({"STOCKFLOW_ACTOR": "  "})
