"""swagger-sync configuration.

Configuration is read from ``swag-config.yaml`` (or ``.yml`` / ``.json``) in
the project root, with CLI options taking precedence over file values.
"""

import logging
from pathlib import Path

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from swagger_sync.errors import SwaggerSyncError
from swagger_sync.parser.swagger import CollapsePolicy

logger = logging.getLogger(__name__)

CONFIG_FILES = ("swag-config.yaml", "swag-config.yml", "swag-config.json")


class SyncConfig(BaseModel):
    """Where to fetch the description from and where to keep generated output."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    origin_url: str = Field(default="", validation_alias=AliasChoices("origin_url", "originUrl"))
    out_dir: str = Field(default="service", validation_alias=AliasChoices("out_dir", "outDir"))
    lock_path: str = Field(default="swag.lock", validation_alias=AliasChoices("lock_path", "lockPath"))
    template_path: str | None = Field(default=None, validation_alias=AliasChoices("template_path", "templatePath"))
    collapse_policy: CollapsePolicy = Field(
        default=CollapsePolicy.FIRST_WINS,
        validation_alias=AliasChoices("collapse_policy", "collapsePolicy"),
    )

    def out_path(self, root: Path) -> Path:
        return root / self.out_dir

    def lock_file(self, root: Path) -> Path:
        return root / self.out_dir / self.lock_path


def find_config_file(root: Path) -> Path | None:
    for name in CONFIG_FILES:
        candidate = root / name
        if candidate.exists():
            return candidate
    return None


def load_config(root: Path, overrides: dict | None = None) -> SyncConfig:
    """Load the config file under ``root`` and apply non-None ``overrides``."""
    data: dict = {}

    config_file = find_config_file(root)
    if config_file is not None:
        logger.debug("Loading config from %s", config_file)
        try:
            loaded = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise SwaggerSyncError(f"Invalid config file {config_file}: {e}") from e
        if isinstance(loaded, dict):
            data.update(loaded)

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    try:
        return SyncConfig.model_validate(data)
    except ValidationError as e:
        raise SwaggerSyncError(f"Invalid configuration: {e}") from e
