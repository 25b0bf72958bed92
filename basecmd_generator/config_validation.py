# File: basecmd_generator/config_validation.py
from argparse import Namespace
import logging
import re
from typing import Any, Dict, Optional
from pathlib import Path

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from basecmd_generator.constants import DefaultConfig
from basecmd_generator.exceptions import ConfigurationError, raise_configuration_error

logger = logging.getLogger(__name__)

# --- Helper Functions for Validation ---

_GO_MODULE_PATH_RE = re.compile(r"^[A-Za-z0-9_.\-~]+(/[A-Za-z0-9_.\-~]+)*$")


def is_valid_go_module_path(path: str) -> bool:
    """Check if a string looks like a Go module path (``base``, ``github.com/acme/app``)."""
    return bool(_GO_MODULE_PATH_RE.match(path))


# --- Pydantic Model for Configuration Schema ---
class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    model_config = ConfigDict(extra="ignore")

    project_root: str = Field(
        DefaultConfig.PROJECT_ROOT,
        min_length=1,
        description="Root directory of the Go project (contains go.mod).",
    )
    app_dir: str = Field(
        DefaultConfig.APP_DIR,
        min_length=1,
        description="Application directory relative to the project root.",
    )
    module_path: str = Field(
        DefaultConfig.MODULE_PATH,
        min_length=1,
        description="Go module path used in import statements.",
    )
    init_file: str = Field(
        DefaultConfig.INIT_FILE,
        min_length=1,
        description="Init file holding the module marker comments, relative to the project root.",
    )
    format_code: bool = Field(
        DefaultConfig.FORMAT_CODE,
        description="Run gofmt on generated files when it is available.",
    )
    generate_validator: bool = Field(
        DefaultConfig.GENERATE_VALIDATOR,
        description="Also emit a validator.go file for each module.",
    )

    @field_validator("module_path")
    @classmethod
    def validate_module_path(cls, v: str) -> str:
        """Ensure module_path is a usable Go import path."""
        v = v.strip().rstrip("/")
        if not is_valid_go_module_path(v):
            raise ValueError(f"'{v}' is not a valid Go module path")
        return v

    @field_validator("app_dir", "init_file")
    @classmethod
    def validate_relative_path(cls, v: str) -> str:
        """Ensure project relative paths stay inside the project."""
        path = Path(v)
        if path.is_absolute() or ".." in path.parts:
            raise ValueError(f"'{v}' must be a path relative to the project root")
        return v

    @model_validator(mode="after")
    def check_init_file_location(self) -> "ToolConfigSchema":
        """Warn when the init file lives outside the application directory."""
        if Path(self.init_file).parts[:1] != Path(self.app_dir).parts[:1]:
            logger.warning(
                f"Init file '{self.init_file}' is outside the app directory '{self.app_dir}'."
            )
        return self

    # --- Resolved paths ---

    @property
    def root_path(self) -> Path:
        return Path(self.project_root)

    @property
    def app_path(self) -> Path:
        return self.root_path / self.app_dir

    @property
    def init_path(self) -> Path:
        return self.root_path / self.init_file


def validate_and_parse_config(raw_config: Dict[str, Any], config_file: Optional[str] = None) -> ToolConfigSchema:
    """
    Validates the raw configuration dictionary against the schema.

    Raises:
        ConfigurationError: Listing every failing location and message
    """
    try:
        validated_config = ToolConfigSchema.model_validate(raw_config)
        logger.debug("Configuration validated successfully.")
        return validated_config
    except ValidationError as e:
        problems = []
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            msg = error.get("msg", "Unknown validation error")
            problems.append(f"{loc_str}: {msg}")
        raise ConfigurationError(
            "Configuration validation failed: " + "; ".join(problems),
            config_file=config_file,
            context={"errors": problems},
        ) from e


def _read_yaml_config(config_file: Path) -> Dict[str, Any]:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML file: {e}", config_file=str(config_file)) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading config file: {e}", config_file=str(config_file)) from e

    if yaml_config is None:
        return {}
    if not isinstance(yaml_config, dict):
        raise_configuration_error(
            "Config file content must be a mapping of option names to values.",
            config_file=str(config_file),
        )
    logger.debug(f"Loaded configuration from {config_file}")
    return yaml_config


def load_config(config_path: Optional[str], cli_args: Optional[Namespace] = None) -> ToolConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.

    Without an explicit ``config_path`` the default ``.basegen.yaml`` under
    the project root is used when it exists. CLI arguments override file
    values only when they were actually given (are not None).
    """
    raw_config: Dict[str, Any] = {}
    cli_dict = vars(cli_args) if cli_args is not None else {}

    # 1. Load from YAML file
    if config_path:
        config_file = Path(config_path)
        if not config_file.is_file():
            raise_configuration_error("Config file not found.", config_file=config_path)
        raw_config.update(_read_yaml_config(config_file))
    else:
        root = cli_dict.get("project_root") or DefaultConfig.PROJECT_ROOT
        default_file = Path(root) / DefaultConfig.CONFIG_FILE_NAME
        if default_file.is_file():
            raw_config.update(_read_yaml_config(default_file))
            config_path = str(default_file)

    # 2. Override with CLI arguments (only those explicitly provided)
    overridden_keys = set()
    for key, value in cli_dict.items():
        if value is not None and key in ToolConfigSchema.model_fields:
            raw_config[key] = value
            overridden_keys.add(key)
    if overridden_keys:
        logger.debug(f"Overridden config keys from CLI arguments: {sorted(overridden_keys)}")

    # 3. Validate
    validated_config = validate_and_parse_config(raw_config, config_file=config_path)

    # 4. Resolve the project root so later path joins are absolute
    validated_config.project_root = str(Path(validated_config.project_root).resolve())
    return validated_config
