"""Configuration management for virgil."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import CONFIG_DIR_NAME, WALKTHROUGH_SUFFIX
from .services.git import GitError, get_repo_root


class ConfigError(Exception):
    """Config file exists but cannot be loaded."""

    pass


class ConvertConfig(BaseModel):
    """Settings for markdown conversion."""

    infer_repository: bool = Field(
        default=True, description="Fill remote/commit from git when frontmatter has none"
    )
    indent: int = Field(default=2, ge=0, description="JSON indentation of written walkthroughs")
    output_suffix: str = Field(
        default=WALKTHROUGH_SUFFIX, description="Suffix used for derived output files"
    )


class CommentsConfig(BaseModel):
    """Settings for comment authoring."""

    author: str = "anonymous"


class ValidateConfig(BaseModel):
    """Settings for the validate command."""

    strict: bool = False  # Treat warnings as failures


class VirgilConfig(BaseModel):
    """Root configuration for virgil."""

    convert: ConvertConfig = Field(default_factory=ConvertConfig)
    comments: CommentsConfig = Field(default_factory=CommentsConfig)
    validate_: ValidateConfig = Field(default_factory=ValidateConfig, alias="validate")

    model_config = ConfigDict(populate_by_name=True)


def find_project_root(cwd: Path | None = None) -> Path:
    """Return the git repository root, or cwd when not inside a repository."""
    try:
        return get_repo_root(cwd)
    except GitError:
        return cwd or Path.cwd()


def get_config_dir(root: Path | None = None) -> Path:
    """Return the .virgil directory for a project root (detected if not provided)."""
    if root is None:
        root = find_project_root()
    return root / CONFIG_DIR_NAME


def load_config(config_dir: Path) -> VirgilConfig:
    """Load config from .virgil/config.toml.

    Args:
        config_dir: Path to .virgil directory

    Returns:
        Loaded configuration, or defaults if config.toml doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or has invalid values
    """
    config_path = config_dir / "config.toml"
    if not config_path.exists():
        return VirgilConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return VirgilConfig.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def write_config_template(config_dir: Path) -> Path:
    """Write default config.toml template.

    Args:
        config_dir: Path to .virgil directory (created if missing)

    Returns:
        Path to the written config file
    """
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.toml"
    template = {
        "convert": {
            "infer_repository": True,
            "indent": 2,
            "output_suffix": WALKTHROUGH_SUFFIX,
        },
        "comments": {"author": "anonymous"},
        "validate": {"strict": False},
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
