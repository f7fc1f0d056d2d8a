"""Configuration management with YAML support."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tileraster.exceptions import ConfigurationError


class RootPyramid(BaseModel):
    """Geometry of the depth-0 image every pyramid level subdivides.

    Depth ``d`` is a ``2**d x 2**d`` grid of tiles over the same extent, each
    tile ``tile_size_px`` pixels on a side.
    """

    model_config = {"frozen": True}

    ullon: float = Field(-122.2998046875, description="Upper-left longitude of the root image")
    ullat: float = Field(37.892195547244356, description="Upper-left latitude of the root image")
    lrlon: float = Field(-122.2119140625, description="Lower-right longitude of the root image")
    lrlat: float = Field(37.82280243352756, description="Lower-right latitude of the root image")
    tile_size_px: int = Field(256, gt=0, description="Tile edge length (pixels)")
    max_depth: int = Field(7, ge=0, description="Deepest zoom level available")
    tile_extension: str = Field(".png", description="File extension of tile images")

    @model_validator(mode="after")
    def check_orientation(self) -> "RootPyramid":
        """Root must run west to east and north to south."""
        if not self.ullon < self.lrlon:
            raise ValueError("root ullon must be west of lrlon")
        if not self.ullat > self.lrlat:
            raise ValueError("root ullat must be north of lrlat")
        return self

    @property
    def lon_delta(self) -> float:
        """Longitudinal width of the root image."""
        return self.lrlon - self.ullon

    @property
    def lat_delta(self) -> float:
        """Latitudinal height of the root image."""
        return self.ullat - self.lrlat

    @property
    def lon_dpp(self) -> float:
        """Longitude per pixel of the depth-0 tile."""
        return self.lon_delta / self.tile_size_px

    def tiles_per_side(self, depth: int) -> int:
        """Number of tile columns (and rows) at ``depth``."""
        return 2 ** depth


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level (DEBUG/INFO/WARNING/ERROR)")
    format: str = Field("console", description="Log format (console/json)")
    file: Optional[Path] = Field(None, description="Optional log file path")


class ServerConfig(BaseModel):
    """HTTP front end settings."""

    host: str = Field("0.0.0.0", description="Bind address")
    port: int = Field(4567, gt=0, lt=65536, description="Bind port")
    reload: bool = Field(False, description="Enable uvicorn auto-reload")
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:4567",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:4567",
            "http://127.0.0.1:5173",
        ],
        description="Origins allowed by CORS",
    )


class Config(BaseSettings):
    """Main application configuration."""

    root: RootPyramid = Field(default_factory=RootPyramid)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    model_config = SettingsConfigDict(
        env_prefix="TILERASTER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from YAML file.

        Args:
            path: Path to YAML config file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the YAML is invalid or fails validation
        """
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError("Invalid YAML in config file", details={"path": str(path)}) from e

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping", details={"path": str(path)})

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid configuration",
                details={"path": str(path), "errors": e.error_count()},
            ) from e

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file or environment.

        Priority:
        1. TILERASTER_CONFIG_PATH environment variable
        2. ./tileraster_config.yaml in current directory
        3. ~/.config/tileraster/config.yaml in home directory
        4. Default configuration with environment overrides
        """
        config_path = os.getenv("TILERASTER_CONFIG_PATH")

        if config_path:
            return cls.from_yaml(Path(config_path))

        default_paths = [
            Path("tileraster_config.yaml"),
            Path.home() / ".config" / "tileraster" / "config.yaml",
        ]

        for path in default_paths:
            if path.exists():
                return cls.from_yaml(path)

        return cls()


# Global config instance (singleton pattern)
_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance (lazy-loaded singleton).

    Returns:
        Config instance, creating and caching it on first call
    """
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reset_config() -> None:
    """Reset global config instance (for testing)."""
    global _config
    _config = None
