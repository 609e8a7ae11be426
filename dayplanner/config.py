"""
Day Planner - Configuration Management
Supports .env files and runtime configuration for the time grid, auto-blocks and the API.
"""

from typing import Dict, Any, List
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


# ============================================
# TIME GRID CONFIGURATION
# ============================================

class GridConfig(BaseSettings):
    """
    Extended-day grid: hours 6.0-23.5 are today, 24.0-29.5 the following night.
    """
    day_start_hour: float = Field(
        default=6.0,
        ge=0.0,
        le=12.0,
        description="First valid start hour on the grid"
    )
    day_end_hour: float = Field(
        default=30.0,
        ge=24.0,
        le=36.0,
        description="Grid wrap point (exclusive upper bound for start hours)"
    )
    anchor_cutoff_hour: float = Field(
        default=21.0,
        ge=6.0,
        le=30.0,
        description="Operation blocks cannot start at or after this hour"
    )

    model_config = {
        "env_prefix": "GRID_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }


# ============================================
# AUTO-BLOCK CONFIGURATION
# ============================================

class AutoBlockConfig(BaseSettings):
    """Durations and cutoffs for blocks generated around an operation."""

    road_duration: int = Field(
        default=25,
        ge=5,
        le=120,
        description="Travel block before the operation (minutes)"
    )
    buffer_duration: int = Field(
        default=30,
        ge=5,
        le=120,
        description="Buffer block after the operation (minutes)"
    )
    family_duration: int = Field(
        default=50,
        ge=10,
        le=180,
        description="Family block after the buffer (minutes)"
    )
    min_road_start: float = Field(
        default=7.0,
        ge=6.0,
        le=12.0,
        description="No travel block is scheduled before this hour"
    )
    max_family_end: float = Field(
        default=22.0,
        ge=12.0,
        le=30.0,
        description="Family block must end by this hour"
    )

    model_config = {
        "env_prefix": "AUTO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }


# ============================================
# APPLICATION CONFIGURATION
# ============================================

class AppConfig(BaseSettings):
    """HTTP API and logging configuration."""

    app_name: str = Field(default="Day Planner", description="Title shown in the API docs")
    version: str = Field(default="1.0.0", description="Reported API version")
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the API"
    )
    log_level: str = Field(default="INFO", description="Root log level for the planner logger")
    log_dir: str = Field(default="", description="Directory for rotating log files (empty = package logs/)")

    model_config = {
        "env_prefix": "PLANNER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }


# ============================================
# CACHED CONFIGURATION INSTANCES
# ============================================

@lru_cache()
def get_grid_config() -> GridConfig:
    """Get cached grid configuration instance."""
    return GridConfig()


@lru_cache()
def get_auto_block_config() -> AutoBlockConfig:
    """Get cached auto-block configuration instance."""
    return AutoBlockConfig()


@lru_cache()
def get_app_config() -> AppConfig:
    """Get cached application configuration instance."""
    return AppConfig()


def reload_config():
    """Clear configuration cache and reload from environment."""
    get_grid_config.cache_clear()
    get_auto_block_config.cache_clear()
    get_app_config.cache_clear()


# ============================================
# CONFIGURATION SUMMARY
# ============================================

def get_config_summary() -> Dict[str, Any]:
    """
    Get a summary of all configuration values.
    Useful for debugging and settings display.
    """
    grid = get_grid_config()
    auto = get_auto_block_config()
    app = get_app_config()

    return {
        "grid": {
            "range": f"{grid.day_start_hour} - {grid.day_end_hour}",
            "anchor_cutoff": grid.anchor_cutoff_hour,
        },
        "auto_blocks": {
            "road": auto.road_duration,
            "buffer": auto.buffer_duration,
            "family": auto.family_duration,
            "min_road_start": auto.min_road_start,
            "max_family_end": auto.max_family_end,
        },
        "app": {
            "name": app.app_name,
            "version": app.version,
            "log_level": app.log_level,
        },
    }
