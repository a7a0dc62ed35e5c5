"""
Configuration management for the BeFrames job compiler.

Loads from environment variables, .env file, or JSON config.
"""
import os
import json
import sys
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import Optional

from dotenv import load_dotenv

from .frames import MAX_FRAMES
from .models import DEFAULT_CHUNK_SIZE
from .paths import DEFAULT_TIMESTAMP_FORMAT


def get_home() -> Path:
    """Resolve runtime home directory."""
    env_home = os.getenv("BEFRAMES_HOME", "").strip()
    if env_home:
        return Path(env_home)

    if getattr(sys, "frozen", False):
        # Packaged exe runtime
        return Path(sys.executable).resolve().parent

    # Source runtime: repository root
    return Path(__file__).resolve().parents[2]


def default_log_root() -> str:
    return str(get_home() / "logs")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    return value not in {"0", "false", "no", "off"}


@dataclass
class CompilerConfig:
    """Job compiler configuration"""

    # Compilation
    default_chunk_size: int = DEFAULT_CHUNK_SIZE
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    strict_frame_ranges: bool = False  # Reject overlapping/unsorted frame ranges
    max_frames: int = MAX_FRAMES

    # Scheduler the compiled jobs are handed to
    scheduler_url: str = "http://127.0.0.1:8080/api/v3/"
    request_timeout: float = 30.0

    # Compile service
    host: str = "0.0.0.0"
    port: int = 9200

    # Paths
    log_root: str = field(default_factory=default_log_root)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "CompilerConfig":
        """Load config from environment variables"""
        if env_file:
            load_dotenv(env_file)
        else:
            # Try to find .env in common locations
            for path in [".env", "../.env", "config/.env"]:
                if Path(path).exists():
                    load_dotenv(path)
                    break

        return cls(
            default_chunk_size=int(os.getenv("BEFRAMES_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE))),
            timestamp_format=os.getenv("BEFRAMES_TIMESTAMP_FORMAT", DEFAULT_TIMESTAMP_FORMAT),
            strict_frame_ranges=_env_bool("BEFRAMES_STRICT_FRAMES", False),
            max_frames=int(os.getenv("BEFRAMES_MAX_FRAMES", str(MAX_FRAMES))),
            scheduler_url=os.getenv("SCHEDULER_URL", "http://127.0.0.1:8080/api/v3/"),
            request_timeout=float(os.getenv("SCHEDULER_TIMEOUT", "30")),
            host=os.getenv("BEFRAMES_HOST", "0.0.0.0"),
            port=int(os.getenv("BEFRAMES_PORT", "9200")),
            log_root=os.getenv("LOG_ROOT", default_log_root()),
        )

    @classmethod
    def from_json(cls, json_path: str) -> "CompilerConfig":
        """Load config from JSON file"""
        with open(json_path, "r") as f:
            data = json.load(f)

        # Extract compiler section if present
        if "compiler" in data:
            data = data["compiler"]

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "CompilerConfig":
        """
        Load configuration from file or environment.
        Priority: config_path > env vars > defaults
        """
        if config_path and Path(config_path).exists():
            return cls.from_json(config_path)

        # Fall back to environment variables
        return cls.from_env()


# Global config instance (lazy loaded)
_config: Optional[CompilerConfig] = None


def get_config(config_path: Optional[str] = None) -> CompilerConfig:
    """Get or create the global config instance"""
    global _config
    if _config is None:
        _config = CompilerConfig.load(config_path)
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it"""
    global _config
    _config = None
