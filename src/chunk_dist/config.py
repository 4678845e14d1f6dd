"""Application configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from chunk_dist.walker import HomeDirResolutionError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHUNK_DIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Directory to analyse (empty = current user's home directory)
    root_dir: Path | None = None

    # Exact multiples of 1 MB still produce a 0-byte tail chunk
    zero_remainder_chunk: bool = True

    # Descend into symlinked directories and use link targets' sizes
    follow_symlinks: bool = False

    def resolve_root(self) -> Path:
        """Return the configured root, falling back to the user's home directory.

        Raises HomeDirResolutionError if no root is configured and the home
        directory cannot be determined.
        """
        if self.root_dir is not None:
            return self.root_dir.expanduser()
        try:
            return Path.home()
        except (RuntimeError, KeyError) as exc:
            raise HomeDirResolutionError(f"Could not resolve home directory: {exc}") from exc


def get_settings(**overrides: object) -> Settings:
    """Create a Settings instance, allowing overrides for testing."""
    return Settings(**overrides)  # type: ignore[arg-type]
