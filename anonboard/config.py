"""
AnonBoard Configuration Module

Handles loading, validation, and management of configuration settings.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


@dataclass
class BoardConfig:
    """Message board behaviour."""
    name: str = "AnonBoard"
    list_limit: int = 10
    preview_replies: int = 3
    redaction_marker: str = "[deleted]"
    max_text_length: int = 2000


@dataclass
class DatabaseConfig:
    """Database settings."""
    path: str = "/var/lib/anonboard/anonboard.db"


@dataclass
class CryptoConfig:
    """Delete-password hashing settings."""
    argon2_time_cost: int = 3
    argon2_memory_kb: int = 32768  # 32MB
    argon2_parallelism: int = 1


@dataclass
class WebConfig:
    """HTTP transport settings."""
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    file: str = ""


@dataclass
class Config:
    """Main configuration container."""
    board: BoardConfig = field(default_factory=BoardConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    crypto: CryptoConfig = field(default_factory=CryptoConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.board.name:
            errors.append("board.name cannot be empty")
        if self.board.list_limit < 1:
            errors.append("board.list_limit must be at least 1")
        if self.board.preview_replies < 0:
            errors.append("board.preview_replies cannot be negative")
        if not self.board.redaction_marker:
            errors.append("board.redaction_marker cannot be empty")
        if self.board.max_text_length < 1:
            errors.append("board.max_text_length must be at least 1")

        if not self.database.path:
            errors.append("database.path cannot be empty")

        if self.crypto.argon2_time_cost < 1:
            errors.append("crypto.argon2_time_cost must be at least 1")
        # argon2 requires at least 8 KiB per lane
        if self.crypto.argon2_memory_kb < 8 * self.crypto.argon2_parallelism:
            errors.append("crypto.argon2_memory_kb must be at least 8 * argon2_parallelism")

        if not 0 < self.web.port < 65536:
            errors.append("web.port must be between 1 and 65535")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.logging.level.upper() not in valid_levels:
            errors.append(f"logging.level must be one of: {valid_levels}")

        return errors

    def save(self, path: Path):
        """Save configuration to TOML file."""
        import toml  # For writing

        data = self._to_dict()

        with open(path, "w") as f:
            toml.dump(data, f)

    def _to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        from dataclasses import asdict
        return asdict(self)


def load_config(path: Path) -> Config:
    """Load configuration from TOML file."""
    config = Config()

    if not path.exists():
        return config

    with open(path, "rb") as f:
        data = tomllib.load(f)

    # Map TOML sections to config dataclasses
    if "board" in data:
        config.board = BoardConfig(**data["board"])

    if "database" in data:
        config.database = DatabaseConfig(**data["database"])

    if "crypto" in data:
        config.crypto = CryptoConfig(**data["crypto"])

    if "web" in data:
        config.web = WebConfig(**data["web"])

    if "logging" in data:
        config.logging = LoggingConfig(**data["logging"])

    return config


def create_default_config(path: Path):
    """Create a default configuration file."""
    config = Config()
    config.save(path)
