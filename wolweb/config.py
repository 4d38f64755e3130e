"""wolweb configuration — process settings from env, machine list from JSON."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wolweb.utils.wol import parse_mac


class ConfigError(Exception):
    pass


class Settings(BaseSettings):
    """Process-level settings, read from ``WOLWEB_*`` variables or ``.env``."""

    app_name: str = "wolweb"
    debug: bool = False
    log_level: str = "INFO"

    # Machine list, listen address and broadcast address
    config_path: str = "config.json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WOLWEB_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


class MachineConfig(BaseModel):
    """A machine that can be woken from the web form."""

    model_config = ConfigDict(frozen=True)

    name: str
    mac: str
    ports: tuple[int, ...] = Field(min_length=1)

    @field_validator("mac")
    @classmethod
    def _check_mac(cls, value: str) -> str:
        result = parse_mac(value)
        if not result.ok:
            raise ValueError(result.error.value)
        return value

    @field_validator("ports")
    @classmethod
    def _check_ports(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        for port in value:
            if not 0 <= port <= 65535:
                raise ValueError(f"port {port} out of range 0-65535")
        return value


class AppConfig(BaseModel):
    """Immutable service configuration, loaded once at startup."""

    model_config = ConfigDict(frozen=True)

    address: str = "127.0.0.1:8080"
    broadcast: str = "255.255.255.255"
    machines: tuple[MachineConfig, ...] = ()

    @property
    def host(self) -> str:
        host, _, _ = self.address.rpartition(":")
        # "[::]:8080" -> "::"
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        return host or "0.0.0.0"

    @property
    def port(self) -> int:
        _, _, port = self.address.rpartition(":")
        return int(port)

    @field_validator("address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        _, sep, port = value.rpartition(":")
        if not sep or not port.isdigit() or not 0 <= int(port) <= 65535:
            raise ValueError(f"address must be host:port, got {value!r}")
        return value


def load_config(path: str | Path) -> AppConfig:
    """Read and validate the JSON machine configuration file."""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        return AppConfig.model_validate_json(raw)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid config file {path}: {errors}") from e
