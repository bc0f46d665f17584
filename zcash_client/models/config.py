"""Configuration management using Pydantic settings."""

from dataclasses import dataclass
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class ConnectionConfig:
    """Immutable connection details for one RPC client."""
    host: str  # "ip:port"
    user: str
    password: str

    def __repr__(self) -> str:
        return f"ConnectionConfig(host={self.host!r}, user={self.user!r}, password='***')"


class ClientConfig(BaseSettings):
    """Configuration for the Zcash RPC client."""

    # zcashd RPC Settings
    zcash_rpc_host: str = Field(default="127.0.0.1", description="zcashd RPC host")
    zcash_rpc_port: int = Field(default=8232, description="zcashd RPC port")
    zcash_rpc_user: str = Field(default="", description="zcashd RPC username")
    zcash_rpc_password: str = Field(default="", description="zcashd RPC password")
    zcash_rpc_timeout: float = Field(default=30, description="RPC timeout in seconds")

    # Logging Settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json|text)")
    log_file: Optional[str] = Field(default=None, description="Log file path")
    log_max_size_mb: int = Field(default=100, description="Max log file size in MB")
    log_backup_count: int = Field(default=5, description="Number of log backups")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def rpc_host(self) -> str:
        """Host and port in the ``ip:port`` form used by the client."""
        return f"{self.zcash_rpc_host}:{self.zcash_rpc_port}"

    @property
    def connection(self) -> ConnectionConfig:
        """Build the immutable connection record for a client."""
        return ConnectionConfig(
            host=self.rpc_host,
            user=self.zcash_rpc_user,
            password=self.zcash_rpc_password,
        )
