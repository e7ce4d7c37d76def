"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("feedwatch", description="Database name")
    user: str = Field("feedwatch", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")
    dsn: Optional[str] = Field(None, description="Full connection string, overrides the fields above")
    pool_min_size: int = Field(1, ge=0, description="Minimum pooled connections")
    pool_max_size: int = Field(5, ge=1, description="Maximum pooled connections")

    @field_validator("pool_max_size")
    @classmethod
    def validate_pool_size(cls, v: int, info) -> int:
        """Validate that the pool can hold its minimum size."""
        min_size = info.data.get("pool_min_size", 1)
        if v < min_size:
            raise ValueError(f"pool_max_size ({v}) must be >= pool_min_size ({min_size})")
        return v

    @property
    def connection_string(self) -> str:
        """Get psycopg connection string."""
        if self.dsn:
            return self.dsn
        password = self.password or ""
        return f"postgresql://{self.user}:{password}@{self.host}:{self.port}/{self.database}"


class SchedulerConfig(BaseModel):
    """Refresh cycle scheduling."""

    interval_seconds: float = Field(10.0, gt=0, description="Seconds between refresh cycles")


class FetchConfig(BaseModel):
    """Outbound HTTP settings."""

    timeout_seconds: float = Field(10.0, gt=0, description="Per-request timeout")
    user_agent: str = Field("feedwatch/0.1", description="User-Agent header sent with fetches")


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field("INFO", description="Log level for the feedwatch logger")


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
