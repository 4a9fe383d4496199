"""Panel configuration from environment."""
from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Traffic chart
    window_minutes: float = Field(10, gt=0)
    interval_seconds: float = Field(60, gt=0)
    smoothing_window: int = Field(3, gt=0)

    # Route traffic recorder
    recorder_bucket_seconds: float = Field(1, gt=0)
    recorder_max_size: int = Field(1000, gt=0)

    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    @property
    def window(self) -> timedelta:
        return timedelta(minutes=self.window_minutes)

    @property
    def interval(self) -> timedelta:
        return timedelta(seconds=self.interval_seconds)

    @property
    def recorder_bucket(self) -> timedelta:
        return timedelta(seconds=self.recorder_bucket_seconds)


settings = Settings()
