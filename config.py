# 📦 config.py

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Community Directory Filters"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000  # PORT
    prometheus_port: int = 0  # PROMETHEUS_PORT, 0 disables the exporter
    houses_path: Optional[str] = None  # HOUSES_PATH, JSON or YAML


settings = Settings()
