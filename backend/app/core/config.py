"""
Configuration settings for the application
"""
import os
import shlex
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "WXOrca API"
    VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "True").lower() == "true"

    # CORS
    CORS_ORIGINS: list = ["http://localhost:5173", "http://localhost:3000"]

    # Database (documentation store and feedback log)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./wxorca.db")

    # Agent execution: "local" runs the in-process responders,
    # "process" spawns the external agent worker
    AGENT_EXECUTOR: str = os.getenv("AGENT_EXECUTOR", "local")
    AGENT_CLI_COMMAND: str = os.getenv("AGENT_CLI_COMMAND", "./target/release/wxorca-cli")
    AGENT_CLI_CWD: Optional[str] = os.getenv("AGENT_CLI_CWD")
    AGENT_TIMEOUT_SECONDS: float = Field(float(os.getenv("AGENT_TIMEOUT_SECONDS", "60")), gt=0)
    AGENT_HEALTHCHECK_TIMEOUT_SECONDS: float = Field(float(os.getenv("AGENT_HEALTHCHECK_TIMEOUT_SECONDS", "5")), gt=0)

    @property
    def agent_command(self) -> List[str]:
        """Worker command prefix as an argv list"""
        return shlex.split(self.AGENT_CLI_COMMAND)

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
