"""
Handler factory configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HandlerFactoryConfig(BaseSettings):
    """
    Settings shared by the lifecycle orchestrator and the FIFO consumer.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOGGING_CONFIG_PATH: Optional[str] = Field(
        default=None, description="Logging YAML path (bundled logging.yml if unset)"
    )

    # Orchestrator
    TIMEOUT_SECURE_MARGIN_MS: int = Field(
        default=500, ge=0, description="Margin before the deadline to emit timeOut (ms)"
    )

    # FIFO consumer
    SQS_QUEUE_URL: str = Field(default="", description="URL of the FIFO queue to drain")
    SQS_MAX_NUMBER_OF_MESSAGES: int = Field(
        default=10, ge=1, le=10, description="Messages requested per batch"
    )
    RECEIVE_RETRY_DELAY_MS: int = Field(
        default=500, ge=0, description="Pause before re-polling an empty queue (ms)"
    )

    # AWS clients
    AWS_REGION: Optional[str] = Field(default=None, description="AWS region")
    SQS_ENDPOINT_URL: Optional[str] = Field(default=None, description="SQS endpoint override")
    LAMBDA_ENDPOINT_URL: Optional[str] = Field(
        default=None, description="Lambda endpoint override"
    )
    AWS_MAX_ATTEMPTS: int = Field(default=3, ge=1, description="botocore retry attempts")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )
