"""
boto3 client construction.

Builds SQS and Lambda clients with consistent botocore configuration.
"""

import logging

import boto3
from botocore.config import Config

from .config import HandlerFactoryConfig

logger = logging.getLogger("handler_factory.clients")


def _client_config(config: HandlerFactoryConfig) -> Config:
    return Config(retries={"max_attempts": config.AWS_MAX_ATTEMPTS, "mode": "standard"})


def create_sqs_client(config: HandlerFactoryConfig):
    """Create a configured SQS client."""
    if config.SQS_ENDPOINT_URL:
        logger.info(f"Using SQS endpoint override: {config.SQS_ENDPOINT_URL}")
    return boto3.client(
        "sqs",
        region_name=config.AWS_REGION,
        endpoint_url=config.SQS_ENDPOINT_URL,
        config=_client_config(config),
    )


def create_lambda_client(config: HandlerFactoryConfig):
    """Create a configured Lambda client."""
    if config.LAMBDA_ENDPOINT_URL:
        logger.info(f"Using Lambda endpoint override: {config.LAMBDA_ENDPOINT_URL}")
    return boto3.client(
        "lambda",
        region_name=config.AWS_REGION,
        endpoint_url=config.LAMBDA_ENDPOINT_URL,
        config=_client_config(config),
    )
