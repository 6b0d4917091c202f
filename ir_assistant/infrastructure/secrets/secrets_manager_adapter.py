"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

load_into_env() runs once at server startup, before settings are read, so the
completion API key (and any LANGFUSE_* keys) can live in AWS instead of .env.
"""

import json
import logging
import os

import boto3

from ir_assistant.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes JSON secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None) -> None:
        self._client = boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_arn: str) -> dict:
        """Fetch and deserialize a JSON secret by ARN."""
        response = self._client.get_secret_value(SecretId=secret_arn)
        return json.loads(response["SecretString"])

    def load_into_env(self, secret_arn: str) -> list[str]:
        """Inject every key-value pair of a JSON secret into os.environ.

        Existing variables are overwritten. Returns the injected key names.
        """
        secrets = self.get_secret(secret_arn)
        for key, value in secrets.items():
            os.environ[key] = str(value)
        logger.info("Loaded %d values from secret store", len(secrets))
        return sorted(secrets)
