"""GCP Secret Manager source."""
import os
import json
import logging
from typing import Optional, Dict, Any

import yaml
from google.api_core import exceptions as gcp_exceptions
from google.cloud import secretmanager

from .decoder import encode
from .errors import SecretFetchError, SecretNotFoundError
from .models import Secret

logger = logging.getLogger(__name__)


def payload_to_data(secret_name: str, payload: bytes) -> Dict[str, str]:
    """
    Split a Secret Manager payload into base64-encoded entries.

    A payload holding a YAML or JSON mapping yields one entry per key.
    Anything else becomes a single entry named after the secret.
    """
    try:
        parsed = yaml.safe_load(payload.decode("utf-8"))
    except (UnicodeDecodeError, yaml.YAMLError):
        parsed = None

    if isinstance(parsed, dict) and parsed:
        return {
            str(key): encode(value if isinstance(value, str) else json.dumps(value))
            for key, value in parsed.items()
        }
    return {secret_name: encode(payload)}


class GCPSecretClient:
    """Wrapper around GCP Secret Manager client."""

    def __init__(self, project_id: Optional[str] = None, version: str = "latest"):
        self._client = None
        self.project_id = project_id
        self.version = version

    @property
    def client(self) -> secretmanager.SecretManagerServiceClient:
        """Lazy-initialize client."""
        if self._client is None:
            self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def get_project_id(self, config: Optional[Dict[str, Any]] = None) -> Optional[str]:
        """
        Resolve the GCP project ID.

        Priority order:
        1. Explicit project_id given to the client
        2. GCP_PROJECT environment variable
        3. gcp.project_id in the config file

        Returns:
            Project ID string, or None if not found
        """
        if self.project_id:
            return self.project_id

        gcp_project_env = os.getenv("GCP_PROJECT")
        if gcp_project_env:
            logger.debug(f"Using GCP_PROJECT from environment: {gcp_project_env}")
            return gcp_project_env

        project_id = ((config or {}).get("gcp") or {}).get("project_id")
        if project_id:
            logger.debug(f"Using project_id from config: {project_id}")
            return project_id

        return None

    def fetch_secret(self, secret_name: str, config: Optional[Dict[str, Any]] = None) -> Secret:
        """
        Fetch a secret version from GCP Secret Manager.

        Args:
            secret_name: Name of the secret
            config: Loaded configuration, used for project_id fallback

        Returns:
            Secret whose entries come from the payload (see payload_to_data)

        Raises:
            SecretNotFoundError: If the secret or version does not exist
            SecretFetchError: If no project ID is configured or the API call fails
        """
        project_id = self.get_project_id(config)
        if not project_id:
            raise SecretFetchError(
                "Project ID not found. Use --project-id, set GCP_PROJECT, "
                "or configure gcp.project_id in the config file"
            )

        name = f"projects/{project_id}/secrets/{secret_name}/versions/{self.version}"
        logger.debug(f"Accessing {name}")
        try:
            response = self.client.access_secret_version(request={"name": name})
        except gcp_exceptions.NotFound as e:
            raise SecretNotFoundError(f"secret '{secret_name}' not found in project {project_id}") from e
        except gcp_exceptions.GoogleAPICallError as e:
            raise SecretFetchError(f"GCP fetch failed for {secret_name}: {e}") from e

        data = payload_to_data(secret_name, response.payload.data)
        return Secret(data=data, name=secret_name, source="gcp")
