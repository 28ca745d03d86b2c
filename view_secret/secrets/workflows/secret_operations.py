"""Workflow for fetching a secret from the configured source."""
import logging
from typing import Any, Dict, Optional

from ..domains.config_loader import SOURCES
from ..domains.errors import SecretFetchError
from ..domains.file_source import FileSecretSource
from ..domains.gcp_client import GCPSecretClient
from ..domains.kubectl_client import KubectlSecretClient
from ..domains.models import Secret

logger = logging.getLogger(__name__)


def fetch_secret(
    secret_name: str,
    config: Dict[str, Any],
    source: Optional[str] = None,
    namespace: Optional[str] = None,
    context: Optional[str] = None,
    kubeconfig: Optional[str] = None,
    project_id: Optional[str] = None,
    version: str = "latest",
    file_path: Optional[str] = None,
) -> Secret:
    """
    Fetch one secret from kubectl, GCP Secret Manager or a file.

    Args:
        secret_name: Name of the secret to fetch
        config: Loaded configuration (see config_loader.load_config)
        source: Source name; defaults to config["source"]
        namespace, context, kubeconfig: kubectl options (override config)
        project_id, version: GCP Secret Manager options
        file_path: Path of the secret file for the file source

    Returns:
        The fetched Secret

    Raises:
        SecretFetchError: If the source is unknown or the fetch fails
    """
    source = source or config.get("source") or "kubectl"
    logger.debug(f"Fetching secret '{secret_name}' from {source}")

    if source == "kubectl":
        kubernetes = config.get("kubernetes") or {}
        client = KubectlSecretClient(
            namespace=namespace or kubernetes.get("namespace"),
            context=context or kubernetes.get("context"),
            kubeconfig=kubeconfig or kubernetes.get("kubeconfig"),
        )
        return client.fetch_secret(secret_name)

    if source == "gcp":
        client = GCPSecretClient(project_id=project_id, version=version)
        return client.fetch_secret(secret_name, config)

    if source == "file":
        # Without --file the secret argument is the path
        return FileSecretSource(file_path or secret_name).fetch_secret(
            secret_name if file_path else ""
        )

    raise SecretFetchError(
        f"Unsupported source: {source} (supported: {', '.join(SOURCES)})"
    )
