"""Kubernetes secret source backed by the kubectl binary."""
import json
import logging
import subprocess
from typing import List, Optional

from .errors import SecretFetchError, SecretNotFoundError
from .models import Secret

logger = logging.getLogger(__name__)


class KubectlSecretClient:
    """Reads Kubernetes Secret objects with `kubectl get secret -o json`."""

    def __init__(
        self,
        namespace: Optional[str] = None,
        context: Optional[str] = None,
        kubeconfig: Optional[str] = None,
        kubectl: str = "kubectl",
    ):
        self.namespace = namespace
        self.context = context
        self.kubeconfig = kubeconfig
        self.kubectl = kubectl

    def build_command(self, secret_name: str) -> List[str]:
        command = [self.kubectl, "get", "secret", secret_name, "-o", "json"]
        if self.namespace:
            command += ["--namespace", self.namespace]
        if self.context:
            command += ["--context", self.context]
        if self.kubeconfig:
            command += ["--kubeconfig", self.kubeconfig]
        return command

    def fetch_secret(self, secret_name: str) -> Secret:
        """
        Fetch a Secret object from the cluster.

        Args:
            secret_name: Name of the Kubernetes secret

        Returns:
            Secret with the object's base64 `data` entries (empty if it has none)

        Raises:
            SecretNotFoundError: If the cluster reports the secret as missing
            SecretFetchError: If kubectl is missing, fails, or prints invalid JSON
        """
        command = self.build_command(secret_name)
        logger.debug(f"Running: {' '.join(command)}")

        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise SecretFetchError(f"kubectl binary not found: {self.kubectl}") from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            if "NotFound" in stderr:
                raise SecretNotFoundError(f"secret '{secret_name}' not found: {stderr}")
            raise SecretFetchError(
                f"kubectl exited with code {result.returncode}: {stderr or 'no output'}"
            )

        try:
            obj = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise SecretFetchError(f"Failed to parse kubectl output for '{secret_name}': {e}") from e

        if not isinstance(obj, dict):
            raise SecretFetchError(f"Unexpected kubectl output for '{secret_name}'")

        data = obj.get("data") or {}
        return Secret(data=data, name=secret_name, source="kubectl")
