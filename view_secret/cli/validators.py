"""Input validation for CLI arguments."""
import re
from typing import List

from view_secret.secrets.domains.errors import UsageError

MAX_ARGS = 2

# Kubernetes object names: DNS-1123 subdomain
KUBERNETES_NAME_PATTERN = r'^[a-z0-9]([-a-z0-9.]*[a-z0-9])?$'
# GCP Secret Manager secret ids
GCP_NAME_PATTERN = r'^[a-zA-Z0-9_-]+$'


def validate_args(args: List[str]) -> None:
    """
    Validate the positional arguments of `secrets view`.

    Accepts a secret name and an optional key.

    Raises:
        UsageError: If no secret is given or more than two arguments are passed
    """
    if len(args) > MAX_ARGS:
        raise UsageError(f"accepts {MAX_ARGS} arg(s), received {len(args)}")
    if not args:
        raise UsageError("secret name is required")


def validate_secret_name(name: str, source: str) -> None:
    """
    Validate a secret name against the naming rules of its source.

    File sources take a path, so only emptiness is checked.

    Raises:
        UsageError: If the name is empty or not valid for the source
    """
    if not name:
        raise UsageError("Secret name cannot be empty")

    if source == "kubectl" and (len(name) > 253 or not re.match(KUBERNETES_NAME_PATTERN, name)):
        raise UsageError(
            f"Invalid secret name '{name}': Kubernetes names use lowercase letters, "
            "numbers, '-' and '.', and must start and end with a letter or number"
        )

    if source == "gcp" and not re.match(GCP_NAME_PATTERN, name):
        raise UsageError(
            f"Invalid secret name '{name}': allowed characters are letters, "
            "numbers, underscores (_) and hyphens (-)"
        )
