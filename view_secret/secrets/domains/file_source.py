"""Local YAML/JSON file source."""
import logging
from pathlib import Path
from typing import Union

import yaml

from .decoder import encode
from .errors import SecretFetchError, SecretNotFoundError
from .models import Secret

logger = logging.getLogger(__name__)


class FileSecretSource:
    """
    Reads a secret from a YAML or JSON file.

    Two layouts are understood:
    - a Kubernetes Secret manifest (kind: Secret) with `data` and/or `stringData`
    - a plain mapping of entry name to base64 value
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _section(self, section, label: str) -> dict:
        """Return a mapping section, checking that every entry name is a string."""
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise SecretFetchError(f"'{label}' in secret file {self.path} must be a mapping")
        for key in section:
            if not isinstance(key, str):
                raise SecretFetchError(
                    f"Key {key!r} in '{label}' of secret file {self.path} must be a string"
                )
        return section

    def _encoded_entries(self, section, label: str) -> dict:
        # Values must already be base64 text; YAML scalars (true, null, 5) are rejected
        entries = self._section(section, label)
        for key, value in entries.items():
            if not isinstance(value, str):
                raise SecretFetchError(
                    f"Value of '{key}' in '{label}' of secret file {self.path} "
                    f"must be a base64 string, got {type(value).__name__}"
                )
        return dict(entries)

    def fetch_secret(self, secret_name: str = "") -> Secret:
        if not self.path.is_file():
            raise SecretNotFoundError(f"secret file not found: {self.path}")

        try:
            with open(self.path, 'r') as f:
                document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SecretFetchError(f"Failed to parse secret file {self.path}: {e}") from e
        except OSError as e:
            raise SecretFetchError(f"Failed to read secret file {self.path}: {e}") from e

        if document is None:
            document = {}
        if not isinstance(document, dict):
            raise SecretFetchError(f"Secret file {self.path} must contain a mapping")

        if document.get("kind") == "Secret":
            data = self._encoded_entries(document.get("data"), "data")
            # stringData overrides data, as the API server merges them
            for key, value in self._section(document.get("stringData"), "stringData").items():
                data[key] = encode(str(value))
            name = secret_name or (document.get("metadata") or {}).get("name", "")
        else:
            data = self._encoded_entries(document, "top level")
            name = secret_name or self.path.stem

        logger.debug(f"Loaded {len(data)} key(s) from {self.path}")
        return Secret(data=data, name=name, source="file")
