"""Exception types raised while fetching and revealing secrets."""
from typing import List


class ViewSecretError(Exception):
    """Base class for view-secret errors."""
    pass


class SecretEmptyError(ViewSecretError):
    """The secret holds no entries."""

    def __init__(self, secret_name: str = ""):
        self.secret_name = secret_name
        if secret_name:
            super().__init__(f"secret '{secret_name}' is empty")
        else:
            super().__init__("secret is empty")


class SecretKeyNotFoundError(ViewSecretError):
    """An explicitly requested key is not present in the secret."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"provided key '{key}' not found in secret")


class InvalidSelectionError(ViewSecretError):
    """Interactive input matched no entry, menu number or command."""

    def __init__(self, selection: str):
        self.selection = selection
        super().__init__(f"invalid selection: '{selection}'")


class DecodeError(ViewSecretError):
    """A value is not valid base64."""

    def __init__(self, reason: str, key: str = ""):
        self.reason = reason
        self.key = key
        if key:
            super().__init__(f"failed to decode key {key}: {reason}")
        else:
            super().__init__(reason)

    def for_key(self, key: str) -> "DecodeError":
        """Return a copy of this error bound to an entry name."""
        return DecodeError(self.reason, key=key)


class DecodeAllError(ViewSecretError):
    """One or more entries failed to decode while revealing every entry."""

    def __init__(self, failed_keys: List[str]):
        self.failed_keys = list(failed_keys)
        super().__init__(
            f"failed to decode {len(self.failed_keys)} key(s): {', '.join(self.failed_keys)}"
        )


class SecretFetchError(ViewSecretError):
    """A source could not retrieve the secret."""
    pass


class SecretNotFoundError(SecretFetchError):
    """The backing store has no secret with the requested name."""
    pass


class UsageError(ViewSecretError):
    """Command-line arguments do not match what the command accepts."""
    pass
