"""Domain models for secret viewing."""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple, Union


def secret_data(entries: Optional[Union[Mapping[str, str], Iterable[Tuple[str, str]]]] = None) -> Mapping[str, str]:
    """
    Build a read-only SecretData mapping ordered by entry name.

    Args:
        entries: Mapping (or iterable of pairs) of entry name to base64 text

    Returns:
        Immutable mapping whose iteration order is sorted by name
    """
    items = dict(entries or {})
    return MappingProxyType({name: items[name] for name in sorted(items)})


@dataclass(frozen=True)
class Secret:
    """A fetched secret: entry names mapped to base64-encoded values."""
    data: Mapping[str, str] = field(default_factory=secret_data)
    name: str = ""
    source: str = ""  # "kubectl", "gcp", "file" or "" for in-memory secrets

    def __post_init__(self):
        # Freeze whatever mapping the caller passed in
        object.__setattr__(self, "data", secret_data(self.data))

    @property
    def keys(self) -> List[str]:
        """Entry names in sorted order."""
        return list(self.data)


@dataclass(frozen=True)
class AllEntries:
    """Reveal every entry."""
    pass


@dataclass(frozen=True)
class QuitNoAction:
    """Leave without revealing anything."""
    pass


@dataclass(frozen=True)
class NamedEntry:
    """Reveal a single entry."""
    name: str


SelectionOutcome = Union[AllEntries, QuitNoAction, NamedEntry]
