"""Workflow that decides which secret entries to reveal and prints them."""
import logging
from typing import TextIO

from ..domains.decoder import decode_text
from ..domains.errors import (
    DecodeAllError,
    DecodeError,
    SecretEmptyError,
    SecretKeyNotFoundError,
)
from ..domains.models import AllEntries, NamedEntry, QuitNoAction, Secret
from ..domains.selector import select_interactively

logger = logging.getLogger(__name__)


def format_entry(key: str, value: str) -> str:
    """
    Render one revealed entry as KEY='value'.

    Values are not escaped: a value holding a single quote produces a line
    that is not safe to source from a shell.
    """
    return f"{key}='{value}'"


def _report_decode_error(err_stream: TextIO, key: str, error: DecodeError) -> None:
    print(f"error: failed to decode key {key}: {error.reason}", file=err_stream)


def _reveal_key(out_stream: TextIO, err_stream: TextIO, secret: Secret, key: str) -> None:
    if key not in secret.data:
        raise SecretKeyNotFoundError(key)

    try:
        value = decode_text(secret.data[key])
    except DecodeError as e:
        _report_decode_error(err_stream, key, e)
        raise e.for_key(key) from e

    print(format_entry(key, value), file=out_stream)


def _reveal_all(out_stream: TextIO, err_stream: TextIO, secret: Secret) -> None:
    failed = []
    for key, encoded in secret.data.items():
        try:
            value = decode_text(encoded)
        except DecodeError as e:
            _report_decode_error(err_stream, key, e)
            failed.append(key)
            continue
        print(format_entry(key, value), file=out_stream)

    if failed:
        logger.debug(f"{len(failed)} of {len(secret.data)} key(s) failed to decode")
        raise DecodeAllError(failed)


def process_secret(
    out_stream: TextIO,
    err_stream: TextIO,
    in_stream: TextIO,
    secret: Secret,
    explicit_key: str = "",
    decode_all: bool = False,
    quiet: bool = False,
) -> None:
    """
    Reveal the decoded contents of a secret.

    Args:
        out_stream: Stream revealed KEY='value' lines are written to
        err_stream: Stream per-key decode failures, the selection menu and
            the single-key notice are written to
        in_stream: Stream the interactive selection is read from
        secret: Secret to reveal
        explicit_key: Entry to reveal; empty to select another way
        decode_all: If True, reveal every entry without prompting
        quiet: If True, suppress the single-key notice

    Raises:
        SecretEmptyError: The secret has no entries
        SecretKeyNotFoundError: explicit_key (or the selected key) is absent
        DecodeError: The single requested entry is not valid base64
        DecodeAllError: Some entries failed while revealing every entry
        InvalidSelectionError: Interactive input was not recognized

    Behavior (first match wins):
        1. Empty secret fails before anything is written
        2. explicit_key reveals that key only
        3. decode_all reveals every key in sorted order, continuing past failures
        4. Otherwise the operator picks: one key, all keys, or quit
    """
    if not secret.data:
        raise SecretEmptyError(secret.name)

    if explicit_key:
        logger.debug(f"Revealing explicit key {explicit_key}")
        _reveal_key(out_stream, err_stream, secret, explicit_key)
        return

    if decode_all:
        logger.debug(f"Revealing all {len(secret.data)} key(s)")
        _reveal_all(out_stream, err_stream, secret)
        return

    # Menu, prompt and notice go to err_stream; out_stream carries only values
    outcome = select_interactively(err_stream, in_stream, secret.keys, quiet=quiet)

    if isinstance(outcome, AllEntries):
        _reveal_all(out_stream, err_stream, secret)
    elif isinstance(outcome, NamedEntry):
        _reveal_key(out_stream, err_stream, secret, outcome.name)
    elif isinstance(outcome, QuitNoAction):
        logger.debug("Selection cancelled, nothing revealed")
