"""Interactive selection of which secret entry to reveal."""
import logging
from typing import Iterable, TextIO

from .errors import InvalidSelectionError
from .models import AllEntries, NamedEntry, QuitNoAction, SelectionOutcome

logger = logging.getLogger(__name__)

SINGLE_KEY_DESCRIPTION = "Viewing only available key: {}"
LIST_DESCRIPTION = "Multiple keys found. Select a key to view (default: all):"
PROMPT = "Selection [all]: "

ALL_TOKENS = ("all", "a")
QUIT_TOKENS = ("q", "quit", "exit")


def _render_menu(out_stream: TextIO, names: list) -> None:
    print(LIST_DESCRIPTION, file=out_stream)
    width = len(str(len(names)))
    for index, name in enumerate(names, start=1):
        print(f"  {index:>{width}}) {name}", file=out_stream)
    print(f"  {'a':>{width}}) all", file=out_stream)
    print(f"  {'q':>{width}}) quit", file=out_stream)
    out_stream.write(PROMPT)
    out_stream.flush()


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def resolve_selection(answer: str, names: list) -> SelectionOutcome:
    """
    Turn one line of user input into a selection outcome.

    Entry names are matched first (exact, case-sensitive), then menu numbers,
    then the 'all' and 'quit' commands.

    Raises:
        InvalidSelectionError: If the input matches nothing
    """
    choice = answer.strip()

    if not choice:
        return AllEntries()

    if choice in names:
        return NamedEntry(choice)

    if choice.isdigit():
        position = int(choice)
        if 1 <= position <= len(names):
            return NamedEntry(names[position - 1])

    if choice.lower() in ALL_TOKENS:
        return AllEntries()

    if choice.lower() in QUIT_TOKENS:
        return QuitNoAction()

    raise InvalidSelectionError(choice)


def select_interactively(
    out_stream: TextIO,
    in_stream: TextIO,
    entry_names: Iterable[str],
    quiet: bool = False,
) -> SelectionOutcome:
    """
    Ask the operator which entry to reveal.

    Args:
        out_stream: Stream the menu (or auto-select notice) is written to;
            the processor passes its error stream so values stay alone on stdout
        in_stream: Stream one line of input is read from
        entry_names: Names of the secret's entries
        quiet: If True, suppress the auto-select notice

    Returns:
        AllEntries, QuitNoAction or NamedEntry

    Behavior:
        - A single entry is selected without prompting
        - An empty line or end of input selects all entries
        - Unrecognized input raises InvalidSelectionError (no retry)
    """
    names = sorted(entry_names)

    if len(names) == 1:
        if not quiet:
            print(SINGLE_KEY_DESCRIPTION.format(names[0]), file=out_stream)
        return NamedEntry(names[0])

    _render_menu(out_stream, names)
    answer = in_stream.readline()

    # Terminate the prompt line when the input was not echoed
    if not answer or not _is_tty(in_stream):
        print(file=out_stream)
    if not answer:
        logger.debug("End of input reached, selecting all entries")

    outcome = resolve_selection(answer, names)
    logger.debug(f"Interactive selection resolved to {type(outcome).__name__}")
    return outcome
