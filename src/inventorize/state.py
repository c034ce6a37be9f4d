"""Manages the global, shared state for the CLI application."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class Options:
    """Options shared by all subcommands."""

    inventory: Path
    """Canonical path to the inventory file."""

    repository: Path
    """Canonical path to the repository directory."""


class GlobalState:
    """A singleton class to hold the global state of the CLI application."""

    def __init__(self) -> None:
        """Initialize the GlobalState."""
        self.options: Options | None = None

    def get_options(self) -> Options:
        """Return the options set by the main callback."""
        if self.options is None:
            raise RuntimeError("Global options have not been initialized.")
        return self.options


global_state = GlobalState()


def get_options() -> Options:
    """Return the options of the current invocation."""
    return global_state.get_options()
