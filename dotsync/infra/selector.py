"""
Single-choice selection prompts for dotsync menus.

FzfSelector pipes the menu labels through fzf, exactly like picking from a
list in the shell. PromptSelector is a numbered click prompt for machines
without fzf. Both return None when the user dismisses the menu.
"""

import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional
import logging

import click

from ..domain.resolution import MenuOption

logger = logging.getLogger(__name__)

# fzf exits 130 when the user hits Esc/Ctrl-C and 1 when nothing matched
FZF_DISMISSED = (1, 130)


class Selector(ABC):
    """Blocking single-choice menu."""

    @abstractmethod
    def choose(self, header: str, options: List[MenuOption]) -> Optional[MenuOption]:
        """Return the chosen option, or None if the menu was dismissed."""


class FzfSelector(Selector):
    """Fuzzy selection through the fzf binary."""

    def __init__(self, fzf: str = "fzf", height: str = "40%"):
        self.fzf = fzf
        self.height = height

    def _command(self, header: str) -> List[str]:
        return [
            self.fzf,
            "--height", self.height,
            "--reverse",
            "--border",
            "--header", header,
            "--prompt", "Action: ",
        ]

    def choose(self, header: str, options: List[MenuOption]) -> Optional[MenuOption]:
        labels = "\n".join(option.label for option in options)
        try:
            # stdout captured for the selection; fzf draws on /dev/tty
            result = subprocess.run(
                self._command(header),
                input=labels,
                stdout=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            logger.warning(f"Cannot run {self.fzf}: {e}")
            return None

        if result.returncode in FZF_DISMISSED:
            return None
        if result.returncode != 0:
            logger.debug(f"fzf exited with {result.returncode}")
            return None

        picked = (result.stdout or "").strip()
        for option in options:
            if option.label == picked:
                return option
        return None


class PromptSelector(Selector):
    """Numbered menu on the terminal; 0 or Ctrl-C dismisses it."""

    def choose(self, header: str, options: List[MenuOption]) -> Optional[MenuOption]:
        click.echo("")
        click.echo(header)
        for index, option in enumerate(options, start=1):
            click.echo(f"  [{index}] {option.label}")
        click.echo("  [0] Cancel")

        try:
            choice = click.prompt(
                "Action",
                type=click.IntRange(0, len(options)),
                default=0,
                show_default=False,
            )
        except click.Abort:
            return None

        if choice == 0:
            return None
        return options[choice - 1]


def make_selector(kind: str = "auto") -> Selector:
    """
    Build the selector named in configuration.

    Args:
        kind: "fzf", "prompt" or "auto" (fzf when it is on PATH)
    """
    if kind == "prompt":
        return PromptSelector()
    if kind == "fzf":
        return FzfSelector()
    if shutil.which("fzf"):
        return FzfSelector()
    logger.debug("fzf not found on PATH, using numbered prompt")
    return PromptSelector()
