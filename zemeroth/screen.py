"""A stack of screens and the transitions between them."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Union

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Push:
    """Put a new screen on top of the stack."""

    screen: Screen


@dataclass(frozen=True)
class Pop:
    """Leave the current screen; leaving the last one quits the game."""


Transition = Union[Push, Pop, None]


class Screen(ABC):
    """One screen of the game: a menu, the campaign map, a battle."""

    @abstractmethod
    def update(self, context: Any, dtime: float) -> Transition:
        """Advance by ``dtime`` seconds and say where to go next."""

    @abstractmethod
    def draw(self, context: Any) -> None:
        """Draw the screen."""

    @abstractmethod
    def click(self, context: Any, pos: tuple[float, float]) -> Transition:
        """Handle a click and say where to go next."""

    @abstractmethod
    def resize(self, aspect_ratio: float) -> None:
        """Adapt the layout to a new aspect ratio."""

    def move_mouse(self, context: Any, pos: tuple[float, float]) -> None:
        """Handle mouse movement; by default only remembers the pointer position."""
        self.mouse_pos = pos


class Screens:
    """The stack of open screens; only the top one is active.

    The context passed in must provide ``quit()``, called when the last
    screen is popped.
    """

    def __init__(self, start_screen: Screen) -> None:
        self._screens: list[Screen] = [start_screen]

    @property
    def top(self) -> Screen:
        return self._screens[-1]

    def __len__(self) -> int:
        return len(self._screens)

    def update(self, context: Any, dtime: float) -> None:
        command = self.top.update(context, dtime)
        self.handle_command(context, command)

    def draw(self, context: Any) -> None:
        self.top.draw(context)

    def click(self, context: Any, pos: tuple[float, float]) -> None:
        command = self.top.click(context, pos)
        self.handle_command(context, command)

    def move_mouse(self, context: Any, pos: tuple[float, float]) -> None:
        self.top.move_mouse(context, pos)

    def resize(self, aspect_ratio: float) -> None:
        for screen in self._screens:
            screen.resize(aspect_ratio)

    def handle_command(self, context: Any, command: Transition) -> None:
        if command is None:
            return
        if isinstance(command, Push):
            _log.info("Screens.handle_command: Push")
            self._screens.append(command.screen)
        elif isinstance(command, Pop):
            _log.info("Screens.handle_command: Pop")
            if len(self._screens) > 1:
                self._screens.pop()
            else:
                context.quit()
        else:
            raise TypeError(f"unknown transition: {command!r}")