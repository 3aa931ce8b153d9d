"""Error types raised by the game."""

from __future__ import annotations

from os import PathLike


class ZError(Exception):
    """Base error; wraps the underlying error and shows it with a label."""

    _label = "Error"

    def __init__(self, error: BaseException) -> None:
        super().__init__(error)
        self.error = error
        self.__cause__ = error

    def __str__(self) -> str:
        return f"{self._label}: {self.error}"


class GameError(ZError):
    _label = "GGEZ Error"


class UiError(ZError):
    _label = "ZGUI Error"


class SceneError(ZError):
    _label = "ZScene Error"


class ZIOError(ZError):
    _label = "IO Error"


class DeserializeError(ZError):
    """A data file could not be deserialized."""

    def __init__(self, error: BaseException, path: str | PathLike | None) -> None:
        super().__init__(error)
        self.path = path

    def __str__(self) -> str:
        shown = "<no path>" if self.path is None else str(self.path)
        return f"Can't deserialize '{shown}': {self.error}"