"""Loading and caching of game assets such as textures and fonts."""

from __future__ import annotations

import functools
import os
from typing import Callable, Dict, Generic, TypeVar, Union

import pygame

T = TypeVar("T")
PathLike = Union[str, "os.PathLike[str]"]


class ResourceError(RuntimeError):
    """Raised when an asset cannot be loaded."""


class ResourceManager(Generic[T]):
    """Loads each asset once and hands out the cached object afterwards."""

    def __init__(self, loader: Callable[[str], T]) -> None:
        self._loader = loader
        self._resources: Dict[str, T] = {}

    def get(self, path: PathLike) -> T:
        """The asset stored at path, loading it on first request."""
        key = os.fspath(path)
        if key in self._resources:
            return self._resources[key]
        try:
            resource = self._loader(key)
        except (OSError, ValueError, pygame.error) as exc:
            raise ResourceError(f"Failed to load resource from file {key}") from exc
        self._resources[key] = resource
        return resource

    def __contains__(self, path: PathLike) -> bool:
        return os.fspath(path) in self._resources

    def __len__(self) -> int:
        return len(self._resources)


class _FontFace:
    """A font file that can be opened at any point size."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._sizes: Dict[int, pygame.font.Font] = {}
        self(12)

    def __call__(self, size: int) -> pygame.font.Font:
        font = self._sizes.get(size)
        if font is None:
            font = pygame.font.Font(self.path, size)
            self._sizes[size] = font
        return font


def _load_texture(path: str) -> pygame.Surface:
    return pygame.image.load(path)


def _load_font(path: str) -> _FontFace:
    if not pygame.font.get_init():
        pygame.font.init()
    return _FontFace(path)


@functools.lru_cache(maxsize=None)
def texture_manager() -> ResourceManager:
    """The shared manager for image textures."""
    return ResourceManager(_load_texture)


@functools.lru_cache(maxsize=None)
def font_manager() -> ResourceManager:
    """The shared manager for fonts; each font is callable with a point size."""
    return ResourceManager(_load_font)