from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence, Type

from aontas.core.models import Block


class Renderer(ABC):
    """Turns a block sequence into artifact bytes. Implementations keep no state between calls."""

    @classmethod
    @abstractmethod
    def get_format(cls) -> str:
        """e.g., 'pdf'"""
        pass

    @classmethod
    @abstractmethod
    def get_media_type(cls) -> str:
        pass

    @classmethod
    def get_extension(cls) -> str:
        return f".{cls.get_format()}"

    @abstractmethod
    def render(self, blocks: Sequence[Block], options: Dict[str, Any]) -> bytes:
        pass


class RendererRegistry:
    _renderers: Dict[str, Type[Renderer]] = {}

    @classmethod
    def register(cls, renderer_cls: Type[Renderer]) -> None:
        cls._renderers[renderer_cls.get_format().lower()] = renderer_cls

    @classmethod
    def get(cls, fmt: str) -> Optional[Type[Renderer]]:
        return cls._renderers.get(fmt.lower().lstrip("."))

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._renderers.keys())
