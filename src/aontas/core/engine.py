import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from aontas.core.composer import compose
from aontas.core.errors import ExportFailedError, UnsupportedFormatError
from aontas.core.models import Artifact, Block
from aontas.core.sheets import (
    ExportContext,
    build_answer_key_lines,
    build_export_lines,
    build_worksheet_lines,
)
from aontas.grading.exercises import ExerciseItem, Mode
from aontas.plugins.registry import RendererRegistry

logger = logging.getLogger(__name__)

FILE_PREFIX = "aontas10"

_WS_RE = re.compile(r"\s+")


def slugify(tag: str) -> str:
    return _WS_RE.sub("-", tag.strip()).lower()


def suggest_filename(prefix: str, tags: Iterable[str], fmt: str) -> str:
    parts = [prefix] + [slugify(t) for t in tags if t and t.strip()]
    return f"{'-'.join(parts)}.{fmt.lstrip('.').lower()}"


class ExportEngine:
    """
    Routes composed blocks to format renderers.
    Composes once per export and renders each requested format from the same blocks.
    """

    @staticmethod
    def render(blocks: Sequence[Block], fmt: str, options: Optional[Dict[str, Any]] = None) -> bytes:
        RendererCls = RendererRegistry.get(fmt)
        if not RendererCls:
            raise UnsupportedFormatError(f"No renderer found for format '{fmt}'")

        try:
            return RendererCls().render(blocks, options or {})
        except Exception as e:
            raise ExportFailedError(f"Rendering {fmt} failed: {e}") from e

    @staticmethod
    def export(
        lines: Sequence[str],
        formats: Iterable[str],
        prefix: str,
        tags: Sequence[str],
        options: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> List[Artifact]:
        """
        Compose `lines` and render one artifact per format.
        `options` maps a format name to that renderer's options.
        """
        options = options or {}
        blocks = compose(lines)
        artifacts = []
        for fmt in formats:
            fmt = fmt.lstrip(".").lower()
            content = ExportEngine.render(blocks, fmt, options.get(fmt, {}))
            media_type = RendererRegistry.get(fmt).get_media_type()
            artifacts.append(Artifact(filename=suggest_filename(prefix, tags, fmt), content=content, media_type=media_type))
            logger.debug("Rendered %s (%d bytes)", artifacts[-1].filename, len(content))
        return artifacts

    @staticmethod
    def export_texts(
        standard: str,
        adapted: str,
        ctx: ExportContext,
        formats: Iterable[str],
        options: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> List[Artifact]:
        lines = build_export_lines(standard, adapted, ctx)
        return ExportEngine.export(lines, formats, FILE_PREFIX, ctx.tags, options)

    @staticmethod
    def export_worksheets(
        items: Sequence[ExerciseItem],
        mode: Union[Mode, str],
        ctx: ExportContext,
        formats: Iterable[str],
        options: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> List[Artifact]:
        """Render the learner worksheet for `mode` and the shared teacher key."""
        formats = list(formats)
        mode = Mode(mode)
        sheet = ExportEngine.export(
            build_worksheet_lines(items, mode, ctx), formats,
            f"{FILE_PREFIX}-worksheet-{mode.value}", ctx.tags, options,
        )
        key = ExportEngine.export(
            build_answer_key_lines(items, ctx), formats,
            f"{FILE_PREFIX}-key", ctx.tags, options,
        )
        return sheet + key
