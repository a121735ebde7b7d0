from typing import Any, Dict, List, Sequence

from aontas.core.models import Block
from aontas.core.tables import table_to_lines
from aontas.plugins.registry import Renderer, RendererRegistry


def block_lines(block: Block) -> List[str]:
    if block.kind == "heading":
        return [block.text]
    if block.kind == "paragraph":
        return [block.text.rstrip()]
    if block.kind == "table":
        return table_to_lines(block.table)
    raise TypeError(f"Unknown block kind: {block.kind!r}")


def render_text(blocks: Sequence[Block]) -> str:
    out_lines: List[str] = []
    for block in blocks:
        out_lines.extend(block_lines(block))
    return "\n".join(out_lines)


class TxtRenderer(Renderer):
    @classmethod
    def get_format(cls) -> str:
        return "txt"

    @classmethod
    def get_media_type(cls) -> str:
        return "text/plain; charset=utf-8"

    def render(self, blocks: Sequence[Block], options: Dict[str, Any]) -> bytes:
        utf8_bom = options.get("utf8_bom", False)
        text = render_text(blocks)
        return text.encode("utf-8-sig" if utf8_bom else "utf-8")

RendererRegistry.register(TxtRenderer)
