"""Order-preserving, sequential walk over a parsed document."""

from __future__ import annotations

import asyncio
from typing import Iterable, Iterator, List, Optional, Tuple

from bs4.element import PageElement

from .context import TransformContext
from .markup import has_children, render_close, render_open
from .rules import RuleEngine

_Frame = Tuple[Iterator[PageElement], Optional[PageElement]]


class TreeWalker:
    """Serialize a tree while the rule engine rewrites each node on entry.

    Siblings are handled strictly one after another: the next sibling is only
    entered once the previous one's subtree, including any image probe, is
    done. Descent uses an explicit stack, and the walker yields to the event
    loop before entering a node's children so deep documents neither grow the
    Python stack nor starve other calls' pending probes.
    """

    def __init__(self, rules: RuleEngine) -> None:
        self.rules = rules

    async def walk(self, nodes: Iterable[PageElement], context: TransformContext) -> str:
        out: List[str] = []
        stack: List[_Frame] = [(iter(list(nodes)), None)]
        while stack:
            siblings, parent = stack[-1]
            node = next(siblings, None)
            if node is None:
                stack.pop()
                if parent is not None:
                    out.append(render_close(parent))
                continue

            await self.rules.apply(node, context)
            out.append(render_open(node))
            if has_children(node):
                await asyncio.sleep(0)
                stack.append((iter(list(node.contents)), node))
            else:
                out.append(render_close(node))
        return "".join(out)


__all__ = ["TreeWalker"]
