"""Text rendering of the reconciled article tree."""

from typing import Dict, List, Sequence

from kb_sync.file_mapper.models import ArticleNode, ArticleStatus


class TreeRenderer:
    """Renders an article forest as box-drawing tree lines.

    Example output:
        ├── Intro
        │   └── ✴️ Setup
        └── ❇️ Notes
    """

    BRANCH = "├── "
    LAST_BRANCH = "└── "
    PIPE = "│   "
    SPACE = "    "

    GLYPHS: Dict[ArticleStatus, str] = {
        ArticleStatus.UNCHANGED: "",
        ArticleStatus.MODIFIED: "✴️",
        ArticleStatus.NEW_LOCAL: "❇️",
        ArticleStatus.DELETED_LOCALLY: "❌",
    }

    LEGEND = "Legend: ✴️ modified  ❇️ new (local only)  ❌ deleted locally"

    @classmethod
    def render(cls, nodes: Sequence[ArticleNode]) -> List[str]:
        """Render the forest depth-first, one line per node."""
        lines: List[str] = []
        cls._render_level(nodes, "", lines)
        return lines

    @classmethod
    def _render_level(cls, nodes: Sequence[ArticleNode], prefix: str, lines: List[str]) -> None:
        for index, node in enumerate(nodes):
            is_last = index == len(nodes) - 1
            glyph = cls.GLYPHS[node.status]
            label = f"{glyph} {node.title}" if glyph else node.title
            lines.append(prefix + (cls.LAST_BRANCH if is_last else cls.BRANCH) + label)
            if node.children:
                cls._render_level(
                    node.children,
                    prefix + (cls.SPACE if is_last else cls.PIPE),
                    lines,
                )
