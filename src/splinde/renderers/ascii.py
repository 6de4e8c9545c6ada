# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""ASCII tree renderer using Rich for terminal output."""

import io

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from splinde.renderers.base import OutputFormat, format_amount, get_node_icon
from splinde.tree.model import Entry, Node, Section


class ASCIIRenderer:
    """Renders an annotated tree as ASCII art using Rich."""

    format = OutputFormat.ASCII

    def render(
        self,
        tree: Section,
        *,
        depth: int | None = None,
        **options,
    ) -> str:
        """Render the tree as ASCII.

        Args:
            tree: The annotated tree to render
            depth: Maximum depth to render; deeper sections show a child count
            **options: ``width`` (default 120), ``precision`` (default 2),
                ``icons`` (default True), ``show_notes`` (default True)

        Returns:
            ASCII string representation of the tree
        """
        rich_tree = self._create_rich_tree(
            tree,
            max_depth=depth,
            current_depth=0,
            precision=options.get("precision", 2),
            icons=options.get("icons", True),
            show_notes=options.get("show_notes", True),
        )

        console = Console(
            file=io.StringIO(),
            force_terminal=True,
            width=options.get("width", 120),
            record=True,
        )
        # written to a scratch buffer; only the recorded plain text is returned
        console.print(rich_tree)

        return console.export_text()

    def _create_rich_tree(
        self,
        node: Node,
        *,
        max_depth: int | None,
        current_depth: int,
        precision: int,
        icons: bool,
        show_notes: bool,
    ) -> Tree:
        collapsed = (
            isinstance(node, Section)
            and max_depth is not None
            and current_depth >= max_depth
        )
        label = self._build_label(
            node,
            precision=precision,
            icons=icons,
            show_notes=show_notes,
            collapsed=collapsed,
        )
        rich_tree = Tree(label)

        if isinstance(node, Section) and not collapsed:
            for child in node.children:
                rich_tree.add(
                    self._create_rich_tree(
                        child,
                        max_depth=max_depth,
                        current_depth=current_depth + 1,
                        precision=precision,
                        icons=icons,
                        show_notes=show_notes,
                    )
                )

        return rich_tree

    def _build_label(
        self,
        node: Node,
        *,
        precision: int,
        icons: bool,
        show_notes: bool,
        collapsed: bool,
    ) -> Text:
        parts = []

        if icons:
            parts.append((f"{get_node_icon(node.name)} ", ""))

        if isinstance(node, Entry):
            parts.append((node.name, ""))
            parts.append((f": {format_amount(node.value, precision)}", "cyan"))
            if show_notes and node.note:
                parts.append((f"  ({node.note})", "dim"))
        else:
            parts.append((node.name, "bold"))
            if node.aggregate is not None:
                parts.append(
                    (f"  Total: {format_amount(node.aggregate, precision)}", "bold green")
                )
            if collapsed and node.children:
                parts.append((f" [+{len(node.children)}]", "dim"))

        text = Text()
        for content, style in parts:
            text.append(content, style=style if style else None)

        return text
