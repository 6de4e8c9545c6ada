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

"""Renderers for displaying annotated trees."""

from typing import Union

from splinde.renderers.ascii import ASCIIRenderer
from splinde.renderers.base import (
    OutputFormat,
    TreeRenderer,
    format_amount,
    get_node_icon,
)
from splinde.renderers.json_renderer import JSONRenderer
from splinde.tree.model import Section


def render_tree(
    tree: Section,
    *,
    format: OutputFormat = OutputFormat.ASCII,
    depth: int | None = None,
    **options,
) -> Union[str, bytes]:
    """Render an annotated tree to the specified format.

    Args:
        tree: The annotated tree to render
        format: Output format (ASCII or JSON)
        depth: Maximum tree depth to render
        **options: Format-specific options

    Returns:
        Rendered output
    """
    if format == OutputFormat.JSON:
        renderer: TreeRenderer = JSONRenderer()
    else:
        renderer = ASCIIRenderer()

    return renderer.render(tree, depth=depth, **options)


__all__ = [
    "OutputFormat",
    "TreeRenderer",
    "ASCIIRenderer",
    "JSONRenderer",
    "format_amount",
    "get_node_icon",
    "render_tree",
]
