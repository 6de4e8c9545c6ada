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

"""JSON renderer for annotated trees."""

import json
from typing import Any

from splinde.renderers.base import OutputFormat
from splinde.tree.model import Entry, Node, Section


class JSONRenderer:
    """Renders an annotated tree as JSON."""

    format = OutputFormat.JSON

    def render(
        self,
        tree: Section,
        *,
        depth: int | None = None,
        **options,
    ) -> str:
        """Render the tree as JSON.

        Args:
            tree: The annotated tree to render
            depth: Maximum depth to render
            **options: ``indent`` (default 2), ``include_aggregate``
                (default True; False gives the raw exchange shape)

        Returns:
            JSON string representation of the tree
        """
        include_aggregate = options.get("include_aggregate", True)
        if depth is None:
            data = tree.to_dict(include_aggregate=include_aggregate)
        else:
            data = self._pruned(tree, depth, include_aggregate)

        indent = options.get("indent", 2)
        return json.dumps(data, indent=indent, ensure_ascii=False)

    def _pruned(self, node: Node, levels: int, include_aggregate: bool) -> dict[str, Any]:
        """Serialize ``node`` keeping at most ``levels`` levels of children.

        A section cut off at the limit keeps its own fields and reports how
        many children were left out.
        """
        if isinstance(node, Entry):
            return node.to_dict()

        shallow = Section(node.name, aggregate=node.aggregate)
        data = shallow.to_dict(include_aggregate=include_aggregate)
        if levels <= 0 and node.children:
            del data["children"]
            data["childrenCount"] = len(node.children)
            data["childrenTruncated"] = True
        else:
            data["children"] = [
                self._pruned(child, levels - 1, include_aggregate)
                for child in node.children
            ]
        return data
