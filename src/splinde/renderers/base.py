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

"""Base renderer, output formats and node icons."""

from enum import Enum
from typing import Protocol, Union

from splinde.tree.model import Section


class OutputFormat(str, Enum):
    """Output format for rendering."""

    ASCII = "ascii"
    JSON = "json"


DEFAULT_ICON = "📋"

NODE_ICONS = {
    # Root level
    "Annual Report": "📊",
    # Main categories
    "Sales": "💰",
    "Marketing": "📢",
    "R&D": "🔬",
    "Operations": "⚙️",
    # Sales
    "Q1 Sales": "📈",
    "Q2 Sales": "📈",
    "Q3 Sales": "📈",
    "Q4 Sales": "📈",
    # Marketing
    "Digital Campaigns": "💻",
    "Event Sponsorships": "🎪",
    # R&D
    "New Product Development": "🛠️",
    "Innovation Lab": "🧪",
    # Operations
    "HR": "👥",
    "Logistics": "🚚",
    "Customer Support": "🎧",
    "HR tool": "💼",
}


def get_node_icon(name: str) -> str:
    """Icon shown next to a node name."""
    return NODE_ICONS.get(name, DEFAULT_ICON)


def format_amount(amount: float, precision: int = 2) -> str:
    """Format a value or total with a fixed number of decimals."""
    return f"{amount:.{precision}f}"


class TreeRenderer(Protocol):
    """Protocol for tree renderers."""

    format: OutputFormat

    def render(
        self,
        tree: Section,
        *,
        depth: int | None = None,
        **options,
    ) -> Union[str, bytes]:
        """Render an annotated tree to the target format.

        Args:
            tree: The annotated tree to render
            depth: Maximum depth to render (None for unlimited)
            **options: Additional format-specific options

        Returns:
            Rendered output
        """
        ...
