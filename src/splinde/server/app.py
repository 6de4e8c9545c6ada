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

"""FastAPI application for the SPLINDE tree editor.

Serves the browser editor and a small JSON API over one in-memory editing
session. Handlers are ``async def`` so they run one at a time on the event
loop; the session is never written from two places at once.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from rich.console import Console

from splinde import __version__
from splinde.config import SplindeConfig
from splinde.data import load_tree
from splinde.editor import TreeEditor
from splinde.notifications import NotificationCenter
from splinde.renderers import OutputFormat, render_tree
from splinde.server.schemas import (
    ActionRequest,
    ActionResponse,
    NotificationOut,
    NotificationsOutput,
    StatusOutput,
)
from splinde.tree.actions import ActionError, action_from_dict
from splinde.tree.aggregator import iter_nodes
from splinde.tree.model import Section
from splinde.tree.navigation import PathError

logger = logging.getLogger(__name__)

console = Console()

TEMPLATE_PATH = Path(__file__).parent / "templates" / "editor.html"


def create_app(config: Optional[SplindeConfig] = None, tree: Optional[Section] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Effective configuration (defaults if None)
        tree: Initial tree; loaded from ``config.data.path`` (or the demo
            report) when not given
    """
    if config is None:
        config = SplindeConfig()

    if tree is None:
        tree = load_tree(Path(config.data.path) if config.data.path else None)

    app = FastAPI(
        title="SPLINDE",
        description="Tree editor with aggregated section totals",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    raw_data = tree.to_dict(include_aggregate=False)
    editor = TreeEditor(
        tree,
        notifications=NotificationCenter(default_duration_ms=config.notifications.duration_ms),
    )
    app.state.editor = editor

    @app.get("/", response_class=HTMLResponse)
    async def serve_editor():
        """Serve the editor HTML page."""
        if not TEMPLATE_PATH.exists():
            return "<html><body><h1>Editor template not found</h1></body></html>"
        return TEMPLATE_PATH.read_text()

    @app.get("/api/status", response_model=StatusOutput)
    async def get_status() -> StatusOutput:
        """Summary of the current tree."""
        current = editor.tree
        return StatusOutput(
            status="ok",
            version=__version__,
            name=current.name,
            total=current.aggregate,
            node_count=sum(1 for _ in iter_nodes(current)),
            generated_at=datetime.now().isoformat(),
        )

    @app.get("/api/data")
    async def get_data():
        """The tree as it was loaded, in raw exchange shape."""
        return raw_data

    @app.get("/api/tree")
    async def get_tree():
        """The current annotated tree."""
        return editor.tree.to_dict()

    @app.post("/api/actions", response_model=ActionResponse)
    async def post_action(request: ActionRequest) -> ActionResponse:
        """Apply one action to the current tree."""
        # unset keys stay absent so an update without a value is rejected
        payload = request.model_dump(exclude_unset=True)
        try:
            action = action_from_dict(payload)
        except ActionError as e:
            raise HTTPException(status_code=422, detail=str(e))

        try:
            result = editor.dispatch(action)
        except PathError as e:
            logger.warning("Rejected action %r: %s", action, e)
            raise HTTPException(status_code=400, detail=str(e))

        notification = None
        if result.notification is not None:
            notification = NotificationOut(**result.notification.to_dict())

        return ActionResponse(
            applied=result.applied,
            tree=result.tree.to_dict(),
            notification=notification,
        )

    @app.get("/api/notifications", response_model=NotificationsOutput)
    async def get_notifications() -> NotificationsOutput:
        """Notifications still showing."""
        return NotificationsOutput(
            notifications=[
                NotificationOut(**n.to_dict()) for n in editor.notifications.active()
            ]
        )

    @app.delete("/api/notifications/{notification_id}", status_code=204)
    async def dismiss_notification(notification_id: str) -> Response:
        """Dismiss a notification before it expires."""
        if not editor.notifications.dismiss(notification_id):
            raise HTTPException(status_code=404, detail="Notification not found")
        return Response(status_code=204)

    @app.get("/api/render")
    async def render_current(
        format: str = Query("ascii", description="Output format: ascii or json"),
        depth: Optional[int] = Query(None, ge=0, description="Maximum depth"),
    ):
        """Render the current tree as text or JSON."""
        try:
            fmt = OutputFormat(format)
        except ValueError:
            raise HTTPException(status_code=422, detail=f"Unknown format '{format}'")

        output = render_tree(
            editor.tree,
            format=fmt,
            depth=depth,
            precision=config.display.precision,
            width=config.display.width,
            icons=config.display.icons,
        )

        if fmt == OutputFormat.JSON:
            return JSONResponse(content=json.loads(output))
        return PlainTextResponse(content=output)

    return app


def run_server(config: Optional[SplindeConfig] = None) -> None:
    """Start the editor server with uvicorn."""
    import uvicorn

    if config is None:
        config = SplindeConfig()

    app = create_app(config)

    console.print(f"[green]SPLINDE:[/green] http://{config.server.host}:{config.server.port}")
    console.print(f"  Data: {config.data.path or 'demo report'}")
    console.print("\n[dim]Press Ctrl+C to stop[/dim]")

    uvicorn.run(app, host=config.server.host, port=config.server.port, log_level="warning")
