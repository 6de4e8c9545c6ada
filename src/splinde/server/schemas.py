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

"""Pydantic schemas for the editor API."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel


class ActionRequest(BaseModel):
    type: Literal["update", "add-entry", "add-section", "remove-node"]
    path: List[int]
    field: Optional[Literal["name", "value", "note", "sum"]] = None
    value: Any = None


class NotificationOut(BaseModel):
    id: str
    message: str
    severity: Literal["success", "info", "error"]
    duration_ms: int


class ActionResponse(BaseModel):
    applied: bool
    tree: Dict[str, Any]
    notification: Optional[NotificationOut] = None


class NotificationsOutput(BaseModel):
    notifications: List[NotificationOut]


class StatusOutput(BaseModel):
    status: Literal["ok"]
    version: str
    name: str
    total: float
    node_count: int
    generated_at: str
