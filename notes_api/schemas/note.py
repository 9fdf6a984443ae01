"""
Notes API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract between clients and backend.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI documentation.

Request bodies declare every field as optional. Presence and truthiness are
business rules checked by NoteService, which answers 400 with
"All fields are required". A field of the wrong JSON type (e.g. a numeric
title) fails here and is answered with the same 400 by the
RequestValidationError handler in main.py.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends in the body
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(BaseModel):
    """Body of POST /notes."""
    user: Optional[str] = Field(default=None, description="Owning user id")
    title: Optional[str] = Field(default=None, description="Note title (unique)")
    text: Optional[str] = Field(default=None, description="Note body")


class NoteUpdateRequest(BaseModel):
    """
    Body of PATCH /notes.

    `completed` is typed Any so that the service can tell a real JSON
    boolean apart from "true", 1 or null; only booleans are accepted, and
    `false` is a valid value.
    """
    id: Optional[str] = Field(default=None, description="Id of the note to update")
    user: Optional[str] = Field(default=None, description="Owning user id")
    title: Optional[str] = Field(default=None, description="New title")
    text: Optional[str] = Field(default=None, description="New body")
    completed: Optional[Any] = Field(default=None, description="Completion flag (boolean)")


class NoteDeleteRequest(BaseModel):
    """Body of DELETE /notes."""
    id: Optional[str] = Field(default=None, description="Id of the note to delete")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteWithUsername(BaseModel):
    """
    A stored note with its owner's username attached.

    `username` is null when the owning user no longer exists.
    """
    id: str = Field(description="Note identifier")
    user: str = Field(description="Owning user id")
    title: str
    text: str
    completed: bool
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last modification timestamp (UTC)")
    username: Optional[str] = Field(default=None, description="Owner's username")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Success body of POST and PATCH /notes."""
    message: str = Field(description="Human-readable result message")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "Duplicate note title",
            "details": {"field": "title"},
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
