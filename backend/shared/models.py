"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Principal(BaseModel):
    """
    Verified caller identity attached to a request.

    Built per request by the session guard, either from a credential
    record or, for demo tokens, synthesized from the token itself.
    Never persisted.
    """

    id: str = Field(..., description="Principal ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    is_demo: bool = Field(default=False, description="Synthetic demo identity")
    created_at: Optional[datetime] = Field(None, description="Account creation time")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
