"""
Pydantic schemas for API request/response models
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, timezone


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = "healthy"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    environment: str
    version: str


# ============================================================================
# Run Schemas
# ============================================================================

class RunRequest(BaseModel):
    """Trigger one archive run"""
    config_path: Optional[str] = Field(
        None,
        description="Configuration file to run; defaults to CONFIG_PATH"
    )


class RunResponse(BaseModel):
    """Summary of a completed archive run"""
    request_id: Optional[str] = None
    status: str = Field(..., description="success, completed_with_errors or failed")
    state: str
    dry_run: bool = False
    sets_total: int = 0
    sets_failed: int = 0
    errors: List[str] = Field(default_factory=list)
