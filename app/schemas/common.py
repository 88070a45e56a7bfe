from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    code: str = Field(..., description="Error code identifier (e.g. VALIDATION_ERROR, NOT_FOUND)")
    message: str = Field(..., description="Human readable error message")
    detail: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Extra diagnostics (optional)",
    )
