from typing import List, Optional

from pydantic import BaseModel, Field


class WaitlistJoinRequest(BaseModel):
    # Optional so a missing email is reported as MISSING_FIELDS, not a 422
    email: Optional[str] = None


class WaitlistStatsResponse(BaseModel):
    success: bool = True
    count: int = Field(..., ge=0, description="Number of people on the waitlist")
    initials: List[str] = Field(
        default_factory=list,
        description="Initials of the most recent signups, newest first",
    )
