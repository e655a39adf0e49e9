"""Identity and presence models."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Identity(BaseModel):
    """Principal of the current request, as resolved by the gateway."""
    is_signed_in: bool = False
    email: Optional[str] = None
    name: Optional[str] = None
    avatar: Optional[str] = None


class OnlineUser(BaseModel):
    """A live presence session."""
    session_id: str
    user_email: str
    user_name: str
    login_time: datetime
    last_activity: datetime
    avatar: str = ""
    status: str = "Online"
