"""
TurtleWatch Backend - User Schemas
===================================

What:  Request bodies for registration/login and the public user record.
       `UserPublic` has no password field at all, so a hash can never be
       serialized into a response.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = Field(default=None, description="Defaults to 'volunteer'")


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    role: str
    is_email_verified: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserEnvelope(BaseModel):
    message: str
    user: UserPublic


class UserListEnvelope(BaseModel):
    message: str
    users: List[UserPublic]
