from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class User(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    email: str
    role: str = "customer"
    phone: Optional[str] = None
    address: Optional[Dict[str, Any]] = None

    class Config:
        populate_by_name = True
        extra = "allow"


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginResponse(BaseModel):
    token: Optional[str] = None
    user: Optional[User] = None
    requires_verification: bool = Field(default=False, alias="requiresVerification")
    email: Optional[str] = None

    class Config:
        populate_by_name = True


class RegisterResponse(LoginResponse):
    pass
