from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field
from app.schemas.base import BaseSchema, TimestampSchema

Role = Literal["producer", "consumer"]
Landing = Literal["home", "dashboard", "products", "awaiting_role"]

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role = "consumer"
    full_name: Optional[str] = None

class Profile(TimestampSchema):
    id: int
    role: Role
    full_name: Optional[str] = None

class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None

class User(BaseSchema):
    id: int
    email: EmailStr
    is_active: bool

class SessionOut(BaseModel):
    user: User
    role: Optional[Role] = None
    access_token: str
    token_type: str = "bearer"

class SessionState(BaseModel):
    """Current credential state; role is null while unresolved."""
    authenticated: bool
    user: Optional[User] = None
    role: Optional[Role] = None
    landing: Landing = "home"

class Token(BaseModel):
    access_token: str
    token_type: str

class TokenData(BaseModel):
    user_id: Optional[int] = None
    session_id: Optional[str] = None
