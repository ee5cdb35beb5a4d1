from sqlalchemy import Column, String, Boolean, Integer, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.session import Base
from app.models.base import BaseModel

class User(BaseModel):
    """Auth identity. The profile row shares its id."""
    __tablename__ = "users"
    
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    # Role chosen at sign-up, kept so a missing profile can be recreated
    signup_role = Column(String(20))
    is_active = Column(Boolean, default=True)

    profile = relationship("Profile", uselist=False, back_populates="user")


class AuthSession(Base):
    __tablename__ = "auth_sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    revoked_at = Column(TIMESTAMP)

    user = relationship("User")
