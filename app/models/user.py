"""ORM model for user accounts."""

from sqlalchemy import Boolean, Column, Integer, String, false

from app.models.base import Base


class User(Base):
    """
    User account for bearer-token authentication.

    email is the login identifier and is unique; password_hash is always a
    bcrypt hash. is_admin grants mutation rights over other accounts.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(20), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())
