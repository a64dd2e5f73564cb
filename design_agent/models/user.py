
from sqlalchemy import Column, String, DateTime
from design_agent.db.session import Base

class User(Base):
    __tablename__ = "users"
    id = Column(String(32), primary_key=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(120), default="")
    last_name = Column(String(120), default="")
    role = Column(String(50), nullable=False, default="user")
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
