
from sqlalchemy import Column, String, Text, DateTime, JSON, ForeignKey
from design_agent.db.session import Base

class Project(Base):
    __tablename__ = "projects"
    id = Column(String(32), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, default="")
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    brand_elements = Column(JSON, nullable=False, default=dict)
    design_type = Column(String(32), nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=False)
