
from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON, ForeignKey
from design_agent.db.session import Base

class Design(Base):
    __tablename__ = "designs"
    id = Column(String(32), primary_key=True)
    project_id = Column(String(32), ForeignKey("projects.id"), nullable=False, index=True)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    base_reference_image = Column(String(1024), nullable=True)
    content = Column(JSON, nullable=False, default=dict)
    generated_images = Column(JSON, nullable=False, default=list)
    current_version = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=False)
