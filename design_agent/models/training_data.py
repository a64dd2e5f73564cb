
from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON, ForeignKey
from design_agent.db.session import Base

class TrainingData(Base):
    __tablename__ = "training_data"
    id = Column(String(32), primary_key=True)
    uploaded_by = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    image_path = Column(String(1024), nullable=False)
    design_type = Column(String(32), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    description = Column(Text, default="")
    is_processed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
