
from datetime import datetime
from pydantic import Field
from design_agent.schemas.base import CamelModel

class TrainingDataOut(CamelModel):
    id: str = Field(alias="_id")
    uploaded_by: str
    image_path: str
    design_type: str | None = None
    tags: list[str]
    description: str | None = ""
    is_processed: bool
    created_at: datetime
    updated_at: datetime

class TrainingUploadOut(CamelModel):
    message: str
    training_data: TrainingDataOut
