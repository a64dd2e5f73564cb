
from datetime import datetime
from pydantic import Field
from design_agent.schemas.base import CamelModel, CamelIn

class DesignContent(CamelIn):
    title: str | None = None
    copy_text: str | None = Field(None, alias="copy")
    description: str | None = None
    cta: str | None = None
    footer_content: str | None = None

class DesignCreate(CamelIn):
    project_id: str = Field(min_length=1)
    content: DesignContent = Field(default_factory=DesignContent)
    base_reference_image: str | None = None

class DesignOut(CamelModel):
    id: str = Field(alias="_id")
    project_id: str
    user_id: str
    base_reference_image: str | None = None
    content: DesignContent
    generated_images: list[str]
    current_version: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

class GenerateIn(CamelIn):
    count: int = Field(3, ge=1, le=10)
    provider: str | None = Field(None, min_length=1, max_length=32)

class GenerateOut(CamelModel):
    message: str
    new_versions: list[str]
    total_versions: int
    provider: str
