
from datetime import datetime
from enum import Enum
from pydantic import Field
from design_agent.schemas.base import CamelModel, CamelIn

class DesignType(str, Enum):
    SOCIAL_MEDIA = "social_media"
    PRINT = "print"
    THUMBNAIL = "thumbnail"
    LOGO = "logo"

class BrandElements(CamelIn):
    color_palette: list[str] = Field(default_factory=list)
    fonts: list[str] = Field(default_factory=list)
    logo: str | None = None
    brand_guidelines: str | None = None

class ProjectCreate(CamelIn):
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    brand_elements: BrandElements = Field(default_factory=BrandElements)
    design_type: DesignType

class ProjectOut(CamelModel):
    id: str = Field(alias="_id")
    name: str
    description: str | None = ""
    user_id: str
    brand_elements: BrandElements
    design_type: DesignType
    created_at: datetime
    updated_at: datetime
