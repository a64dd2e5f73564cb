
from design_agent.schemas.base import CamelModel

class ProviderOut(CamelModel):
    name: str
    available: bool

class HealthOut(CamelModel):
    message: str
    database: str
    ai_providers: list[str]
    status: str
