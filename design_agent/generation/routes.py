
from fastapi import APIRouter, Depends
from design_agent.auth.deps import get_generation
from design_agent.generation.providers import GenerationService
from design_agent.schemas.generation import ProviderOut

router = APIRouter(prefix="/api/ai", tags=["ai"])

@router.get("/providers", response_model=list[ProviderOut])
def list_providers(generation: GenerationService = Depends(get_generation)):
    return generation.providers()
