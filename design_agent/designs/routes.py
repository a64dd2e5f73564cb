
from fastapi import APIRouter, Depends, status
from design_agent.auth.deps import get_store, get_current_principal, get_generation, get_settings
from design_agent.config import Settings
from design_agent.db.store import DocumentStore
from design_agent.designs.service import create_design, generate_versions
from design_agent.generation.providers import GenerationService
from design_agent.schemas.design import DesignCreate, DesignOut, GenerateIn, GenerateOut
from design_agent.utils.security import Principal

router = APIRouter(prefix="/api/designs", tags=["designs"])

@router.get("/project/{project_id}", response_model=list[DesignOut])
def list_designs(
    project_id: str,
    principal: Principal = Depends(get_current_principal),
    store: DocumentStore = Depends(get_store),
):
    return store.query(
        "designs",
        {"project_id": project_id, "user_id": principal.user_id},
        order_by="created_at",
    )

@router.post("", response_model=DesignOut, status_code=status.HTTP_201_CREATED)
def create(
    body: DesignCreate,
    principal: Principal = Depends(get_current_principal),
    store: DocumentStore = Depends(get_store),
):
    content = body.content.model_dump(by_alias=True, exclude_none=True)
    return create_design(store, principal.user_id, body.project_id, content, body.base_reference_image)

@router.post("/{design_id}/generate", response_model=GenerateOut)
async def generate(
    design_id: str,
    body: GenerateIn | None = None,
    principal: Principal = Depends(get_current_principal),
    store: DocumentStore = Depends(get_store),
    generation: GenerationService = Depends(get_generation),
    settings: Settings = Depends(get_settings),
):
    body = body or GenerateIn()
    provider = body.provider or settings.default_ai_provider
    urls, design = await generate_versions(store, generation, design_id, principal.user_id, body.count, provider)
    return GenerateOut(
        message="New versions generated successfully",
        new_versions=urls,
        total_versions=design["current_version"],
        provider=provider,
    )
