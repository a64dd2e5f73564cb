
from fastapi import APIRouter, Depends, status
from design_agent.auth.deps import get_store, get_current_principal
from design_agent.db.store import DocumentStore
from design_agent.schemas.project import ProjectCreate, ProjectOut
from design_agent.utils.security import Principal

router = APIRouter(prefix="/api/projects", tags=["projects"])

@router.get("", response_model=list[ProjectOut])
def list_projects(principal: Principal = Depends(get_current_principal), store: DocumentStore = Depends(get_store)):
    return store.query("projects", {"user_id": principal.user_id}, order_by="created_at")

@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate,
    principal: Principal = Depends(get_current_principal),
    store: DocumentStore = Depends(get_store),
):
    project_id = store.insert("projects", {
        "name": body.name,
        "description": body.description,
        "user_id": principal.user_id,
        "brand_elements": body.brand_elements.model_dump(by_alias=True, exclude_none=True),
        "design_type": body.design_type.value,
    })
    return store.get("projects", project_id)
