import time
import uuid
from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile
from design_agent.auth.deps import get_store, get_settings, require_role
from design_agent.config import Settings
from design_agent.db.store import DocumentStore
from design_agent.errors import ValidationError, PayloadTooLargeError
from design_agent.schemas.training import TrainingUploadOut
from design_agent.uploads.images import process_and_store
from design_agent.utils.security import Principal, Role

router = APIRouter(prefix="/api/admin", tags=["admin"])

UPLOAD_FORM_SCHEMA = {
    "requestBody": {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "image": {"type": "string", "format": "binary"},
                        "designType": {"type": "string"},
                        "tags": {"type": "string", "description": "comma separated"},
                        "description": {"type": "string"},
                    },
                    "required": ["image"],
                }
            }
        },
        "required": True,
    }
}

def _split_tags(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]

def _text_field(form: FormData, name: str) -> str | None:
    value = form.get(name)
    if value is None or isinstance(value, str):
        return value
    raise ValidationError(f"{name} must be a text field")

# the form is read inside the handler so the role check runs before any body parsing
@router.post(
    "/training-data",
    response_model=TrainingUploadOut,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=UPLOAD_FORM_SCHEMA,
)
async def upload_training_data(
    request: Request,
    principal: Principal = Depends(require_role(Role.SUPER_ADMIN)),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    async with request.form() as form:
        image = form.get("image")
        if not isinstance(image, UploadFile) or not image.filename:
            raise ValidationError("No image uploaded")
        design_type = _text_field(form, "designType")
        tags = _text_field(form, "tags")
        description = _text_field(form, "description")
        data = await image.read()

    if not data:
        raise ValidationError("No image uploaded")
    if len(data) > settings.max_file_size:
        raise PayloadTooLargeError(f"{image.filename} is larger than {settings.max_file_size} bytes")

    filename = f"training_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}.jpg"
    image_path = await run_in_threadpool(process_and_store, data, filename, "training", settings.upload_path)

    doc_id = await run_in_threadpool(store.insert, "trainingData", {
        "uploaded_by": principal.user_id,
        "image_path": image_path,
        "design_type": design_type,
        "tags": _split_tags(tags),
        "description": description or "",
        "is_processed": False,
    })
    record = await run_in_threadpool(store.get, "trainingData", doc_id)
    return {"message": "Training data uploaded successfully", "training_data": record}
