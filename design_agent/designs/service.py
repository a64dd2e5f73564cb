"""Design workflow: ownership checks and the generate-and-append step."""

import logging
from typing import Any
from fastapi.concurrency import run_in_threadpool
from design_agent.db.store import DocumentStore
from design_agent.errors import AuthorizationError, ConflictError, NotFoundError
from design_agent.generation.providers import GenerationService

logger = logging.getLogger(__name__)

MAX_APPEND_ATTEMPTS = 5


def get_owned_project(store: DocumentStore, project_id: str, user_id: str) -> dict[str, Any]:
    project = store.get("projects", project_id)
    if project is None or project["user_id"] != user_id:
        raise NotFoundError("Project not found")
    return project


def create_design(store: DocumentStore, user_id: str, project_id: str, content: dict, base_reference_image: str | None) -> dict[str, Any]:
    get_owned_project(store, project_id, user_id)
    design_id = store.insert("designs", {
        "project_id": project_id,
        "user_id": user_id,
        "content": content,
        "base_reference_image": base_reference_image,
        "generated_images": [],
        "current_version": 0,
        "is_active": True,
    })
    return store.get("designs", design_id)


def append_versions(store: DocumentStore, design: dict[str, Any], urls: list[str]) -> dict[str, Any]:
    """Append ``urls`` and advance ``current_version`` by the same amount.

    The write is conditional on the version read, so a concurrent append is
    never lost: on mismatch the design is re-read and the append retried.
    """
    for _ in range(MAX_APPEND_ATTEMPTS):
        version = design["current_version"]
        images = list(design["generated_images"]) + list(urls)
        applied = store.update(
            "designs",
            design["id"],
            {"generated_images": images, "current_version": version + len(urls)},
            expected={"current_version": version},
        )
        if applied:
            return store.get("designs", design["id"])
        logger.info("Design %s changed during generation, retrying append", design["id"])
        design = store.get("designs", design["id"])
        if design is None:
            raise NotFoundError("Design not found")
    raise ConflictError("Design was modified concurrently, try again")


async def generate_versions(
    store: DocumentStore,
    generation: GenerationService,
    design_id: str,
    user_id: str,
    count: int,
    provider: str,
) -> tuple[list[str], dict[str, Any]]:
    design = await run_in_threadpool(store.get, "designs", design_id)
    if design is None:
        raise NotFoundError("Design not found")
    if design["user_id"] != user_id:
        raise AuthorizationError("Access denied")

    project = await run_in_threadpool(store.get, "projects", design["project_id"])
    if project is None:
        raise NotFoundError("Project not found")

    urls = await generation.generate_many(project, design["content"], provider, count)
    updated = await run_in_threadpool(append_versions, store, design, urls)
    return urls, updated
