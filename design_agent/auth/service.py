
import logging
from typing import Any
from design_agent.db.store import DocumentStore
from design_agent.errors import ValidationError, NotFoundError
from design_agent.utils.security import Role, hash_password, verify_password

logger = logging.getLogger(__name__)

def public_user(doc: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in doc.items() if k != "password_hash"}

def register_user(store: DocumentStore, email: str, password: str, first_name: str, last_name: str) -> dict[str, Any]:
    email = email.lower()
    if store.query("users", {"email": email}):
        raise ValidationError("User already exists")
    # new accounts never get more than the least-privileged role
    user_id = store.insert("users", {
        "email": email,
        "password_hash": hash_password(password),
        "first_name": first_name,
        "last_name": last_name,
        "role": Role.USER.value,
    })
    logger.info("Registered user %s", user_id)
    return store.get("users", user_id)

def login_user(store: DocumentStore, email: str, password: str) -> dict[str, Any]:
    found = store.query("users", {"email": email.lower()})
    if not found or not verify_password(password, found[0]["password_hash"]):
        raise ValidationError("Invalid credentials")
    return found[0]

def get_user(store: DocumentStore, user_id: str) -> dict[str, Any]:
    user = store.get("users", user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
