
from fastapi import APIRouter, Depends, status
from design_agent.auth.deps import get_store, get_credentials, get_current_principal
from design_agent.auth.service import register_user, login_user, get_user, public_user
from design_agent.db.store import DocumentStore
from design_agent.schemas.auth import RegisterIn, LoginIn, AuthOut, UserOut
from design_agent.utils.security import CredentialService, Principal

router = APIRouter(prefix="/api/auth", tags=["auth"])

def _auth_response(message: str, user: dict, credentials: CredentialService) -> AuthOut:
    token = credentials.issue(user["id"], user["role"])
    return AuthOut(message=message, token=token, user=UserOut.model_validate(public_user(user)))

@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterIn,
    store: DocumentStore = Depends(get_store),
    credentials: CredentialService = Depends(get_credentials),
):
    user = register_user(store, body.email, body.password, body.first_name, body.last_name)
    return _auth_response("User created successfully", user, credentials)

@router.post("/login", response_model=AuthOut)
def login(
    body: LoginIn,
    store: DocumentStore = Depends(get_store),
    credentials: CredentialService = Depends(get_credentials),
):
    user = login_user(store, body.email, body.password)
    return _auth_response("Login successful", user, credentials)

@router.get("/me", response_model=UserOut)
def me(principal: Principal = Depends(get_current_principal), store: DocumentStore = Depends(get_store)):
    return public_user(get_user(store, principal.user_id))
