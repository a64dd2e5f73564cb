
from fastapi import Request, Depends
from design_agent.config import Settings
from design_agent.db.store import DocumentStore
from design_agent.errors import AuthenticationError, AuthorizationError, InvalidToken
from design_agent.generation.providers import GenerationService
from design_agent.utils.security import CredentialService, Principal, Role

# roles that satisfy each required role
GRANTS: dict[Role, frozenset[Role]] = {
    Role.USER: frozenset({Role.USER, Role.SUPER_ADMIN}),
    Role.SUPER_ADMIN: frozenset({Role.SUPER_ADMIN}),
}


def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_store(request: Request) -> DocumentStore:
    return request.app.state.store

def get_credentials(request: Request) -> CredentialService:
    return request.app.state.credentials

def get_generation(request: Request) -> GenerationService:
    return request.app.state.generation

def _get_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None

def get_current_principal(
    request: Request, credentials: CredentialService = Depends(get_credentials)
) -> Principal:
    token = _get_token(request)
    if not token:
        raise AuthenticationError("No token, authorization denied")
    try:
        return credentials.verify(token)
    except InvalidToken:
        raise AuthenticationError("Token is not valid")

def require_role(required: Role):
    allowed = GRANTS[required]

    def _check(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            raise AuthorizationError(f"Access denied. {required.value} required.")
        return principal

    return _check
