from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from contentgen.core.config import settings
from contentgen.core.security import decode_session_token
from contentgen.errors import StorageUnavailable, Unauthorized
from contentgen.generation.llm_client import LLMClient
from contentgen.models import User, UserUpsert
from contentgen.storage import Storage

bearer_scheme = HTTPBearer(auto_error=False)


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_llm(request: Request) -> LLMClient:
    return request.app.state.llm


StorageDep = Annotated[Storage, Depends(get_storage)]
LLMDep = Annotated[LLMClient, Depends(get_llm)]
BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _session_token(request: Request, credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_user(request: Request, storage: StorageDep, credentials: BearerDep) -> User:
    token = _session_token(request, credentials)
    if not token:
        raise Unauthorized()
    session_data = decode_session_token(token)

    # First authenticated request creates the user row
    profile = session_data.model_dump(exclude={"sub"}, exclude_none=True)
    return storage.upsert_user(UserUpsert(open_id=session_data.sub, **profile))


def get_optional_user(request: Request, storage: StorageDep, credentials: BearerDep) -> User | None:
    if not _session_token(request, credentials):
        return None
    try:
        return get_current_user(request, storage, credentials)
    except (Unauthorized, StorageUnavailable):
        return None


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
