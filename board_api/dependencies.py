"""FastAPI dependencies: services wired to settings, and the bearer-token guard."""

from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import BackgroundTasks, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from board_api.config import get_settings
from board_api.database import get_session
from board_api.errors import AuthenticationRequired
from board_api.notifications import Notifier, build_notifier
from board_api.security import Identity, PasswordHasher, TokenIssuer
from board_api.services import AuthService, BoardService

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().password_hash_rounds)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    settings = get_settings()
    return TokenIssuer(
        settings.secret_key,
        algorithm=settings.token_algorithm,
        expires_in=timedelta(days=settings.token_expire_days),
    )


@lru_cache
def get_notifier() -> Notifier:
    return build_notifier(get_settings())


def get_auth_service(
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
    notifier: Notifier = Depends(get_notifier),
) -> AuthService:
    return AuthService(session, hasher, tokens, notifier, background_tasks)


def get_board_service(session: Session = Depends(get_session)) -> BoardService:
    return BoardService(session)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> Identity:
    """Resolve the caller from the bearer token or fail with 401."""
    identity = tokens.verify(credentials.credentials) if credentials else None
    if identity is None:
        raise AuthenticationRequired()
    return identity
