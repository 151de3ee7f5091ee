"""Session authentication backed by an external identity provider.

The provider itself (an OIDC login flow, an authenticating reverse proxy)
is outside this application. It only has to tell us who the caller is;
we then upsert the user and remember their claims in a signed session
cookie.
"""

from dataclasses import asdict, dataclass
from typing import Protocol, runtime_checkable

from fastapi import HTTPException, Request, status

from ..config import Settings
from ..models.user import User

SESSION_KEY = "claims"


@dataclass
class Claims:
    """Identity asserted by the provider."""

    sub: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None

    def to_user(self) -> User:
        return User(
            id=self.sub,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            profile_image_url=self.profile_image_url,
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Claims":
        return cls(
            sub=data["sub"],
            email=data.get("email"),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            profile_image_url=data.get("profile_image_url"),
        )


@runtime_checkable
class IdentityProvider(Protocol):
    """Resolves the caller's identity for a login request."""

    def authenticate(self, request: Request) -> Claims | None:
        """Return the caller's claims, or None when unauthenticated."""
        ...


class ProxyHeaderIdentityProvider:
    """Trusts identity headers injected by an authenticating reverse proxy.

    Only safe when the app is reachable exclusively through that proxy.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def authenticate(self, request: Request) -> Claims | None:
        headers = request.headers
        sub = headers.get(self.settings.auth_user_header)
        if not sub:
            return None
        return Claims(
            sub=sub,
            email=headers.get(self.settings.auth_email_header),
            first_name=headers.get(self.settings.auth_first_name_header),
            last_name=headers.get(self.settings.auth_last_name_header),
            profile_image_url=headers.get(self.settings.auth_picture_header),
        )


def login_session(request: Request, claims: Claims) -> None:
    """Store claims in the session."""
    request.session[SESSION_KEY] = claims.to_dict()


def logout_session(request: Request) -> None:
    """Forget the session's claims."""
    request.session.pop(SESSION_KEY, None)


def current_claims(request: Request) -> Claims:
    """FastAPI dependency: the authenticated caller, or 401."""
    data = request.session.get(SESSION_KEY)
    if not data or not data.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return Claims.from_dict(data)
