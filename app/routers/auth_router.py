from typing import Optional
from fastapi import APIRouter, Depends, status

from app.core.auth import AuthError, AuthProvider, AuthUser, get_auth_provider, get_current_user, get_token
from app.schemas.auth_schema import LoginIn, TokenOut, UserOut

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, provider: AuthProvider = Depends(get_auth_provider)):
    session = provider.sign_in(payload.email, payload.password)
    return {
        "access_token": session.access_token,
        "token_type": session.token_type,
        "user": vars(session.user),
    }


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    token: Optional[str] = Depends(get_token),
    provider: AuthProvider = Depends(get_auth_provider),
):
    if not token:
        raise AuthError("Not authenticated")
    provider.sign_out(token)
    return


@router.get("/me", response_model=UserOut)
def me(user: AuthUser = Depends(get_current_user)):
    return vars(user)
