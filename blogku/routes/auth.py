"""Authentication routes for admin login, logout and creation."""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from blogku.configs import settings
from blogku.configs.settings import AUTH_COOKIE_MAX_AGE
from blogku.dependencies import AuthServiceDep, require_admin_api_key
from blogku.schemas.admin import AdminCreate, AdminLogin, AdminResponse, LoginResponse

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=LoginResponse,
    summary="Admin login",
    description="Authenticate with email (or username) and password. Sets the auth cookie.",
    responses={
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"detail": "Invalid credentials"}}},
        },
    },
    operation_id="auth_login",
)
async def login(payload: AdminLogin, response: Response, auth_service: AuthServiceDep) -> LoginResponse:
    """
    Login and receive the token both in the body and as an HTTP-only cookie.

    Parameters
    ----------
    payload : AdminLogin
        Identifier and password.
    response : Response
        Response used to set the cookie.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    LoginResponse
        Admin fields and the access token.
    """
    result = await auth_service.login(payload.email, payload.password.get_secret_value())
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=result.token,
        max_age=AUTH_COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return result


@router.post(
    "/logout",
    response_class=ORJSONResponse,
    summary="Admin logout",
    operation_id="auth_logout",
)
async def logout(response: Response) -> dict[str, str]:
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="lax",
    )
    return {"message": "Logged out successfully"}


@router.post(
    "/admin/create",
    response_class=ORJSONResponse,
    response_model=AdminResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_admin_api_key)],
    summary="Create an admin",
    description="Requires the X-API-Key header.",
    responses={
        403: {"content": {"application/json": {"example": {"detail": "Invalid API key"}}}},
        409: {"content": {"application/json": {"example": {"detail": "Username or email already exists"}}}},
    },
    operation_id="auth_admin_create",
)
async def create_admin(
    payload: AdminCreate,
    auth_service: AuthServiceDep,
) -> AdminResponse:
    return await auth_service.create_admin(payload)
