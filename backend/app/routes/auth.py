# app/routes/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.auth.identity import Identity
from app.dependencies.auth import get_auth_controller, get_current_identity
from app.schemas.auth import AuthOut, ErrorOut, LoginIn, RegisterIn
from app.schemas.user import UserOut
from app.services.auth import AuthController, AuthFailure

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

_ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    404: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


def failure_response(failure: AuthFailure) -> JSONResponse:
    return JSONResponse(status_code=failure.status_code, content=failure.to_body())


@router.post(
    "/register",
    response_model=AuthOut,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
def register(payload: RegisterIn, controller: AuthController = Depends(get_auth_controller)):
    result = controller.register(
        full_name=payload.full_name,
        email=payload.email,
        password=payload.password,
        profile_image_url=payload.profile_image_url,
    )
    if isinstance(result, AuthFailure):
        return failure_response(result)
    return result.to_body()


@router.post("/login", response_model=AuthOut, responses=_ERROR_RESPONSES)
def login(payload: LoginIn, controller: AuthController = Depends(get_auth_controller)):
    result = controller.login(email=payload.email, password=payload.password)
    if isinstance(result, AuthFailure):
        return failure_response(result)
    return result.to_body()


@router.get("/getUser", response_model=UserOut, responses=_ERROR_RESPONSES)
def get_user(
    identity: Identity = Depends(get_current_identity),
    controller: AuthController = Depends(get_auth_controller),
):
    result = controller.get_profile(identity)
    if isinstance(result, AuthFailure):
        return failure_response(result)
    return result
