"""Greeting endpoints for checking authentication and roles."""

from fastapi import APIRouter

from src.pipeline_api.api.dependencies import AdminPrincipal, UserPrincipal
from src.pipeline_api.schemas.hello import HelloResponse

router = APIRouter(prefix="/hello", tags=["hello"])


@router.get("", response_model=HelloResponse, summary="Public hello")
async def public_hello() -> HelloResponse:
    return HelloResponse(message="Hello, World! This is a public endpoint.")


@router.get("/user", response_model=HelloResponse, summary="User hello")
async def user_hello(principal: UserPrincipal) -> HelloResponse:
    return HelloResponse(message=f"Hello, {principal.username}! You have USER role.")


@router.get("/admin", response_model=HelloResponse, summary="Admin hello")
async def admin_hello(principal: AdminPrincipal) -> HelloResponse:
    return HelloResponse(message=f"Hello, {principal.username}! You have ADMIN role.")
