"""AI design generation endpoints (architects only)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from archconnect.auth.dependencies import require_role
from archconnect.models.design import (
    GenerateDesignRequest,
    GenerateDesignResponse,
    SaveDesignRequest,
)
from archconnect.models.enums import UserRole
from archconnect.models.post import Post
from archconnect.models.user import User
from archconnect.services.designs import generate_design, save_generated_design

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate", response_model=GenerateDesignResponse)
async def generate(
    body: GenerateDesignRequest,
    user: User = Depends(require_role(UserRole.architect)),
) -> GenerateDesignResponse:
    """Generate a design image from a text prompt."""
    image_url = generate_design(body.prompt)
    return GenerateDesignResponse(prompt=body.prompt, image_url=image_url)


@router.post("/save", response_model=Post, status_code=201)
async def save(
    body: SaveDesignRequest,
    user: User = Depends(require_role(UserRole.architect)),
) -> Post:
    """Save a generated image to the caller's portfolio."""
    return await save_generated_design(user.id, body.prompt, body.image_url)
