"""AI design generation.

Prompts are sent to the image-generation edge function deployed alongside
the Supabase project.  A generated image the architect wants to keep is
downloaded, re-uploaded to the ``ai_designs`` bucket and published as a
regular post in their portfolio.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any
from uuid import UUID

import httpx

from archconnect.core.config import settings
from archconnect.core.constants import (
    AI_DESIGN_TAGS,
    AI_DESIGN_TYPE,
    AI_IMAGE_EXTENSION,
    AI_TITLE_MAX_LENGTH,
)
from archconnect.core.exceptions import DataAccessError, DesignGenerationError, ValidationError
from archconnect.db.storage import upload_public_file
from archconnect.db.supabase import get_supabase
from archconnect.models.post import Post
from archconnect.services.posts import insert_post

logger = logging.getLogger(__name__)


def _require_prompt(prompt: str) -> str:
    cleaned = (prompt or "").strip()
    if not cleaned:
        raise ValidationError("Please enter a design description to generate an image.")
    return cleaned


def title_from_prompt(prompt: str) -> str:
    """First ``AI_TITLE_MAX_LENGTH`` characters of *prompt*, ``...`` when cut."""
    if len(prompt) > AI_TITLE_MAX_LENGTH:
        return prompt[:AI_TITLE_MAX_LENGTH] + "..."
    return prompt


def _first_output_url(payload: Any) -> str | None:
    if isinstance(payload, (bytes, str)):
        try:
            payload = json.loads(payload)
        except ValueError:
            return None
    if not isinstance(payload, dict):
        return None
    output = payload.get("output")
    if isinstance(output, list) and output and isinstance(output[0], str):
        return output[0]
    return None


def generate_design(prompt: str) -> str:
    """Generate an image for *prompt* and return its URL.

    Raises ``ValidationError`` for a blank prompt and
    ``DesignGenerationError`` when the function fails or returns no image.
    """
    cleaned = _require_prompt(prompt)

    try:
        payload = get_supabase().functions.invoke(
            settings.AI_DESIGN_FUNCTION,
            invoke_options={"body": {"prompt": cleaned}, "responseType": "json"},
        )
    except Exception as exc:
        logger.error(
            "design_generation_failed",
            extra={"function": settings.AI_DESIGN_FUNCTION, "error_message": str(exc)},
        )
        raise DesignGenerationError(str(exc) or "Failed to generate image") from exc

    image_url = _first_output_url(payload)
    if image_url is None:
        logger.warning(
            "design_generation_empty",
            extra={"function": settings.AI_DESIGN_FUNCTION},
        )
        raise DesignGenerationError()

    logger.info("design_generated", extra={"prompt_length": len(cleaned)})
    return image_url


async def _download_image(image_url: str) -> bytes:
    try:
        async with httpx.AsyncClient(
            timeout=settings.IMAGE_FETCH_TIMEOUT_SECONDS,
            follow_redirects=True,
        ) as client:
            response = await client.get(image_url)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.error(
            "design_download_failed",
            extra={"image_url": image_url, "error_message": str(exc)},
        )
        raise DataAccessError("download the generated design", str(exc)) from exc
    return response.content


async def save_generated_design(owner_id: str | UUID, prompt: str, image_url: str) -> Post:
    """Store a generated image in the owner's portfolio and return the new post.

    The post is titled from the prompt, tagged as AI-generated and marked
    available for hire.
    """
    cleaned = _require_prompt(prompt)
    if not image_url:
        raise ValidationError("No image generated yet.")

    content = await _download_image(image_url)
    file_name = f"{owner_id}_{int(time.time() * 1000)}.{AI_IMAGE_EXTENSION}"
    public_url = upload_public_file(
        settings.AI_DESIGNS_BUCKET,
        file_name,
        content,
        f"image/{AI_IMAGE_EXTENSION}",
    )

    return insert_post(
        owner_id,
        title=title_from_prompt(cleaned),
        image_url=public_url,
        description=cleaned,
        design_type=AI_DESIGN_TYPE,
        tags=list(AI_DESIGN_TAGS),
        hire_me=True,
    )
