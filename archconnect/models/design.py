"""Request / response models for AI design generation."""

from pydantic import BaseModel


class GenerateDesignRequest(BaseModel):
    prompt: str


class GenerateDesignResponse(BaseModel):
    prompt: str
    image_url: str


class SaveDesignRequest(BaseModel):
    """Persist a previously generated image into the architect's portfolio."""
    prompt: str
    image_url: str
