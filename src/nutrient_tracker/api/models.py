"""Request models for the HTTP API."""

from pydantic import BaseModel


class EstimateRequest(BaseModel):
    """Body of the estimate-nutrient-content call."""

    user_id: str | None = None
    image_base64: str | None = None
