"""FilterResponse Pydantic model."""

from pydantic import BaseModel


class FilterResponse(BaseModel):
    """Response body for the POST /filter endpoint."""

    html: str
    removed: int = 0
