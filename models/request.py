"""FilterRequest Pydantic model with strict validation (extra=forbid)."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class FilterRequest(BaseModel):
    """Incoming request body for the POST /filter endpoint.

    ``filter_attrs`` keeps the loose rule shapes (``true``, a string, a list
    of strings, or ``{"nodeName": ..., "attributes": {...}}``) and is
    coerced by ``models.matchers.compile_rules``.
    Extra fields are rejected with a 422 response.
    """

    model_config = ConfigDict(extra="forbid")

    html: str
    filter_attrs: Optional[dict[str, Any]] = None
