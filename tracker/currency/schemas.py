"""Currency schemas."""

from pydantic import BaseModel, ConfigDict


class Currency(BaseModel):
    """Schema for a supported currency."""
    model_config = ConfigDict(from_attributes=True)

    code: str
    symbol: str
    name: str
    country: str
