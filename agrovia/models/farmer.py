"""Farmer data model."""

from pydantic import BaseModel, ConfigDict, Field


class Farmer(BaseModel):
    """
    A farmer delivering produce batches.

    Attributes:
        farmer_id: Internal identifier (e.g. "F001")
        farmer_code: Printed registration code (e.g. "FRM-A1X")
        name: Display name
    """
    model_config = ConfigDict(frozen=True)

    farmer_id: str = Field(..., description="Farmer identifier")
    farmer_code: str = Field(..., description="Farmer registration code")
    name: str = Field(..., description="Farmer name")

    def __str__(self) -> str:
        """String representation."""
        return f"{self.name} [{self.farmer_code}]"
