"""
Dataset Records - Pydantic models for the on-disk dataset shape.

Discrete-mode record:
    {"id": "ada", "name": "Ada", "image": "...",
     "facts": [{"description": "WROTE THE FIRST PROGRAM", "category": "SCIENCE",
                "quantity": 1, "image": "..."}]}

Numeric-mode record:
    {"id": "everest", "name": "Everest",
     "properties": {"HEIGHT": 8849},
     "propertyImages": {"HEIGHT": "..."}}

A document is {"picks": [...], "propertyCategories": {"HEIGHT": {"image": "..."}}}.
Both snake_case and camelCase keys are accepted.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..engine_core.entities import Fact, Pick


class FactRecord(BaseModel):
    """One fact attached to a pick."""
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    quantity: Optional[float] = None
    image: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("description", "category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_fact(self) -> Fact:
        return Fact(
            description=self.description,
            category=self.category,
            quantity=self.quantity,
            image=self.image,
        )


class PickRecord(BaseModel):
    """One pick in either discrete or numeric shape."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    image: Optional[str] = None
    description: Optional[str] = None
    facts: Optional[list[FactRecord]] = None
    properties: Optional[dict[str, float]] = None
    property_images: Optional[dict[str, str]] = Field(None, alias="propertyImages")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # SQLite and hand-written JSON often use integer ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_pick(self) -> Pick:
        return Pick(
            id=self.id,
            name=self.name,
            image=self.image,
            description=self.description,
            facts=tuple(f.to_fact() for f in self.facts or ()),
            properties=dict(self.properties or {}),
            property_images=dict(self.property_images or {}),
        )


class DatasetDocument(BaseModel):
    """A complete dataset."""
    picks: list[PickRecord] = Field(..., min_length=1)
    property_categories: dict[str, Union[str, dict[str, Any]]] = Field(
        default_factory=dict, alias="propertyCategories"
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def category_images(self) -> dict[str, str]:
        """Property category name -> image, dropping categories without one."""
        images = {}
        for name, value in self.property_categories.items():
            image = value.get("image") if isinstance(value, dict) else value
            if image:
                images[name] = image
        return images
