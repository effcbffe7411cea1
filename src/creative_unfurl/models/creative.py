"""Creative identifiers and the metadata returned by the studio."""

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator


class CreativeIds(BaseModel):
    """Creativeset and creative ids parsed from a shared studio link."""

    model_config = ConfigDict(frozen=True)

    creativeset_id: NonNegativeInt
    creative_id: NonNegativeInt


class CreativeSize(BaseModel):
    """Pixel dimensions of a creative."""

    width: int | float | None = None
    height: int | float | None = None


class CreativeMetadata(BaseModel):
    """Creative metadata from the studio's ``creative-metadata`` endpoint.

    Every field is optional: a missing key renders as blank or zero in the
    unfurl instead of failing the whole preview.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    brand: str = ""
    creativeset: str = ""  # Creativeset name
    size: CreativeSize | None = None
    version: str = ""
    elements: int | list | None = None  # Count or list of element descriptors
    duration: float | None = None
    preload_image: str = Field(default="", alias="preloadImage")

    @field_validator("brand", "creativeset", "version", "preload_image", mode="before")
    @classmethod
    def _null_as_blank(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def element_count(self) -> int:
        """Number of elements whether the studio sent a count or a list."""
        if isinstance(self.elements, list):
            return len(self.elements)
        return self.elements or 0
