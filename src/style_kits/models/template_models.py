"""
Template catalog models.

Wire format of the remote catalog endpoint:

    {"templates": [...], "count": 12, "timestamp": 1588291200}

Templates are immutable once fetched; identity is the ``id`` field.
"""

import math
import re
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

TemplateId = Union[int, str]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Template(BaseModel):
    """A single design template in the library."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: TemplateId = Field(..., description="Template identifier")
    title: str = Field(..., description="Display title")
    type: str = Field(default="", description="Category tag (e.g. 'page', 'block')")
    tags: Tuple[str, ...] = Field(default=(), description="Free-form search tags")
    popularity_index: Optional[int] = Field(
        default=None,
        alias="popularityIndex",
        description="Popularity rank; higher is more popular",
    )
    timestamp: Optional[int] = Field(
        default=None, description="Unix time the template was published or updated"
    )
    thumbnail: Optional[str] = Field(default=None, description="Preview image URL")
    url: Optional[str] = Field(default=None, description="Live preview URL")
    is_pro: bool = Field(default=False, description="Requires a Style Kits Pro license")

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            return tuple(str(tag) for tag in value if tag is not None)
        return (str(value),)

    @field_validator("popularity_index", mode="before")
    @classmethod
    def _coerce_popularity(cls, value: Any) -> Optional[int]:
        """
        Read the leading integer the way the library has always ranked templates.

        ``"12abc"`` is 12, ``4.5`` is 4; anything without leading digits counts
        as missing.
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if math.isfinite(value) else None
        if isinstance(value, str):
            match = _LEADING_INT.match(value)
            return int(match.group(1)) if match else None
        return None

    @property
    def key(self) -> str:
        """Identity used for favorites lookups."""
        return str(self.id)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against the title or any tag."""
        needle = query.lower()
        if needle in self.title.lower():
            return True
        return any(needle in tag.lower() for tag in self.tags)


class TemplateCatalog(BaseModel):
    """Envelope returned by the catalog endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    templates: List[Template] = Field(default_factory=list)
    count: Optional[int] = Field(default=None, description="Number of templates")
    timestamp: Optional[int] = Field(
        default=None, description="Unix time the catalog was fetched upstream"
    )


class FavoriteRequest(BaseModel):
    """Request body for marking or unmarking a favorite."""

    template_id: TemplateId = Field(..., description="Template to mark")
    favorite: bool = Field(default=True, description="False removes the favorite")


class FavoritesResponse(BaseModel):
    """Current favorite template ids."""

    favorites: List[str] = Field(default_factory=list)


class FavoriteUpdateResponse(FavoritesResponse):
    """Result of a mark-favorite call."""

    template_id: str
    action: str = Field(..., description="'added' or 'removed'")
