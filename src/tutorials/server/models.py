"""Pydantic request/response models for the Tutorials server."""

from __future__ import annotations

from typing import Optional

try:
    from pydantic import BaseModel, ConfigDict, Field
except ImportError:
    raise ImportError("Pydantic is required. Install with: pip install tutorials[server]")

from tutorials.types import Tutorial


class TutorialRequest(BaseModel):
    """Request body for POST /api/tutorials and PUT /api/tutorials/{id}.

    ``id`` is accepted for compatibility with clients that send whole records
    but is never used: new IDs come from the store and updates use the path.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Example of title",
                "description": "Example of description",
                "published": False,
            }
        }
    )

    id: Optional[int] = Field(default=None, description="Ignored")
    title: Optional[str] = Field(default=None, description="Title of tutorial")
    description: Optional[str] = Field(default=None, description="Description of tutorial")
    published: Optional[bool] = Field(
        default=False, description="Boolean value of publishing; null reads as false"
    )


class TutorialResponse(BaseModel):
    """Data model of Tutorial."""

    id: int = Field(..., description="Unique number", examples=[20])
    title: Optional[str] = Field(default=None, description="Title of tutorial", examples=["Example of title"])
    description: Optional[str] = Field(
        default=None, description="Description of tutorial", examples=["Example of description"]
    )
    published: bool = Field(default=False, description="Boolean value of publishing", examples=[False])

    @classmethod
    def from_tutorial(cls, tutorial: Tutorial) -> TutorialResponse:
        return cls(
            id=tutorial.id,
            title=tutorial.title,
            description=tutorial.description,
            published=tutorial.published,
        )


class ErrorResponse(BaseModel):
    """Error body returned by the global exception handlers."""

    error: str
    message: str
    request_id: Optional[str] = None
