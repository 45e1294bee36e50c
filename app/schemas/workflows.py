"""Workflow template schemas."""

from pydantic import BaseModel, Field


class WorkflowTemplate(BaseModel):
    """Reusable clinical workflow with a usage counter."""

    id: int
    name: str = Field(..., max_length=200)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    steps: int = Field(default=0, ge=0)
    checklist_items: int = Field(default=0, ge=0)
    usage_count: int = Field(default=0, ge=0)
    is_active: bool = True
