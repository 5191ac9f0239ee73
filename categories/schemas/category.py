"""Category schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class CategoryBase(BaseModel):
    name: dict[str, str]
    description: Optional[dict[str, str]] = None
    type: Optional[int] = None
    parent_id: Optional[int] = None


class CategoryCreate(CategoryBase):
    # Left empty to have it generated from the name
    slug: Optional[str] = Field(default=None, max_length=150)


class CategoryUpdate(BaseModel):
    name: Optional[dict[str, str]] = None
    description: Optional[dict[str, str]] = None
    type: Optional[int] = None
    parent_id: Optional[int] = None
    slug: Optional[str] = Field(default=None, max_length=150)


class Category(CategoryBase):
    id: int
    slug: str
    stats: Optional[dict] = None
    lft: int = 0
    rgt: int = 0

    model_config = ConfigDict(from_attributes=True)


class CategoryWithChildren(Category):
    children: list["CategoryWithChildren"] = []


class CategoryTree(BaseModel):
    items: list[CategoryWithChildren]


class SelectOption(BaseModel):
    """One entry of a rendered hierarchical select."""
    id: int | str
    label: str
