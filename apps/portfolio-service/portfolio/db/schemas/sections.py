from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ContentTypeEnum(str, Enum):
    text = "text"
    image = "image"


class SectionBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    type: str = Field(min_length=1, max_length=50)


class SectionCreate(SectionBase):
    portfolio_id: int
    position: Optional[int] = Field(default=None, ge=0)


class SectionUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    position: Optional[int] = Field(default=None, ge=0)


class Section(SectionBase):
    id: int
    position: int
    portfolio_id: int
    owner_id: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class SectionContentBase(BaseModel):
    type: ContentTypeEnum = ContentTypeEnum.text
    content: str = Field(min_length=1)


class SectionContentCreate(SectionContentBase):
    section_id: int
    order: Optional[int] = Field(default=None, ge=0)
    metadata: Optional[Dict[str, Any]] = None


class SectionContentUpdate(BaseModel):
    type: Optional[ContentTypeEnum] = None
    content: Optional[str] = Field(default=None, min_length=1)
    order: Optional[int] = Field(default=None, ge=0)
    metadata: Optional[Dict[str, Any]] = None


class SectionContentOrderUpdate(BaseModel):
    order: int = Field(ge=0)


class SectionContentReorderItem(BaseModel):
    id: int
    order: int = Field(ge=0)


class SectionContent(SectionContentBase):
    id: int
    section_id: int
    order: int
    # ORM attribute is `metadata_json`; emitted as `metadata`
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("metadata_json", "metadata")
    )
    owner_id: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class SectionWithContents(Section):
    contents: List[SectionContent] = []
