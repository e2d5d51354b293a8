from pydantic import BaseModel, Field
from typing import Any, Optional, Literal

ValueTypeLiteral = Literal["text", "number", "boolean", "json"]
CategoryLiteral = Literal["general", "financial", "sport", "sanctions", "notifications"]


class SettingPatch(BaseModel):
    key: str
    value: Any


class SettingCreate(BaseModel):
    key: str = Field(..., min_length=1, max_length=100)
    value: Any
    value_type: ValueTypeLiteral = "text"
    description: str = Field("", max_length=500)
    category: CategoryLiteral = "general"
    editable: bool = True


class SettingOut(BaseModel):
    key: str
    value: str
    value_type: str
    description: Optional[str] = None
    category: str
    editable: bool

    class Config:
        from_attributes = True


class SettingValueOut(BaseModel):
    key: str
    value: Any
