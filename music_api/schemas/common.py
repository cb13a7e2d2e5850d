# ============================================================================
# FILE: music_api/schemas/common.py
# ============================================================================
from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

DataT = TypeVar("DataT")


class APIResponse(BaseModel, Generic[DataT]):
    """Envelope shared by every endpoint"""
    success: bool = True
    message: Optional[str] = None
    data: Optional[DataT] = None


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace, keeping None as None"""
    if value is None:
        return None
    return value.strip()
