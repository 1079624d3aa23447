from pydantic import BaseModel, Field
from typing import Literal, Optional

class CrossReferenceCreate(BaseModel):
    source: str = Field(..., min_length=1, max_length=100)
    target: str = Field(..., min_length=1, max_length=100)
    type: Literal['direct', 'parallel', 'topical']
    description: Optional[str] = Field(None, max_length=500)
