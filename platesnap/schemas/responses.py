
from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr

Grams = Union[
    Annotated[StrictInt, Field(ge=0)],
    Annotated[StrictFloat, Field(ge=0, allow_inf_nan=False)],
]

class FoodItem(BaseModel):
    name: StrictStr
    estimatedGrams: Optional[Grams]

class AnalysisResult(BaseModel):
    items: List[FoodItem]

class AnalyzeRequest(BaseModel):
    imageUrl: str

class UploadResponse(BaseModel):
    imageUrl: str
    url: str   # imageUrl 과 동일 (호환용 alias)

class ErrorResponse(BaseModel):
    error: str
