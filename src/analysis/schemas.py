from enum import Enum
from pydantic import BaseModel, Field


class AnalysisType(str, Enum):
    VCS = "vcs"
    ONESHOT = "oneshot"


class CreateAnalysisRequest(BaseModel):
    link: str = Field(min_length=1)
    type: AnalysisType = AnalysisType.VCS


class AnalysisResponse(BaseModel):
    result: str
