from pydantic import BaseModel, Field
from typing import Optional

class GenerateRequest(BaseModel):
    prompt: Optional[str] = Field(None, description="The input user prompt")

class GenerateResponse(BaseModel):
    response: str = Field(..., description="Reasoning and content blocks, in that order")

class ErrorDetail(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    error: ErrorDetail

    @classmethod
    def from_message(cls, message: str) -> "ErrorResponse":
        return cls(error=ErrorDetail(message=message))
