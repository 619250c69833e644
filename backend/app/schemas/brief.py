from pydantic import BaseModel, Field
from typing import Optional

class ChatRequest(BaseModel):
    userMessage: Optional[str] = Field(None, description="Question about the brief")
    brief: Optional[str] = Field(None, description="Full brief text, used when given")
    briefId: Optional[str] = Field(None, description="Job id whose brief should be used")

class ChatResponse(BaseModel):
    ok: bool = True
    answer: str

class SummarizeRequest(BaseModel):
    storagePath: Optional[str] = Field(None, description="Blob store key of an uploaded judgment")
    publicUrl: Optional[str] = Field(None, description="Publicly reachable URL of the judgment")
    prompt: Optional[str] = Field(None, description="Explicit prompt overriding the reference template")

class SummarizeResponse(BaseModel):
    ok: bool = True
    jobId: Optional[str] = None
    brief: str
