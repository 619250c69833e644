from datetime import datetime
from pydantic import BaseModel
from typing import Optional

class StorageInfo(BaseModel):
    path: str
    publicUrl: Optional[str] = None

class UploadResponse(BaseModel):
    ok: bool = True
    jobId: str
    status: str  # pending, or done/failed in sync mode
    storage: StorageInfo
    brief: Optional[str] = None
    error: Optional[str] = None

class JobStatusResponse(BaseModel):
    id: str
    status: str  # pending, processing, done, failed
    brief: Optional[str] = None
    error: Optional[str] = None
    updated_at: Optional[datetime] = None

class ProcessJobResponse(BaseModel):
    ok: bool = True
    jobId: Optional[str] = None
    status: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None
