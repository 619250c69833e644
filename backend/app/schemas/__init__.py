from .job import StorageInfo, UploadResponse, JobStatusResponse, ProcessJobResponse
from .brief import ChatRequest, ChatResponse, SummarizeRequest, SummarizeResponse
