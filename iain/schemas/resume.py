from pydantic import BaseModel
from typing import List, Optional, Union


class ResumeMetadata(BaseModel):
    id: str
    uid: str
    file_name: Optional[str] = None
    file_size: Optional[Union[int, str]] = None
    file_url: Optional[str] = None
    storage_path: Optional[str] = None
    upload_date: str


class ResumeGroup(BaseModel):
    uid: str
    applicant_name: str
    resumes: List[ResumeMetadata]
