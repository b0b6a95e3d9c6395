from pydantic import BaseModel
from typing import Optional


class WelcomeEmailRequest(BaseModel):
    email: Optional[str] = None


class FunctionResult(BaseModel):
    success: bool
    message: str
