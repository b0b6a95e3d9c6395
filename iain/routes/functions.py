import logging

from fastapi import APIRouter, Depends, HTTPException

from iain.schemas.functions import FunctionResult, WelcomeEmailRequest
from iain.utils.auth import get_current_user
from iain.utils.email import send_welcome_email

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["Functions"])


# ✅ SEND WELCOME EMAIL (callable by any signed-in user)
@router.post("/send-welcome-email", response_model=FunctionResult)
async def send_welcome_email_function(
    request: WelcomeEmailRequest,
    current_user: dict = Depends(get_current_user)
):
    if not request.email or not request.email.strip():
        raise HTTPException(status_code=400, detail="The email field is required in the request data.")

    email = request.email.strip()
    if not await send_welcome_email(email):
        LOG.error("Error sending welcome email to %s", email)
        raise HTTPException(status_code=500, detail="Failed to send welcome email due to server error.")

    LOG.info("Welcome email successfully sent to %s", email)
    return {"success": True, "message": "Welcome email sent successfully."}
