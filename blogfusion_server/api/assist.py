# blogfusion_server/api/assist.py

from fastapi import APIRouter, Depends
from blogfusion_server.api.auth import get_current_user
from blogfusion_server.core.assistant import WritingAssistant, get_assistant
from blogfusion_server.models import AIWritingRequest, AIWritingResponse, User


router = APIRouter()


@router.post("/api/ai/assist", response_model=AIWritingResponse)
def assist(
    req: AIWritingRequest,
    current_user: User = Depends(get_current_user),
    assistant: WritingAssistant = Depends(get_assistant),
):
    # runs in the threadpool and holds no store lock
    return assistant.assist(req)
