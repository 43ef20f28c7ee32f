# blogfusion_server/models/assist.py

from pydantic import BaseModel


WRITING_ACTIONS = ("improve", "expand", "summarize")


class AIWritingRequest(BaseModel):
    # content and action are checked by WritingAssistant so that a bad
    # request is rejected the same way whether it comes over HTTP or not
    content: str = ""
    action: str = ""
    tone: str | None = None


class AIWritingResponse(BaseModel):
    suggestion: str
    action: str
