"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schema definitions shared across routers.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic message response schema for simple confirmations,
    such as delete operations.

    Attributes:
        message: 응답 메시지 (Response message string)
    """

    message: str
