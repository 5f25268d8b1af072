"""Application Use Case - Business assistant"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from bizintel.application.dtos.ai_dto import ChatRequestDTO, ChatResponseDTO
from bizintel.application.models import CallerIdentity
from bizintel.domain.entities.errors import ValidationError
from bizintel.domain.gateways.ai_service_gateway import IAIServiceGateway


class ChatbotUseCase:
    """Forwards a message to the assistant with the caller's context attached."""

    def __init__(
        self,
        ai_gateway: IAIServiceGateway,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.ai_gateway = ai_gateway
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def execute(
        self, request: ChatRequestDTO, caller: CallerIdentity
    ) -> ChatResponseDTO:
        message = (request.message or "").strip()
        if not message:
            raise ValidationError("Message is required")

        context = {
            **request.context,
            "user_id": caller.user_id,
            "user_role": caller.role,
            "timestamp": self._clock().isoformat(),
        }
        reply = await self.ai_gateway.chat(message, context)
        return ChatResponseDTO.from_domain(reply)
