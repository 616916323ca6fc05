import uuid

from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_current_user import get_current_user
from core.get_db import get_db_async
from core.safe_handler import safe_handler
from models.models import User
from schemas.schema import (
    ConversationListOut,
    MessageCreate,
    MessageEnvelope,
    MessageListOut,
    SuccessOut,
)
from services.message_service import MessagingService

router = APIRouter(tags=["Messaging"])


@cbv(router)
class MessageRoutes:
    @router.get("/conversations", response_model=ConversationListOut)
    @safe_handler
    async def list_conversations(
        self,
        request: Request,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await MessagingService(db).list_conversations(current_user=current_user)

    @router.post("/conversations/messages", response_model=MessageEnvelope)
    @safe_handler
    async def send_message(
        self,
        request: Request,
        payload: MessageCreate,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await MessagingService(db).send_message(
            current_user=current_user, data=payload
        )

    @router.get(
        "/conversations/{conversation_id}/messages", response_model=MessageListOut
    )
    @safe_handler
    async def list_messages(
        self,
        request: Request,
        conversation_id: uuid.UUID,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await MessagingService(db).list_messages(
            conversation_id=conversation_id, current_user=current_user
        )

    @router.post(
        "/conversations/{conversation_id}/messages/read", response_model=SuccessOut
    )
    @safe_handler
    async def mark_as_read(
        self,
        request: Request,
        conversation_id: uuid.UUID,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await MessagingService(db).mark_as_read(
            conversation_id=conversation_id, current_user=current_user
        )
