import uuid
from typing import Dict, List

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from models.models import Message


class MessageRepo:
    def __init__(self, db):
        self.db = db

    async def create(
        self,
        conversation_id: uuid.UUID,
        sender_id: uuid.UUID,
        content: str,
        attachments: List[str] | None = None,
    ) -> Message:
        msg = Message(
            conversation_id=conversation_id,
            sender_id=sender_id,
            content=content,
            attachments=list(attachments or []),
            is_read=False,
        )
        self.db.add(msg)
        try:
            await self.db.flush()
            return msg
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def list_for_conversation(self, conversation_id: uuid.UUID) -> List[Message]:
        result = await self.db.execute(
            select(Message)
            .options(selectinload(Message.sender))
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at, Message.id)
        )
        return list(result.scalars().all())

    async def latest_by_conversation(
        self, conversation_ids: List[uuid.UUID]
    ) -> Dict[uuid.UUID, Message]:
        if not conversation_ids:
            return {}

        ranked = (
            select(
                Message.id.label("message_id"),
                func.row_number()
                .over(
                    partition_by=Message.conversation_id,
                    order_by=(Message.created_at.desc(), Message.id.desc()),
                )
                .label("position"),
            )
            .where(Message.conversation_id.in_(conversation_ids))
            .subquery()
        )
        result = await self.db.execute(
            select(Message)
            .join(ranked, ranked.c.message_id == Message.id)
            .where(ranked.c.position == 1)
        )
        return {msg.conversation_id: msg for msg in result.scalars().all()}

    async def unread_counts(
        self, conversation_ids: List[uuid.UUID], reader_id: uuid.UUID
    ) -> Dict[uuid.UUID, int]:
        if not conversation_ids:
            return {}

        result = await self.db.execute(
            select(Message.conversation_id, func.count(Message.id))
            .where(
                Message.conversation_id.in_(conversation_ids),
                Message.sender_id != reader_id,
                Message.is_read.is_(False),
            )
            .group_by(Message.conversation_id)
        )
        return {conversation_id: count for conversation_id, count in result.all()}

    async def mark_conversation_as_read(
        self, conversation_id: uuid.UUID, reader_id: uuid.UUID
    ) -> int:
        try:
            result = await self.db.execute(
                update(Message)
                .where(
                    Message.conversation_id == conversation_id,
                    Message.sender_id != reader_id,
                    Message.is_read.is_(False),
                )
                .values(is_read=True)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
            return result.rowcount or 0
        except SQLAlchemyError:
            await self.db.rollback()
            raise
