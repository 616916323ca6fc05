import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from models.models import Conversation, ConversationParticipant


class ConversationRepo:
    def __init__(self, db):
        self.db = db

    async def get_conversation_by_id(
        self, conversation_id: uuid.UUID
    ) -> Conversation | None:
        result = await self.db.execute(
            select(Conversation).where(Conversation.id == conversation_id)
        )
        return result.scalar_one_or_none()

    async def conversation_ids_for_user(self, user_id: uuid.UUID) -> List[uuid.UUID]:
        result = await self.db.execute(
            select(ConversationParticipant.conversation_id).where(
                ConversationParticipant.user_id == user_id
            )
        )
        return list(result.scalars().all())

    async def is_participant(
        self, conversation_id: uuid.UUID, user_id: uuid.UUID
    ) -> bool:
        result = await self.db.execute(
            select(ConversationParticipant.id).where(
                ConversationParticipant.conversation_id == conversation_id,
                ConversationParticipant.user_id == user_id,
            )
        )
        return result.scalars().first() is not None

    async def find_shared_conversation(
        self, user_id: uuid.UUID, other_user_id: uuid.UUID
    ) -> Optional[Conversation]:
        own_ids = await self.conversation_ids_for_user(user_id)
        if not own_ids:
            return None

        result = await self.db.execute(
            select(Conversation)
            .join(
                ConversationParticipant,
                ConversationParticipant.conversation_id == Conversation.id,
            )
            .where(
                ConversationParticipant.user_id == other_user_id,
                Conversation.id.in_(own_ids),
            )
            .order_by(Conversation.updated_at.desc(), Conversation.id)
            .limit(1)
        )
        return result.scalars().first()

    async def create_with_participants(
        self,
        user_ids: List[uuid.UUID],
        property_id: uuid.UUID | None = None,
    ) -> Conversation:
        convo = Conversation(property_id=property_id)
        self.db.add(convo)
        try:
            await self.db.flush()
            self.db.add_all(
                ConversationParticipant(conversation_id=convo.id, user_id=user_id)
                for user_id in user_ids
            )
            await self.db.flush()
            return convo
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def list_with_details(
        self, conversation_ids: List[uuid.UUID]
    ) -> List[Conversation]:
        result = await self.db.execute(
            select(Conversation)
            .options(
                selectinload(Conversation.property),
                selectinload(Conversation.participants).selectinload(
                    ConversationParticipant.user
                ),
            )
            .where(Conversation.id.in_(conversation_ids))
            .order_by(Conversation.updated_at.desc(), Conversation.id)
        )
        return list(result.scalars().all())

    async def touch(self, convo: Conversation, when: datetime) -> None:
        convo.updated_at = when
        self.db.add(convo)
        try:
            await self.db.flush()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
