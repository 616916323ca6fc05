import logging
import uuid

from fastapi import HTTPException

from core.date_helper import utcnow
from core.mapper import ORMMapper
from core.settings import settings
from models.models import Conversation, Message
from repos.auth_repo import AuthRepo
from repos.conversation_repo import ConversationRepo
from repos.message_repo import MessageRepo
from repos.property_repo import PropertyRepo
from schemas.schema import (
    ConversationListOut,
    ConversationPropertySummary,
    ConversationSummaryOut,
    LastMessageOut,
    MessageEnvelope,
    MessageListOut,
    MessageOut,
    MessageWithSenderOut,
    ParticipantSummary,
    SuccessOut,
)

logger = logging.getLogger(__name__)


class MessagingService:
    """Conversation directory, message sending and read tracking.

    Every conversation has exactly two participants, fixed when it is created.
    """

    def __init__(self, db):
        self.convos: ConversationRepo = ConversationRepo(db)
        self.messages: MessageRepo = MessageRepo(db)
        self.users: AuthRepo = AuthRepo(db)
        self.properties: PropertyRepo = PropertyRepo(db)
        self.mapper: ORMMapper = ORMMapper()

    def _summary(
        self,
        convo: Conversation,
        viewer_id: uuid.UUID,
        last_message: Message | None,
        unread_count: int,
    ) -> ConversationSummaryOut:
        prop = convo.property
        return ConversationSummaryOut(
            id=convo.id,
            property_id=convo.property_id,
            property=(
                ConversationPropertySummary(
                    id=prop.id, title=prop.title, image=prop.cover_image
                )
                if prop
                else None
            ),
            participants=[
                ParticipantSummary(
                    id=participant.user.id,
                    name=participant.user.name,
                    avatar=participant.user.avatar,
                )
                for participant in convo.participants
                if participant.user_id != viewer_id and participant.user is not None
            ],
            last_message=(
                self.mapper.one(last_message, LastMessageOut) if last_message else None
            ),
            unread_count=unread_count,
            created_at=convo.created_at,
            updated_at=convo.updated_at,
        )

    async def list_conversations(self, current_user) -> ConversationListOut:
        conversation_ids = await self.convos.conversation_ids_for_user(current_user.id)
        if not conversation_ids:
            return ConversationListOut(conversations=[])

        convos = await self.convos.list_with_details(conversation_ids)
        latest = await self.messages.latest_by_conversation(conversation_ids)
        unread = await self.messages.unread_counts(conversation_ids, current_user.id)

        return ConversationListOut(
            conversations=[
                self._summary(
                    convo, current_user.id, latest.get(convo.id), unread.get(convo.id, 0)
                )
                for convo in convos
            ]
        )

    async def resolve_conversation(self, current_user, data) -> Conversation:
        """Return the conversation a new message belongs to.

        An explicit ``conversation_id`` wins. Otherwise the newest conversation
        already shared with ``recipient_id`` is reused, or a new one is staged
        (not committed) together with both participant rows.
        """
        if data.conversation_id:
            convo = await self.convos.get_conversation_by_id(data.conversation_id)
            if not convo:
                raise HTTPException(404, "Conversation not found")
            if settings.ENFORCE_SENDER_MEMBERSHIP and not await self.convos.is_participant(
                convo.id, current_user.id
            ):
                raise HTTPException(403, "Not part of this conversation")
            return convo

        if not data.recipient_id:
            raise HTTPException(400, "Conversation ID or recipient ID is required")

        if data.recipient_id == current_user.id:
            raise HTTPException(400, "You cannot message yourself")

        recipient = await self.users.by_id(data.recipient_id)
        if not recipient:
            raise HTTPException(404, "Recipient not found")

        existing = await self.convos.find_shared_conversation(
            current_user.id, recipient.id
        )
        if existing:
            return existing

        if data.property_id and not await self.properties.get_by_id(data.property_id):
            raise HTTPException(404, "Property not found")

        convo = await self.convos.create_with_participants(
            [current_user.id, recipient.id], property_id=data.property_id
        )
        logger.info(
            f"Conversation {convo.id} opened between {current_user.id} and {recipient.id}"
        )
        return convo

    async def send_message(self, current_user, data) -> MessageEnvelope:
        if not (data.content or "").strip():
            raise HTTPException(400, "Message content is required")

        convo = await self.resolve_conversation(current_user, data)
        msg = await self.messages.create(
            conversation_id=convo.id,
            sender_id=current_user.id,
            content=data.content,
            attachments=data.attachments,
        )
        await self.convos.touch(convo, msg.created_at or utcnow())
        await self.convos.commit()

        return MessageEnvelope(message=self.mapper.one(msg, MessageOut))

    async def list_messages(
        self, conversation_id: uuid.UUID, current_user
    ) -> MessageListOut:
        if not await self.convos.is_participant(conversation_id, current_user.id):
            raise HTTPException(403, "Not authorized to view this conversation")

        messages = await self.messages.list_for_conversation(conversation_id)
        return MessageListOut(
            messages=self.mapper.many(messages, MessageWithSenderOut)
        )

    async def mark_as_read(self, conversation_id: uuid.UUID, current_user) -> SuccessOut:
        if not await self.convos.is_participant(conversation_id, current_user.id):
            raise HTTPException(403, "Not authorized")

        updated = await self.messages.mark_conversation_as_read(
            conversation_id, current_user.id
        )
        if updated:
            logger.info(
                f"Marked {updated} message(s) read in {conversation_id} for {current_user.id}"
            )
        return SuccessOut()
