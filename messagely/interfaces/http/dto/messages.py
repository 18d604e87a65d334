from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from messagely.domain.messages.entities import Message, MessageDetail

from .users import ProfileDTO


class SendMessageRequestDTO(BaseModel):
    to_username: str = Field(min_length=1, max_length=64)
    body: str = Field(min_length=1)


class MessageDTO(BaseModel):
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime
    read_at: datetime | None

    @classmethod
    def from_entity(cls, message: Message) -> MessageDTO:
        return cls(
            id=message.id,
            from_username=message.from_username,
            to_username=message.to_username,
            body=message.body,
            sent_at=message.sent_at,
            read_at=message.read_at,
        )


class MessageDetailDTO(BaseModel):
    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None
    from_user: ProfileDTO
    to_user: ProfileDTO

    @classmethod
    def from_entity(cls, detail: MessageDetail) -> MessageDetailDTO:
        message = detail.message
        return cls(
            id=message.id,
            body=message.body,
            sent_at=message.sent_at,
            read_at=message.read_at,
            from_user=ProfileDTO.from_entity(detail.from_user),
            to_user=ProfileDTO.from_entity(detail.to_user),
        )


class MessageReadDTO(BaseModel):
    id: int
    read_at: datetime | None

    @classmethod
    def from_entity(cls, message: Message) -> MessageReadDTO:
        return cls(id=message.id, read_at=message.read_at)
