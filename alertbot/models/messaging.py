"""Messaging platform models: subscribers, keyboards and webhook callbacks."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pydantic import BaseModel


@dataclass(frozen=True)
class Subscriber:
    id: str
    name: str
    role: str
    avatar: str | None = None


@dataclass(frozen=True)
class SubscriberRegistry:
    """Immutable set of known recipients keyed by id."""

    members: Mapping[str, Subscriber] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_members(cls, members: Iterable[Subscriber]) -> "SubscriberRegistry":
        return cls(MappingProxyType({m.id: m for m in members}))

    def ids(self) -> list[str]:
        return list(self.members)

    def get(self, subscriber_id: str) -> Subscriber | None:
        return self.members.get(subscriber_id)

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[Subscriber]:
        return iter(self.members.values())


@dataclass(frozen=True)
class Button:
    action_body: str
    text: str
    action_type: str = "reply"
    text_size: str = "regular"

    def to_payload(self) -> dict:
        return {
            "ActionType": self.action_type,
            "ActionBody": self.action_body,
            "Text": self.text,
            "TextSize": self.text_size,
        }


@dataclass(frozen=True)
class Keyboard:
    buttons: tuple[Button, ...]
    default_height: bool = True

    def to_payload(self) -> dict:
        return {
            "Type": "keyboard",
            "DefaultHeight": self.default_height,
            "Buttons": [b.to_payload() for b in self.buttons],
        }


# --- Inbound webhook payloads ---


class CallbackSender(BaseModel):
    id: str | None = None
    name: str = ""
    avatar: str | None = None
    country: str | None = None
    language: str | None = None
    api_version: int | None = None


class CallbackUser(BaseModel):
    id: str
    name: str = ""
    avatar: str | None = None
    country: str | None = None
    language: str | None = None
    api_version: int | None = None


class CallbackMessage(BaseModel):
    type: str = "text"
    text: str | None = None
    media: str | None = None
    tracking_data: str | None = None


class CallbackEvent(BaseModel):
    """A webhook delivery. Unknown fields are ignored."""

    model_config = {"extra": "ignore"}

    event: str
    timestamp: int | None = None
    message_token: int | None = None
    sender: CallbackSender | None = None
    message: CallbackMessage | None = None
    user: CallbackUser | None = None
    user_id: str | None = None
    subscribed: bool | None = None
