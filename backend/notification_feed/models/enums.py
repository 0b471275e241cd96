from enum import Enum


class ChannelType(str, Enum):
    IN_APP = "in_app"
    EMAIL = "email"
    SMS = "sms"
    CHAT = "chat"
    PUSH = "push"


class StepType(str, Enum):
    IN_APP = "in_app"
    EMAIL = "email"
    SMS = "sms"
    CHAT = "chat"
    PUSH = "push"
    DIGEST = "digest"
    DELAY = "delay"
    TRIGGER = "trigger"


class MessageActionStatus(str, Enum):
    PENDING = "pending"
    DONE = "done"


class ButtonType(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
