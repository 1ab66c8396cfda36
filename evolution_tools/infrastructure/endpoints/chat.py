"""Chat controller endpoints: searching and managing conversations."""

from evolution_tools.domain.model.endpoint import (
    ControllerType,
    EndpointDescriptor,
    EndpointParameter,
    HttpMethod,
)
from evolution_tools.infrastructure.endpoints.common import (
    MESSAGE_KEY_SCHEMA,
    PHONE_NUMBER_CONSTRAINTS,
    PRESENCE_VALUES,
    delay_param,
    instance_param,
    number_param,
    string_param,
)

ENDPOINTS = (
    EndpointDescriptor(
        name="find-messages",
        path="/chat/findMessages/{instance}",
        method=HttpMethod.POST,
        description="Search messages of an instance",
        controller=ControllerType.CHAT,
        requires_instance=True,
        tool_name="find_messages",
        parameters=(
            instance_param(),
            EndpointParameter(
                name="where",
                type="object",
                description="Filter on message key fields",
                constraints={
                    "properties": {
                        "key": {
                            "type": "object",
                            "properties": MESSAGE_KEY_SCHEMA["properties"],
                        },
                    },
                },
            ),
            EndpointParameter(
                name="limit",
                type="integer",
                description="Maximum number of messages to return",
                example=50,
                constraints={"minimum": 1, "maximum": 1000},
            ),
        ),
    ),
    EndpointDescriptor(
        name="find-contacts",
        path="/chat/findContacts/{instance}",
        method=HttpMethod.POST,
        description="Search contacts of an instance",
        controller=ControllerType.CHAT,
        requires_instance=True,
        parameters=(
            instance_param(),
            EndpointParameter(
                name="where",
                type="object",
                description="Filter by contact name or number",
                constraints={
                    "properties": {
                        "name": {"type": "string"},
                        "number": {"type": "string"},
                    },
                },
            ),
        ),
    ),
    EndpointDescriptor(
        name="find-chats",
        path="/chat/findChats/{instance}",
        method=HttpMethod.POST,
        description="Search chats of an instance",
        controller=ControllerType.CHAT,
        requires_instance=True,
        parameters=(
            instance_param(),
            EndpointParameter(
                name="where",
                type="object",
                description="Filter by chat name or JID",
                constraints={
                    "properties": {
                        "name": {"type": "string"},
                        "jid": {"type": "string"},
                    },
                },
            ),
        ),
    ),
    EndpointDescriptor(
        name="mark-as-read",
        path="/chat/markMessageAsRead/{instance}",
        method=HttpMethod.POST,
        description="Mark messages as read",
        controller=ControllerType.CHAT,
        requires_instance=True,
        tool_name="mark_messages_as_read",
        parameters=(
            instance_param(),
            EndpointParameter(
                name="readMessages",
                type="array",
                required=True,
                description="Keys of the messages to mark as read",
                example=[{"remoteJid": "5511999999999@s.whatsapp.net", "fromMe": False, "id": "example_id"}],
                constraints={"minItems": 1, "items": MESSAGE_KEY_SCHEMA},
            ),
        ),
    ),
    EndpointDescriptor(
        name="archive-chat",
        path="/chat/archiveChat/{instance}",
        method=HttpMethod.POST,
        description="Archive or unarchive a chat",
        controller=ControllerType.CHAT,
        requires_instance=True,
        parameters=(
            instance_param(),
            string_param(
                "chat",
                "Chat JID to archive",
                required=True,
                example="5511999999999@s.whatsapp.net",
                minLength=1,
            ),
            EndpointParameter(
                name="archive",
                type="boolean",
                required=True,
                description="True to archive, false to unarchive",
                example=True,
            ),
        ),
    ),
    EndpointDescriptor(
        name="check-is-whatsapp",
        path="/chat/whatsappNumbers/{instance}",
        method=HttpMethod.POST,
        description="Check which phone numbers have a WhatsApp account",
        controller=ControllerType.CHAT,
        requires_instance=True,
        parameters=(
            instance_param(),
            EndpointParameter(
                name="numbers",
                type="array",
                required=True,
                description="Phone numbers with country code (digits only)",
                example=["5511999999999"],
                constraints={
                    "minItems": 1,
                    "maxItems": 50,
                    "items": {"type": "string", **PHONE_NUMBER_CONSTRAINTS},
                },
            ),
        ),
    ),
    EndpointDescriptor(
        name="send-presence",
        path="/chat/sendPresence/{instance}",
        method=HttpMethod.POST,
        description="Show a presence state (typing, recording...) in a chat",
        controller=ControllerType.CHAT,
        requires_instance=True,
        parameters=(
            instance_param(),
            number_param(),
            string_param(
                "presence",
                "Presence to show",
                required=True,
                example="composing",
                enum=PRESENCE_VALUES,
            ),
            delay_param(),
        ),
    ),
)
