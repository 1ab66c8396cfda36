"""Message controller endpoints: sending content to chats."""

from evolution_tools.domain.model.endpoint import (
    ControllerType,
    EndpointDescriptor,
    EndpointParameter,
    HttpMethod,
)
from evolution_tools.infrastructure.endpoints.common import (
    MESSAGE_KEY_SCHEMA,
    delay_param,
    instance_param,
    number_param,
    string_param,
)

QUOTED_SCHEMA = {
    "type": "object",
    "properties": {
        "key": MESSAGE_KEY_SCHEMA,
        "message": {"type": "object"},
    },
    "required": ["key"],
}


def _media_param(description: str) -> EndpointParameter:
    return string_param(
        "media",
        description,
        required=True,
        example="https://example.com/file.jpg",
        minLength=1,
    )


ENDPOINTS = (
    EndpointDescriptor(
        name="send-text",
        path="/message/sendText/{instance}",
        method=HttpMethod.POST,
        description="Send a text message",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        tool_name="send_text_message",
        parameters=(
            instance_param(),
            number_param(),
            string_param(
                "text",
                "Message text",
                required=True,
                example="Hello, this is a test message",
                minLength=1,
                maxLength=4096,
            ),
            delay_param(),
            EndpointParameter(
                name="quoted",
                type="object",
                description="Message being replied to",
                constraints=QUOTED_SCHEMA,
            ),
        ),
        example_request={"number": "5511999999999", "text": "Hello!"},
    ),
    EndpointDescriptor(
        name="send-media",
        path="/message/sendMedia/{instance}",
        method=HttpMethod.POST,
        description="Send an image, video or document",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        tool_name="send_media_message",
        parameters=(
            instance_param(),
            number_param(),
            string_param(
                "mediatype",
                "Kind of media",
                required=True,
                example="image",
                enum=["image", "video", "document"],
            ),
            _media_param("Media URL or base64 content"),
            string_param("caption", "Caption shown under the media", maxLength=1024),
            string_param("fileName", "File name shown to the recipient"),
            string_param("mimetype", "MIME type of the media"),
            delay_param(),
        ),
    ),
    EndpointDescriptor(
        name="send-audio",
        path="/message/sendWhatsAppAudio/{instance}",
        method=HttpMethod.POST,
        description="Send an audio message as a voice note",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        tool_name="send_audio_message",
        parameters=(
            instance_param(),
            number_param(),
            string_param(
                "audio",
                "Audio URL or base64 content",
                required=True,
                example="https://example.com/audio.ogg",
                minLength=1,
            ),
            delay_param(),
        ),
    ),
    EndpointDescriptor(
        name="send-sticker",
        path="/message/sendSticker/{instance}",
        method=HttpMethod.POST,
        description="Send a sticker",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        tool_name="send_sticker",
        parameters=(
            instance_param(),
            number_param(),
            string_param(
                "sticker",
                "Sticker image URL or base64 content",
                required=True,
                example="https://example.com/sticker.webp",
                minLength=1,
            ),
            delay_param(),
        ),
    ),
    EndpointDescriptor(
        name="send-location",
        path="/message/sendLocation/{instance}",
        method=HttpMethod.POST,
        description="Send a location pin",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        tool_name="send_location",
        parameters=(
            instance_param(),
            number_param(),
            EndpointParameter(
                name="latitude",
                type="number",
                required=True,
                description="Latitude in degrees",
                example=-23.5505,
                constraints={"minimum": -90, "maximum": 90},
            ),
            EndpointParameter(
                name="longitude",
                type="number",
                required=True,
                description="Longitude in degrees",
                example=-46.6333,
                constraints={"minimum": -180, "maximum": 180},
            ),
            string_param("name", "Name of the place"),
            string_param("address", "Address of the place"),
            delay_param(),
        ),
    ),
    EndpointDescriptor(
        name="send-contact",
        path="/message/sendContact/{instance}",
        method=HttpMethod.POST,
        description="Share a contact card",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        tool_name="send_contact",
        parameters=(
            instance_param(),
            number_param(),
            EndpointParameter(
                name="contact",
                type="array",
                required=True,
                description="Contacts to share",
                example=[{"fullName": "Example Name", "wuid": "5511888888888", "phoneNumber": "+55 11 88888-8888"}],
                constraints={
                    "minItems": 1,
                    "items": {
                        "type": "object",
                        "properties": {
                            "fullName": {"type": "string", "minLength": 1},
                            "wuid": {"type": "string"},
                            "phoneNumber": {"type": "string", "minLength": 1},
                        },
                        "required": ["fullName", "phoneNumber"],
                    },
                },
            ),
        ),
    ),
    EndpointDescriptor(
        name="send-reaction",
        path="/message/sendReaction/{instance}",
        method=HttpMethod.POST,
        description="React to a message with an emoji",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        tool_name="send_reaction",
        parameters=(
            instance_param(),
            EndpointParameter(
                name="key",
                type="object",
                required=True,
                description="Key of the message to react to",
                example={"remoteJid": "5511999999999@s.whatsapp.net", "fromMe": False, "id": "example_id"},
                constraints=MESSAGE_KEY_SCHEMA,
            ),
            string_param(
                "reaction",
                "Emoji reaction (empty string not allowed)",
                required=True,
                example="\U0001F44D",
                minLength=1,
                maxLength=10,
            ),
        ),
    ),
    EndpointDescriptor(
        name="send-poll",
        path="/message/sendPoll/{instance}",
        method=HttpMethod.POST,
        description="Send a poll",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        tool_name="send_poll",
        parameters=(
            instance_param(),
            number_param(),
            string_param("name", "Poll question", required=True, minLength=1, maxLength=255),
            EndpointParameter(
                name="selectableCount",
                type="integer",
                required=True,
                description="How many options a voter may pick",
                example=1,
                constraints={"minimum": 1, "maximum": 12},
            ),
            EndpointParameter(
                name="values",
                type="array",
                required=True,
                description="Poll options",
                example=["Option 1", "Option 2"],
                constraints={
                    "minItems": 2,
                    "maxItems": 12,
                    "items": {"type": "string", "minLength": 1},
                },
            ),
            delay_param(),
        ),
    ),
    EndpointDescriptor(
        name="send-list",
        path="/message/sendList/{instance}",
        method=HttpMethod.POST,
        description="Send an interactive list message",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        tool_name="send_list",
        parameters=(
            instance_param(),
            number_param(),
            string_param("title", "List title", required=True, minLength=1, maxLength=60),
            string_param("description", "List body text", required=True, maxLength=1024),
            string_param(
                "buttonText",
                "Text of the button opening the list",
                required=True,
                example="View options",
                maxLength=20,
            ),
            string_param("footerText", "Footer text", maxLength=60),
            EndpointParameter(
                name="sections",
                type="array",
                required=True,
                description="List sections with their rows",
                example=[
                    {
                        "title": "Section 1",
                        "rows": [{"title": "Row 1", "description": "First row", "rowId": "row_1"}],
                    }
                ],
                constraints={
                    "minItems": 1,
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {"type": "string"},
                            "rows": {
                                "type": "array",
                                "minItems": 1,
                                "items": {
                                    "type": "object",
                                    "properties": {
                                        "title": {"type": "string"},
                                        "description": {"type": "string"},
                                        "rowId": {"type": "string"},
                                    },
                                    "required": ["title", "rowId"],
                                },
                            },
                        },
                        "required": ["title", "rows"],
                    },
                },
            ),
            delay_param(),
        ),
    ),
    EndpointDescriptor(
        name="send-button",
        path="/message/sendButtons/{instance}",
        method=HttpMethod.POST,
        description="Send a message with reply buttons",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        tool_name="send_button",
        parameters=(
            instance_param(),
            number_param(),
            string_param("title", "Message title", required=True, minLength=1),
            string_param("description", "Message body text", required=True),
            string_param("footer", "Footer text"),
            EndpointParameter(
                name="buttons",
                type="array",
                required=True,
                description="Reply buttons",
                example=[{"type": "replyButton", "reply": {"displayText": "Yes", "id": "btn_yes"}}],
                constraints={
                    "minItems": 1,
                    "maxItems": 3,
                    "items": {
                        "type": "object",
                        "properties": {
                            "type": {"type": "string", "enum": ["replyButton"]},
                            "reply": {
                                "type": "object",
                                "properties": {
                                    "displayText": {"type": "string", "minLength": 1},
                                    "id": {"type": "string", "minLength": 1},
                                },
                                "required": ["displayText", "id"],
                            },
                        },
                        "required": ["type", "reply"],
                    },
                },
            ),
            delay_param(),
        ),
    ),
)
