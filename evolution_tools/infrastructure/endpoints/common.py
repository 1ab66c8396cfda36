"""Parameter builders shared by the endpoint descriptor modules."""

from typing import Any

from evolution_tools.domain.model.endpoint import EndpointParameter, ParameterLocation

PHONE_NUMBER_CONSTRAINTS: dict[str, Any] = {"minLength": 10, "maxLength": 15, "pattern": r"^\d+$"}

# Letters, digits, underscores and hyphens; no leading or trailing hyphen.
INSTANCE_NAME_CONSTRAINTS: dict[str, Any] = {
    "minLength": 1,
    "maxLength": 50,
    "pattern": r"^[A-Za-z0-9_](?:[A-Za-z0-9_-]*[A-Za-z0-9_])?$",
}

# Both "120363...@g.us" and legacy "number-timestamp@g.us" forms.
GROUP_JID_CONSTRAINTS: dict[str, Any] = {"minLength": 1, "pattern": r"^[0-9]+(?:-[0-9]+)?@g\.us$"}

MESSAGE_KEY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "remoteJid": {"type": "string", "description": "Chat JID the message belongs to"},
        "fromMe": {"type": "boolean", "description": "Whether the message was sent by this instance"},
        "id": {"type": "string", "description": "Message ID"},
    },
    "required": ["remoteJid", "fromMe", "id"],
}

PRESENCE_VALUES = ["available", "unavailable", "composing", "recording", "paused"]


def instance_param() -> EndpointParameter:
    return EndpointParameter(
        name="instance",
        type="string",
        required=True,
        description="Name of the Evolution API instance",
        location=ParameterLocation.PATH,
        example="my_instance",
        constraints=INSTANCE_NAME_CONSTRAINTS,
    )


def number_param(description: str = "Recipient phone number with country code (digits only)") -> EndpointParameter:
    return EndpointParameter(
        name="number",
        type="string",
        required=True,
        description=description,
        example="5511999999999",
        constraints=PHONE_NUMBER_CONSTRAINTS,
    )


def delay_param() -> EndpointParameter:
    return EndpointParameter(
        name="delay",
        type="integer",
        description="Delay in milliseconds before sending",
        example=1000,
        constraints={"minimum": 0, "maximum": 60000},
    )


def group_jid_param() -> EndpointParameter:
    return EndpointParameter(
        name="groupJid",
        type="string",
        required=True,
        description="Group JID (e.g. 120363000000000000@g.us)",
        example="120363000000000000@g.us",
        constraints=GROUP_JID_CONSTRAINTS,
    )


def string_param(
    name: str,
    description: str,
    required: bool = False,
    example: Any = None,
    **constraints: Any,
) -> EndpointParameter:
    """Build a body string parameter with optional JSON-Schema keywords."""
    return EndpointParameter(
        name=name,
        type="string",
        required=required,
        description=description,
        example=example,
        constraints=constraints,
    )
