"""Instance controller endpoints: lifecycle of Evolution API instances."""

from evolution_tools.domain.model.endpoint import (
    ControllerType,
    EndpointDescriptor,
    EndpointParameter,
    HttpMethod,
)
from evolution_tools.infrastructure.endpoints.common import (
    INSTANCE_NAME_CONSTRAINTS,
    PRESENCE_VALUES,
    instance_param,
    string_param,
)

WEBHOOK_EVENTS = [
    "APPLICATION_STARTUP",
    "QRCODE_UPDATED",
    "CONNECTION_UPDATE",
    "MESSAGES_SET",
    "MESSAGES_UPSERT",
    "MESSAGES_UPDATE",
    "MESSAGES_DELETE",
    "SEND_MESSAGE",
    "CONTACTS_SET",
    "CONTACTS_UPSERT",
    "CONTACTS_UPDATE",
    "PRESENCE_UPDATE",
    "CHATS_SET",
    "CHATS_UPSERT",
    "CHATS_UPDATE",
    "CHATS_DELETE",
    "GROUPS_UPSERT",
    "GROUP_UPDATE",
    "GROUP_PARTICIPANTS_UPDATE",
    "NEW_JWT_TOKEN",
    "TYPEBOT_START",
    "TYPEBOT_CHANGE_STATUS",
]

ENDPOINTS = (
    EndpointDescriptor(
        name="create-instance",
        path="/instance/create",
        method=HttpMethod.POST,
        description="Create a new WhatsApp instance",
        controller=ControllerType.INSTANCE,
        parameters=(
            string_param(
                "instanceName",
                "Unique name for the new instance",
                required=True,
                example="my_instance",
                **INSTANCE_NAME_CONSTRAINTS,
            ),
            string_param("token", "Optional token used to authenticate the instance"),
            EndpointParameter(
                name="qrcode",
                type="boolean",
                description="Generate a QR code right after creation",
                example=True,
            ),
            string_param("webhook", "Webhook URL receiving instance events", format="uri"),
            EndpointParameter(
                name="webhookByEvents",
                type="boolean",
                description="Send each event to its own webhook path",
            ),
            EndpointParameter(
                name="webhookBase64",
                type="boolean",
                description="Send media in webhooks as base64",
            ),
            EndpointParameter(
                name="events",
                type="array",
                description="Events forwarded to the webhook",
                constraints={"items": {"type": "string", "enum": WEBHOOK_EVENTS}},
            ),
        ),
        example_request={"instanceName": "my_instance", "qrcode": True},
    ),
    EndpointDescriptor(
        name="fetch-instances",
        path="/instance/fetchInstances",
        method=HttpMethod.GET,
        description="List every instance on the server with its connection status",
        controller=ControllerType.INSTANCE,
    ),
    EndpointDescriptor(
        name="connect-instance",
        path="/instance/connect/{instance}",
        method=HttpMethod.GET,
        description="Connect an instance and get the pairing QR code",
        controller=ControllerType.INSTANCE,
        requires_instance=True,
        parameters=(instance_param(),),
    ),
    EndpointDescriptor(
        name="restart-instance",
        path="/instance/restart/{instance}",
        method=HttpMethod.PUT,
        description="Restart an instance",
        controller=ControllerType.INSTANCE,
        requires_instance=True,
        parameters=(instance_param(),),
    ),
    EndpointDescriptor(
        name="delete-instance",
        path="/instance/delete/{instance}",
        method=HttpMethod.DELETE,
        description="Delete an instance permanently",
        controller=ControllerType.INSTANCE,
        requires_instance=True,
        parameters=(instance_param(),),
    ),
    EndpointDescriptor(
        name="set-presence",
        path="/chat/presence/{instance}",
        method=HttpMethod.POST,
        description="Set the global presence of an instance",
        controller=ControllerType.INSTANCE,
        requires_instance=True,
        parameters=(
            instance_param(),
            string_param(
                "presence",
                "Presence to advertise",
                required=True,
                example="available",
                enum=PRESENCE_VALUES,
            ),
        ),
    ),
)
