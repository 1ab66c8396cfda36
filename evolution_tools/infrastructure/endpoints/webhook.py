"""Webhook controller endpoints."""

from evolution_tools.domain.model.endpoint import (
    ControllerType,
    EndpointDescriptor,
    EndpointParameter,
    HttpMethod,
)
from evolution_tools.infrastructure.endpoints.common import instance_param
from evolution_tools.infrastructure.endpoints.instance import WEBHOOK_EVENTS

ENDPOINTS = (
    EndpointDescriptor(
        name="set-webhook",
        path="/webhook/set/{instance}",
        method=HttpMethod.POST,
        description="Configure the webhook receiving instance events",
        controller=ControllerType.WEBHOOK,
        requires_instance=True,
        parameters=(
            instance_param(),
            EndpointParameter(
                name="webhook",
                type="object",
                required=True,
                description="Webhook configuration",
                example={
                    "url": "https://example.com/webhook",
                    "enabled": True,
                    "events": ["MESSAGES_UPSERT"],
                },
                constraints={
                    "properties": {
                        "url": {"type": "string", "minLength": 1},
                        "enabled": {"type": "boolean"},
                        "webhookByEvents": {"type": "boolean"},
                        "webhookBase64": {"type": "boolean"},
                        "events": {
                            "type": "array",
                            "items": {"type": "string", "enum": WEBHOOK_EVENTS},
                        },
                    },
                    "required": ["url", "enabled"],
                },
            ),
        ),
    ),
    EndpointDescriptor(
        name="get-webhook",
        path="/webhook/find/{instance}",
        method=HttpMethod.GET,
        description="Get the webhook configured for an instance",
        controller=ControllerType.WEBHOOK,
        requires_instance=True,
        parameters=(instance_param(),),
    ),
)
