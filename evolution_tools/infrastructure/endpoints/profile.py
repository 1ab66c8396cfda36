"""Profile controller endpoints: profile, privacy and business settings."""

from evolution_tools.domain.model.endpoint import (
    ControllerType,
    EndpointDescriptor,
    EndpointParameter,
    HttpMethod,
)
from evolution_tools.infrastructure.endpoints.common import (
    instance_param,
    number_param,
    string_param,
)

_AUDIENCE = ["all", "contacts", "contact_blacklist", "none"]

PRIVACY_SETTINGS_SCHEMA = {
    "properties": {
        "readreceipts": {"type": "string", "enum": ["all", "none"]},
        "profile": {"type": "string", "enum": _AUDIENCE},
        "status": {"type": "string", "enum": _AUDIENCE},
        "online": {"type": "string", "enum": ["all", "match_last_seen"]},
        "last": {"type": "string", "enum": _AUDIENCE},
        "groupadd": {"type": "string", "enum": _AUDIENCE},
    },
    "minProperties": 1,
}

BUSINESS_PROFILE_SCHEMA = {
    "properties": {
        "description": {"type": "string", "maxLength": 256},
        "category": {"type": "string"},
        "email": {"type": "string"},
        "website": {"type": "array", "items": {"type": "string"}, "maxItems": 2},
        "address": {"type": "string"},
    },
    "minProperties": 1,
}

ENDPOINTS = (
    EndpointDescriptor(
        name="fetch-profile",
        path="/chat/fetchProfile/{instance}",
        method=HttpMethod.POST,
        description="Fetch the profile of a WhatsApp number",
        controller=ControllerType.PROFILE,
        requires_instance=True,
        parameters=(instance_param(), number_param("Phone number with country code (digits only)")),
    ),
    EndpointDescriptor(
        name="update-profile-name",
        path="/chat/updateProfileName/{instance}",
        method=HttpMethod.PUT,
        description="Change the profile name of the instance",
        controller=ControllerType.PROFILE,
        requires_instance=True,
        parameters=(
            instance_param(),
            string_param("name", "New profile name", required=True, minLength=1, maxLength=25),
        ),
    ),
    EndpointDescriptor(
        name="update-profile-status",
        path="/chat/updateProfileStatus/{instance}",
        method=HttpMethod.PUT,
        description="Change the profile status text of the instance",
        controller=ControllerType.PROFILE,
        requires_instance=True,
        parameters=(
            instance_param(),
            string_param("status", "New status text", required=True, maxLength=139),
        ),
    ),
    EndpointDescriptor(
        name="update-profile-picture",
        path="/chat/updateProfilePicture/{instance}",
        method=HttpMethod.PUT,
        description="Change the profile picture of the instance",
        controller=ControllerType.PROFILE,
        requires_instance=True,
        parameters=(
            instance_param(),
            string_param(
                "picture",
                "Image URL or base64 content",
                required=True,
                example="https://example.com/picture.jpg",
                minLength=1,
            ),
        ),
    ),
    EndpointDescriptor(
        name="fetch-privacy-settings",
        path="/chat/fetchPrivacySettings/{instance}",
        method=HttpMethod.GET,
        description="Fetch the privacy settings of the instance",
        controller=ControllerType.PROFILE,
        requires_instance=True,
        parameters=(instance_param(),),
    ),
    EndpointDescriptor(
        name="update-privacy-settings",
        path="/chat/updatePrivacySettings/{instance}",
        method=HttpMethod.PUT,
        description="Update the privacy settings of the instance",
        controller=ControllerType.PROFILE,
        requires_instance=True,
        parameters=(
            instance_param(),
            EndpointParameter(
                name="privacySettings",
                type="object",
                required=True,
                description="Privacy settings to change",
                example={"readreceipts": "all", "last": "contacts"},
                constraints=PRIVACY_SETTINGS_SCHEMA,
            ),
        ),
    ),
    EndpointDescriptor(
        name="fetch-business-profile",
        path="/chat/fetchBusinessProfile/{instance}",
        method=HttpMethod.GET,
        description="Fetch the business profile of the instance",
        controller=ControllerType.PROFILE,
        requires_instance=True,
        parameters=(instance_param(),),
    ),
    EndpointDescriptor(
        name="update-business-profile",
        path="/chat/updateBusinessProfile/{instance}",
        method=HttpMethod.PUT,
        description="Update the business profile of the instance",
        controller=ControllerType.PROFILE,
        requires_instance=True,
        parameters=(
            instance_param(),
            EndpointParameter(
                name="business",
                type="object",
                required=True,
                description="Business profile fields to change",
                example={"description": "Example business", "email": "user@example.com"},
                constraints=BUSINESS_PROFILE_SCHEMA,
            ),
        ),
    ),
)
