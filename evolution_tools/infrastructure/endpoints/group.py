"""Group controller endpoints: creating and administering groups."""

from evolution_tools.domain.model.endpoint import (
    ControllerType,
    EndpointDescriptor,
    EndpointParameter,
    HttpMethod,
)
from evolution_tools.infrastructure.endpoints.common import (
    PHONE_NUMBER_CONSTRAINTS,
    group_jid_param,
    instance_param,
    string_param,
)


def _participants_param(max_items: int, description: str) -> EndpointParameter:
    return EndpointParameter(
        name="participants",
        type="array",
        required=True,
        description=description,
        example=["5511999999999"],
        constraints={
            "minItems": 1,
            "maxItems": max_items,
            "items": {"type": "string", **PHONE_NUMBER_CONSTRAINTS},
        },
    )


ENDPOINTS = (
    EndpointDescriptor(
        name="create-group",
        path="/group/create/{instance}",
        method=HttpMethod.POST,
        description="Create a group",
        controller=ControllerType.GROUP,
        requires_instance=True,
        parameters=(
            instance_param(),
            string_param("subject", "Group name", required=True, example="Example Group", minLength=1, maxLength=100),
            string_param("description", "Group description", maxLength=512),
            _participants_param(256, "Phone numbers of the initial participants"),
        ),
    ),
    EndpointDescriptor(
        name="update-group-picture",
        path="/group/updateGroupPicture/{instance}",
        method=HttpMethod.PUT,
        description="Change the group picture",
        controller=ControllerType.GROUP,
        requires_instance=True,
        parameters=(
            instance_param(),
            group_jid_param(),
            string_param(
                "image",
                "Image URL or base64 content",
                required=True,
                example="https://example.com/group.jpg",
                minLength=1,
            ),
        ),
    ),
    EndpointDescriptor(
        name="update-group-subject",
        path="/group/updateGroupSubject/{instance}",
        method=HttpMethod.PUT,
        description="Rename a group",
        controller=ControllerType.GROUP,
        requires_instance=True,
        parameters=(
            instance_param(),
            group_jid_param(),
            string_param("subject", "New group name", required=True, minLength=1, maxLength=100),
        ),
    ),
    EndpointDescriptor(
        name="update-group-description",
        path="/group/updateGroupDescription/{instance}",
        method=HttpMethod.PUT,
        description="Change the group description",
        controller=ControllerType.GROUP,
        requires_instance=True,
        parameters=(
            instance_param(),
            group_jid_param(),
            string_param("description", "New group description", required=True, maxLength=512),
        ),
    ),
    EndpointDescriptor(
        name="fetch-invite-code",
        path="/group/fetchInviteCode/{instance}",
        method=HttpMethod.POST,
        description="Get the invite code of a group",
        controller=ControllerType.GROUP,
        requires_instance=True,
        tool_name="fetch_group_invite_code",
        parameters=(instance_param(), group_jid_param()),
    ),
    EndpointDescriptor(
        name="revoke-invite-code",
        path="/group/revokeInviteCode/{instance}",
        method=HttpMethod.PUT,
        description="Revoke the invite code of a group and issue a new one",
        controller=ControllerType.GROUP,
        requires_instance=True,
        tool_name="revoke_group_invite_code",
        parameters=(instance_param(), group_jid_param()),
    ),
    EndpointDescriptor(
        name="update-participant",
        path="/group/updateParticipant/{instance}",
        method=HttpMethod.PUT,
        description="Add, remove, promote or demote group participants",
        controller=ControllerType.GROUP,
        requires_instance=True,
        tool_name="update_group_participant",
        parameters=(
            instance_param(),
            group_jid_param(),
            string_param(
                "action",
                "Action applied to the participants",
                required=True,
                example="add",
                enum=["add", "remove", "promote", "demote"],
            ),
            _participants_param(50, "Phone numbers of the participants to update"),
        ),
    ),
    EndpointDescriptor(
        name="leave-group",
        path="/group/leaveGroup/{instance}",
        method=HttpMethod.DELETE,
        description="Leave a group",
        controller=ControllerType.GROUP,
        requires_instance=True,
        parameters=(instance_param(), group_jid_param()),
    ),
    EndpointDescriptor(
        name="fetch-group-info",
        path="/group/fetchAllGroups/{instance}",
        method=HttpMethod.GET,
        description="List the groups of an instance",
        controller=ControllerType.GROUP,
        requires_instance=True,
        parameters=(
            instance_param(),
            EndpointParameter(
                name="getParticipants",
                type="boolean",
                description="Include the participant list of each group",
                example=False,
            ),
        ),
    ),
)
