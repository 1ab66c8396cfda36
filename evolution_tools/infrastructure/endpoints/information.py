"""Information controller endpoints."""

from evolution_tools.domain.model.endpoint import ControllerType, EndpointDescriptor, HttpMethod

ENDPOINTS = (
    EndpointDescriptor(
        name="get-information",
        path="/get-information",
        method=HttpMethod.GET,
        description="Get version and status information about the Evolution API server",
        controller=ControllerType.INFORMATION,
    ),
)
