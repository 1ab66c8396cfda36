"""Endpoint catalog.

Read-only index over the static endpoint descriptors of every controller.
"""

import logging
from typing import Any, Iterable, Optional

from evolution_tools.domain.model.endpoint import (
    ControllerType,
    EndpointDescriptor,
    HttpMethod,
    ParameterLocation,
)
from evolution_tools.infrastructure.endpoints import (
    chat,
    group,
    information,
    instance,
    message,
    profile,
    webhook,
)

logger = logging.getLogger(__name__)

ALL_ENDPOINTS: tuple[EndpointDescriptor, ...] = (
    *instance.ENDPOINTS,
    *message.ENDPOINTS,
    *chat.ENDPOINTS,
    *group.ENDPOINTS,
    *profile.ENDPOINTS,
    *webhook.ENDPOINTS,
    *information.ENDPOINTS,
)


class EndpointCatalog:
    """
    Lookup and statistics over endpoint descriptors.

    Defaults to the full Evolution API catalog; tests pass their own
    descriptors.
    """

    def __init__(self, endpoints: Optional[Iterable[EndpointDescriptor]] = None) -> None:
        self._endpoints: list[EndpointDescriptor] = list(
            ALL_ENDPOINTS if endpoints is None else endpoints
        )
        self._by_name: dict[str, EndpointDescriptor] = {}
        for endpoint in self._endpoints:
            self._by_name.setdefault(endpoint.name, endpoint)

    def __len__(self) -> int:
        return len(self._endpoints)

    def __iter__(self):
        return iter(self._endpoints)

    def get_endpoints(self) -> list[EndpointDescriptor]:
        return list(self._endpoints)

    def get_endpoint(self, name: str) -> Optional[EndpointDescriptor]:
        return self._by_name.get(name)

    def get_endpoints_by_controller(self, controller: ControllerType | str) -> list[EndpointDescriptor]:
        controller = ControllerType(controller)
        return [e for e in self._endpoints if e.controller == controller]

    def get_controllers(self) -> list[ControllerType]:
        """Controllers that have at least one endpoint, in declaration order."""
        seen = {e.controller for e in self._endpoints}
        return [c for c in ControllerType if c in seen]

    def get_instance_endpoints(self) -> list[EndpointDescriptor]:
        return [e for e in self._endpoints if e.requires_instance]

    def get_global_endpoints(self) -> list[EndpointDescriptor]:
        return [e for e in self._endpoints if not e.requires_instance]

    def search(self, query: str) -> list[EndpointDescriptor]:
        """Case-insensitive substring search over name, description and path."""
        needle = query.lower()
        return [
            e
            for e in self._endpoints
            if needle in e.name.lower()
            or needle in e.description.lower()
            or needle in e.path.lower()
        ]

    def stats(self) -> dict[str, Any]:
        by_controller = {c.value: 0 for c in ControllerType}
        by_method = {m.value: 0 for m in HttpMethod}
        for endpoint in self._endpoints:
            by_controller[endpoint.controller.value] += 1
            by_method[endpoint.method.value] += 1
        requires_instance = len(self.get_instance_endpoints())
        return {
            "total": len(self._endpoints),
            "by_controller": by_controller,
            "by_method": by_method,
            "requires_instance": requires_instance,
            "global": len(self._endpoints) - requires_instance,
        }

    def validate(self) -> list[str]:
        """Check the catalog for structural problems.

        Returns:
            Error messages; empty when the catalog is consistent
        """
        errors: list[str] = []
        seen: set[str] = set()

        for index, endpoint in enumerate(self._endpoints):
            label = endpoint.name or f"#{index}"
            if not endpoint.name:
                errors.append(f"Endpoint at index {index} has no name")
            if not endpoint.path:
                errors.append(f"Endpoint '{label}' has no path")
            if not endpoint.description:
                errors.append(f"Endpoint '{label}' has no description")

            if endpoint.name in seen:
                errors.append(f"Duplicate endpoint name: {endpoint.name}")
            seen.add(endpoint.name)

            path_params = {
                p.name for p in endpoint.parameters if p.location == ParameterLocation.PATH
            }
            for placeholder in endpoint.placeholders:
                if placeholder not in path_params:
                    errors.append(
                        f"Endpoint '{label}' path placeholder '{{{placeholder}}}' "
                        f"has no matching path parameter"
                    )

        if errors:
            logger.warning(f"Endpoint catalog has {len(errors)} problem(s)")
        return errors
