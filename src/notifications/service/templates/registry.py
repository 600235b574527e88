"""Template registry for lifecycle emails."""

from notifications.enums import LifecycleEvent
from notifications.service.templates.base import LifecycleEmailTemplate


class TemplateRegistry:
    """Registry for lifecycle email templates."""

    def __init__(self) -> None:
        self._templates: dict[LifecycleEvent, LifecycleEmailTemplate] = {}

    def register(self, template: LifecycleEmailTemplate) -> None:
        self._templates[template.lifecycle_event] = template

    def get(self, lifecycle_event: LifecycleEvent | str) -> LifecycleEmailTemplate:
        """Get the template for a lifecycle event.

        Raises:
            ValueError: If no template is registered
        """
        if isinstance(lifecycle_event, str):
            lifecycle_event = LifecycleEvent(lifecycle_event)

        template = self._templates.get(lifecycle_event)
        if not template:
            raise ValueError(f"No template registered for {lifecycle_event}")
        return template


# Global registry instance
_registry = TemplateRegistry()


def register_template(template: LifecycleEmailTemplate) -> None:
    _registry.register(template)


def get_template(lifecycle_event: LifecycleEvent | str) -> LifecycleEmailTemplate:
    return _registry.get(lifecycle_event)
