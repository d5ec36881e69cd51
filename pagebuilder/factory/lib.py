"""Element factory.

Creates new elements from a per-kind strategy registry. Each strategy
supplies the default content, settings and `default`-breakpoint
declarations of one element kind; the factory assigns fresh ids, links
parents and compiles the utility classes.

Creation failures never propagate: they are logged as ConfigurationError
records and reported as a None result.

Example:
    >>> factory = ElementFactory()
    >>> button = factory.create("Button", page_id="page-1")
    >>> button.content
    'Click me'
"""

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pagebuilder.compiler import compile_utility_classes
from pagebuilder.core.errors import CompilationError, ConfigurationError
from pagebuilder.core.log import get_logger
from pagebuilder.model import Element, ElementTemplate, ResponsiveStyles
from pagebuilder.schema import ElementType, is_container_type, validate_element_type

logger = get_logger("pagebuilder.factory")


@dataclass(frozen=True)
class BuilderState:
    """Inputs handed to a creation strategy.

    Attributes:
        id: Fresh element id.
        type: Element kind being built.
        page_id: Owning page.
        parent_id: Parent container id, None for roots.
    """

    id: str
    type: ElementType
    page_id: str
    parent_id: str | None = None


Strategy = Callable[[BuilderState], Element]


def build_element(
    state: BuilderState,
    *,
    content: str = "",
    src: str | None = None,
    href: str | None = None,
    styles: ResponsiveStyles | None = None,
    settings: dict[str, Any] | None = None,
) -> Element:
    """Build a childless element from a strategy's defaults.

    Args:
        state: Builder inputs.
        content: Default text content.
        src: Default media source.
        href: Default link target.
        styles: Default responsive styles.
        settings: Default kind-specific settings.

    Returns:
        New Element without children.
    """
    return Element(
        id=state.id,
        type=state.type,
        parent_id=state.parent_id or None,
        page_id=state.page_id,
        content=content,
        src=src,
        href=href,
        styles=styles or {},
        settings=settings,
    )


# =============================================================================
# Strategy Registry
# =============================================================================

# Strategy registry - populated by the strategies module on import
_registry: dict[ElementType, Strategy] = {}


def register_strategy(element_type: ElementType) -> Callable[[Strategy], Strategy]:
    """Register a creation strategy for an element kind.

    Args:
        element_type: Kind the decorated function builds.

    Returns:
        Decorator returning the function unchanged.

    Example:
        >>> @register_strategy(ElementType.TEXT)
        ... def build_text(state):
        ...     return build_element(state, content="Text")
    """

    def decorator(strategy: Strategy) -> Strategy:
        _registry[ElementType(element_type)] = strategy
        return strategy

    return decorator


def get_strategy(element_type: ElementType | str) -> Strategy:
    """Get the creation strategy of an element kind.

    Raises:
        ConfigurationError: If the kind is unknown or has no strategy.
    """
    resolved = validate_element_type(element_type)
    if resolved is None:
        raise ConfigurationError(
            f"Unknown element type: {element_type!r}",
            code="unknown_type",
            context={"type": str(element_type)},
        )
    if resolved not in _registry:
        _import_strategies()
        if resolved not in _registry:
            raise ConfigurationError(
                f"No strategy found for element type: {resolved.value}",
                code="missing_strategy",
                context={"type": resolved.value},
            )
    return _registry[resolved]


def list_strategies() -> list[ElementType]:
    """List every element kind with a registered strategy."""
    _import_strategies()
    return list(_registry.keys())


def _import_strategies() -> None:
    """Import the strategies module to trigger registration."""
    import importlib

    importlib.import_module("pagebuilder.factory.strategies")


# =============================================================================
# Factory
# =============================================================================


def _uuid() -> str:
    return str(uuid.uuid4())


class ElementFactory:
    """Creates elements and template clones with fresh ids.

    Args:
        id_factory: Zero-argument callable producing unique ids.
            Defaults to uuid4 strings.
    """

    def __init__(self, id_factory: Callable[[], str] | None = None):
        self._id_factory = id_factory or _uuid

    def create(
        self,
        element_type: ElementType | str,
        page_id: str,
        parent_id: str | None = None,
    ) -> Element | None:
        """Create a new element with the kind's defaults.

        Args:
            element_type: Kind to create.
            page_id: Owning page; must be non-empty.
            parent_id: Parent container id, None for a root.

        Returns:
            New Element, or None if creation failed (the failure is logged).
        """
        try:
            _check_page_id(page_id)
            state = BuilderState(
                id=self._id_factory(),
                type=self._resolve_type(element_type),
                page_id=page_id,
                parent_id=parent_id,
            )
            element = self._build(state)
        except ConfigurationError as e:
            _log_failure(e)
            return None

        logger.debug(f"Created {element.type} element {element.id}")
        return element

    def create_from_template(
        self,
        template: ElementTemplate,
        page_id: str,
        parent_id: str | None = None,
    ) -> Element | None:
        """Clone a template (and its children) with fresh ids.

        Template content, src, href, settings and styles are copied
        verbatim; the kind's strategy defaults are not applied. Classes
        come from the template when present, otherwise they are compiled
        from its styles.

        Args:
            template: Blueprint to clone.
            page_id: Owning page; must be non-empty.
            parent_id: Parent of the cloned root, None for a root.

        Returns:
            New Element subtree, or None if creation failed (logged).
        """
        try:
            _check_page_id(page_id)
            element = self._clone(template, page_id, parent_id)
        except ConfigurationError as e:
            _log_failure(e)
            return None

        logger.debug(f"Created {element.type} element {element.id} from template")
        return element

    # -------------------------------------------------------------------------

    def _resolve_type(self, element_type: ElementType | str) -> ElementType:
        resolved = validate_element_type(element_type)
        if resolved is None:
            raise ConfigurationError(
                f"Unknown element type: {element_type!r}",
                code="unknown_type",
                context={"type": str(element_type)},
            )
        return resolved

    def _build(self, state: BuilderState) -> Element:
        strategy = get_strategy(state.type)
        try:
            element = strategy(state)
            return element.model_copy(
                update={"tailwind_styles": compile_utility_classes(element.styles)}
            )
        except (CompilationError, ValueError) as e:
            raise _build_failed(state.type, state.id, e) from e

    def _clone(
        self, template: ElementTemplate, page_id: str, parent_id: str | None
    ) -> Element:
        element_type = self._resolve_type(template.type)
        if template.elements and not is_container_type(element_type):
            raise ConfigurationError(
                f"Template of leaf type {element_type.value} declares children",
                code="invalid_template",
                context={"type": element_type.value},
            )

        element_id = self._id_factory()
        styles = template.styles or {}
        try:
            tailwind_styles = template.tailwind_styles or compile_utility_classes(
                styles
            )
        except CompilationError as e:
            raise _build_failed(element_type, element_id, e) from e

        children = [
            self._clone(child, page_id, element_id)
            for child in template.elements or []
        ]
        return Element(
            id=element_id,
            type=element_type,
            parent_id=parent_id or None,
            page_id=page_id,
            content=template.content,
            src=template.src,
            href=template.href,
            styles=styles,
            tailwind_styles=tailwind_styles,
            settings=template.settings if template.settings is not None else {},
            elements=children,
        )


def _build_failed(
    element_type: ElementType, element_id: str, error: Exception
) -> ConfigurationError:
    return ConfigurationError(
        f"Failed to build {element_type.value} element: {error}",
        code="build_failed",
        context={"type": element_type.value, "id": element_id},
    )


def _check_page_id(page_id: str) -> None:
    if not isinstance(page_id, str) or not page_id.strip():
        raise ConfigurationError(
            "Cannot create an element without a page id",
            code="missing_page_id",
            context={"page_id": page_id},
        )


def _log_failure(error: ConfigurationError) -> None:
    logger.error(f"Element creation failed [{error.code}]: {error} {error.context}")


# =============================================================================
# Module-level Conveniences
# =============================================================================

_default_factory = ElementFactory()


def create_element(
    element_type: ElementType | str,
    page_id: str,
    parent_id: str | None = None,
) -> Element | None:
    """Create an element with the default factory."""
    return _default_factory.create(element_type, page_id, parent_id)


def create_element_from_template(
    template: ElementTemplate,
    page_id: str,
    parent_id: str | None = None,
) -> Element | None:
    """Clone a template with the default factory."""
    return _default_factory.create_from_template(template, page_id, parent_id)


__all__ = [
    "BuilderState",
    "Strategy",
    "build_element",
    # Registry
    "register_strategy",
    "get_strategy",
    "list_strategies",
    # Factory
    "ElementFactory",
    "create_element",
    "create_element_from_template",
]
