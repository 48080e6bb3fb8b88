"""Canonical Pydantic models shared across all adcomponents modules.

The models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`PluginPathsConfig`, :class:`OutputConfig` and :class:`GlobalConfig`.

**Component identity** -- :class:`ComponentDescriptor`, the immutable
``(extension, group, component)`` triple together with its colon-joined
identifier and the class name a component file must define.

**Delivery records** -- :class:`DeliveryData`, the record handed to
delivery-log components.

All models use Pydantic v2.
"""

from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from adcomponents.exceptions import InvalidIdentifierError

IDENTIFIER_SEPARATOR = ":"
CLASS_PREFIX = "Plugins"


def ucfirst(value: str) -> str:
    """Upper-case the first character of *value*, leaving the rest untouched."""
    return value[:1].upper() + value[1:]


_SWITCH_OFF = ("", "0", "false", "off", "no", "n", "f")


def is_switched_on(value: Any) -> bool:  # noqa: ANN401
    """Interpret a group switch value.

    Empty values, zero and the strings in ``_SWITCH_OFF`` (case-insensitive)
    are off; everything else is on.
    """
    if isinstance(value, str):
        return value.strip().lower() not in _SWITCH_OFF
    return bool(value)


GroupSwitch = Annotated[bool, BeforeValidator(is_switched_on)]


# --- Configuration ---


class PluginPathsConfig(BaseModel):
    """Filesystem locations of plugin code."""

    extensions: Optional[str] = Field(
        default=None,
        description="Root directory holding <extension>/<group>/<component>.py "
        "files. Relative paths resolve against the working directory; unset "
        "means the plugins bundled with adcomponents.",
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/adcomponents/config.json``.

    Loaded and saved by :func:`~adcomponents.config.load_global_config` and
    :func:`~adcomponents.config.save_global_config`. See
    :func:`~adcomponents.config.resolve_config` for the precedence chain.

    ``plugin_group_components`` maps a component group name to whether it is
    switched on. Values such as ``"0"``, ``"off"`` or ``""`` read as off
    (see :func:`is_switched_on`). It is only consulted for the extensions listed in
    :data:`~adcomponents.components.manager.REFACTORED_EXTENSIONS`.
    """

    plugin_paths: PluginPathsConfig = Field(default_factory=PluginPathsConfig)
    plugin_group_components: dict[str, GroupSwitch] = Field(default_factory=dict)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Component identity ---


class ComponentDescriptor(BaseModel):
    """Identifies a component by extension, group and component name.

    ``group`` may be empty, in which case the component file sits directly in
    the extension directory.

    Example::

        >>> d = ComponentDescriptor(extension="deliveryLog", group="ox_click", component="ox_click")
        >>> d.identifier
        'deliveryLog:ox_click:ox_click'
        >>> ComponentDescriptor.parse(d.identifier) == d
        True
    """

    model_config = ConfigDict(frozen=True)

    extension: str
    group: str = ""
    component: str = ""

    @property
    def identifier(self) -> str:
        """The colon-joined ``extension:group:component`` string."""
        return IDENTIFIER_SEPARATOR.join((self.extension, self.group, self.component))

    @property
    def class_name(self) -> str:
        """The class name a component file must define for this triple."""
        return "_".join(
            (
                CLASS_PREFIX,
                ucfirst(self.extension),
                ucfirst(self.group),
                ucfirst(self.component),
            )
        )

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.extension, self.group, self.component)

    @classmethod
    def parse(cls, identifier: str) -> ComponentDescriptor:
        """Parse an ``extension:group:component`` identifier.

        Args:
            identifier: The colon-joined identifier.

        Returns:
            The matching descriptor.

        Raises:
            InvalidIdentifierError: If *identifier* is not a string, does
                not split into exactly three parts, or has an empty extension.
        """
        if not isinstance(identifier, str):
            raise InvalidIdentifierError(
                f"Component identifier must be a string, got {type(identifier).__name__}"
            )
        parts = identifier.split(IDENTIFIER_SEPARATOR)
        if len(parts) != 3:
            raise InvalidIdentifierError(
                f"Invalid component identifier '{identifier}': expected "
                f"'extension:group:component', got {len(parts)} part(s)"
            )
        extension, group, component = parts
        if not extension:
            raise InvalidIdentifierError(
                f"Invalid component identifier '{identifier}': empty extension"
            )
        return cls(extension=extension, group=group, component=component)


# --- Delivery ---


class DeliveryData(BaseModel):
    """A delivery-engine record passed to delivery-log components.

    Only the fields used for bucket aggregation are declared; anything else
    the engine attaches is preserved in ``model_extra``. Values are kept as
    given, without type coercion, and a field the engine never supplied stays
    unset (see ``model_fields_set``) rather than becoming ``None``.
    """

    model_config = ConfigDict(extra="allow")

    interval_start: Any = Field(
        default=None, description="Start of the operation interval, 'YYYY-MM-DD HH:MM:SS'"
    )
    creative_id: Any = None
    zone_id: Any = None
