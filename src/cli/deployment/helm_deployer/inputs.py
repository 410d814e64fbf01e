"""Input resolution and normalization.

Inputs can come from three places. From lowest to highest priority:

1. Explicit parameters (action inputs / CLI options), looked up with
   underscores translated to hyphens, e.g. ``chart_version`` ->
   ``chart-version``
2. Fields of the webhook ``deployment`` object
3. Fields of the deployment's nested ``payload`` object

The resolver walks an ordered list of lookup sources and takes the first
value that is actually set. Structured inputs (values, value files,
plugins) may arrive either already structured or JSON-encoded in a string,
and are decoded here, at the boundary, with one fallback rule each.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from loguru import logger
from pydantic import ValidationError

from ..errors import MissingRequiredInput
from .constants import DeploymentConstants
from .models import PluginSpec, ResolvedConfig
from .naming import release_name

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0"})

# Sentinel for a string that is not valid JSON
_UNPARSED = object()


def is_set(value: Any) -> bool:
    """Return True when a looked-up value should win over lower sources."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return value != 0
    return True


# =============================================================================
# Lookup sources
# =============================================================================


class InputSource(Protocol):
    """A single tier of input lookup."""

    label: str

    def lookup(self, name: str) -> Any: ...


class ParameterSource:
    """Explicit parameters keyed by their external (hyphenated) name."""

    label = "parameter"

    def __init__(self, parameters: Mapping[str, Any]) -> None:
        self._parameters = parameters

    def lookup(self, name: str) -> Any:
        return self._parameters.get(name.replace("_", "-"))


class MappingSource:
    """Fields of a webhook object, keyed by the input name as-is."""

    def __init__(self, label: str, fields: Mapping[str, Any]) -> None:
        self.label = label
        self._fields = fields

    def lookup(self, name: str) -> Any:
        return self._fields.get(name)


class InputResolver:
    """Resolves named inputs across parameters and a deployment event."""

    def __init__(
        self,
        parameters: Mapping[str, Any],
        deployment: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            parameters: Explicit inputs keyed by external name (e.g. "repo-alias")
            deployment: The webhook deployment object, if any
        """
        self._parameters = ParameterSource(parameters)
        sources: list[InputSource] = []
        if deployment:
            payload = deployment.get("payload")
            if isinstance(payload, Mapping):
                sources.append(MappingSource("deployment payload", payload))
            sources.append(MappingSource("deployment", deployment))
        sources.append(self._parameters)
        self._sources = tuple(sources)

    @property
    def sources(self) -> tuple[InputSource, ...]:
        """Lookup sources, highest priority first."""
        return self._sources

    def resolve(self, name: str, *, required: bool = False) -> Any:
        """Resolve an input, taking the highest-priority set value.

        Args:
            name: Input name (e.g. "chart_version" or "repo-alias")
            required: Raise when no source provides a value

        Returns:
            The raw resolved value, or None when unset

        Raises:
            MissingRequiredInput: If required and nothing is set
        """
        for source in self._sources:
            value = source.lookup(name)
            if is_set(value):
                if source is not self._parameters:
                    logger.debug(f"input {name} taken from {source.label}")
                return value

        if required:
            raise MissingRequiredInput(name)
        return None

    def resolve_flag(self, name: str) -> Any:
        """Resolve a boolean input.

        Unlike ``resolve``, an explicit ``False`` (or ``0``) is a value, so a
        deployment payload of ``{"atomic": false}`` overrides the parameter.

        Returns:
            The raw resolved value, or None when no source provides one
        """
        for source in self._sources:
            value = source.lookup(name)
            if value is not None and value != "":
                return value
        return None

    def parameter(self, name: str) -> Any:
        """Resolve an input from explicit parameters only.

        Used for inputs a deployment event must not override.
        """
        value = self._parameters.lookup(name)
        return value if is_set(value) else None


# =============================================================================
# Decoders
# =============================================================================


def _parse(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return _UNPARSED


def _text(value: Any) -> str | None:
    if not is_set(value):
        return None
    return value if isinstance(value, str) else str(value)


def _decode_sequence(raw: Any) -> list[Any]:
    """Decode a string-or-sequence input into a list.

    A string that is not valid JSON is taken as a single element. Anything
    that does not end up as a sequence yields an empty list.
    """
    if not is_set(raw):
        return []
    if isinstance(raw, str):
        parsed = _parse(raw)
        if parsed is _UNPARSED:
            return [raw]
        raw = parsed
    if isinstance(raw, Sequence) and not isinstance(raw, str):
        return list(raw)
    return []


def decode_values(raw: Any) -> dict[str, Any] | str:
    """Decode the ``values`` input.

    Mappings pass through. Strings are parsed as JSON; a string that does
    not decode to a mapping is kept as an opaque string.
    """
    if not is_set(raw):
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, str):
        parsed = _parse(raw)
        if isinstance(parsed, Mapping):
            return dict(parsed)
        return raw
    logger.warning(f"Ignoring values of unsupported type {type(raw).__name__}")
    return {}


def decode_value_files(raw: Any) -> list[str]:
    """Decode the ``value_files`` input into an ordered list of paths."""
    return [str(f) for f in _decode_sequence(raw) if is_set(f)]


def decode_plugins(raw: Any) -> list[PluginSpec]:
    """Decode the ``plugins`` input into plugin specs.

    String entries are plugin URLs; mapping entries carry ``url`` and an
    optional ``version``. Entries without a usable url are dropped.
    """
    plugins: list[PluginSpec] = []
    for entry in _decode_sequence(raw):
        if isinstance(entry, str):
            entry = {"url": entry}
        if not isinstance(entry, Mapping):
            logger.warning(f"Ignoring plugin entry of type {type(entry).__name__}")
            continue

        url = entry.get("url")
        if not isinstance(url, str) or not url.strip():
            logger.warning(f"plugin.url could not be found in {dict(entry)}")
            continue

        try:
            plugins.append(
                PluginSpec.model_validate({"url": url, "version": entry.get("version")})
            )
        except ValidationError as e:
            logger.warning(f"Ignoring invalid plugin entry {dict(entry)}: {e}")
    return plugins


def decode_bool(raw: Any, default: bool) -> bool:
    """Decode a boolean input given as a bool, number, or string."""
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        logger.warning(f"Unrecognized boolean '{raw}', using {default}")
        return default
    return bool(raw)


# =============================================================================
# Config assembly
# =============================================================================


def build_config(
    resolver: InputResolver, constants: DeploymentConstants | None = None
) -> ResolvedConfig:
    """Resolve every input and assemble the immutable run configuration.

    Args:
        resolver: Input resolver for this run
        constants: Optional deployment constants

    Returns:
        The resolved configuration

    Raises:
        MissingRequiredInput: If release, namespace or chart is missing
    """
    constants = constants or DeploymentConstants()

    track = _text(resolver.resolve("track")) or constants.DEFAULT_TRACK
    app_name = _text(resolver.resolve("release", required=True))
    namespace = _text(resolver.resolve("namespace", required=True))
    chart = _text(resolver.resolve("chart", required=True))

    config = ResolvedConfig(
        track=track,
        app_name=app_name,
        release=release_name(app_name, track),
        namespace=namespace,
        chart=chart,
        chart_version=_text(resolver.resolve("chart_version")),
        values=decode_values(resolver.resolve("values")),
        value_files=tuple(decode_value_files(resolver.resolve("value_files"))),
        plugins=tuple(decode_plugins(resolver.resolve("plugins"))),
        task=_text(resolver.resolve("task")),
        version=_text(resolver.resolve("version")),
        remove_canary=decode_bool(resolver.resolve_flag("remove_canary"), False),
        timeout=_text(resolver.resolve("timeout")),
        dry_run=decode_bool(resolver.parameter("dry-run"), False),
        atomic=decode_bool(resolver.resolve_flag("atomic"), True),
        helm=_text(resolver.resolve("helm")) or constants.DEFAULT_HELM,
        repo=_text(resolver.resolve("repo")),
        repo_alias=_text(resolver.resolve("repo-alias")),
        repo_username=_text(resolver.resolve("repo-username")),
        repo_password=_text(resolver.resolve("repo-password")),
    )

    for key, value in config.redacted().items():
        logger.debug(f'param: {key} = "{value}"')
    return config
