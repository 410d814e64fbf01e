"""Release naming and chart targeting."""

from __future__ import annotations

from .constants import DeploymentConstants

_CONSTANTS = DeploymentConstants()


def release_name(app_name: str, track: str) -> str:
    """Return the release name for an app on a track.

    The stable track keeps the bare app name; every other track is
    suffixed, e.g. ``myapp-canary``.
    """
    if track != _CONSTANTS.DEFAULT_TRACK:
        return f"{app_name}-{track}"
    return app_name


def chart_ref(chart: str) -> str:
    """Resolve the chart alias ``app`` to the bundled generic chart."""
    if chart == _CONSTANTS.APP_CHART_ALIAS:
        return _CONSTANTS.APP_CHART_PATH
    return chart
