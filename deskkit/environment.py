"""Environment variables that configure a Qt Quick application at start-up."""

from __future__ import annotations

import os
from typing import MutableMapping, Optional

_QT_ENVIRONMENT = (
    ("QT_AUTO_SCREEN_SCALE_FACTOR", "1"),
    ("QT_ENABLE_HIGHDPI_SCALING", "0"),
    ("QT_LOGGING_RULES", "qt.qml.connections=false"),
    ("QT_QUICK_CONTROLS_CONF", ":/qtquickcontrols2.conf"),
    ("QML_COMPAT_RESOLVE_URLS_ON_ASSIGNMENT", "1"),
)


def qt_environment() -> dict[str, str]:
    """Return a fresh mapping of the start-up variables."""
    return dict(_QT_ENVIRONMENT)


def apply_qt_environment(
    environ: Optional[MutableMapping[str, str]] = None,
) -> MutableMapping[str, str]:
    """Set the start-up variables in environ (the process environment by default)."""
    target = os.environ if environ is None else environ
    target.update(_QT_ENVIRONMENT)
    return target