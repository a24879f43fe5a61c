"""Platform auto-detection and default wiring."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from grablink.formatters import default_formatters
from grablink.registry import HandlerRegistry
from grablink.selector import Selector

if TYPE_CHECKING:
    from grablink._base import EditingSurface, Prompter
    from grablink.config import Settings
    from grablink.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


def detect_platform() -> str:
    """Return the current platform identifier."""
    if sys.platform == "win32":
        return "windows"
    elif sys.platform == "darwin":
        return "macos"
    elif sys.platform.startswith("linux"):
        return "linux"
    else:
        raise RuntimeError(f"Unsupported platform: {sys.platform}")


def get_registry(platform: str | None = None) -> HandlerRegistry:
    """Return a fresh registry of the applications shipped for ``platform``.

    Args:
        platform: Force a specific platform ('macos'). If None, auto-detects
                  from sys.platform.

    Raises:
        RuntimeError: If no providers exist for the platform.
    """
    if platform is None:
        platform = detect_platform()

    if platform == "macos":
        from grablink.providers.macos import macos_apps

        return HandlerRegistry(macos_apps())
    raise RuntimeError(
        f"No link providers available for platform '{platform}'. Currently supported: macos."
    )


def build_dispatcher(
    settings: Settings,
    surface: EditingSurface,
    prompter: Prompter,
    *,
    apps: HandlerRegistry | None = None,
) -> Dispatcher:
    """Wire registries, selector and surface from the loaded settings.

    ``settings.disabled_apps`` is applied through the registry's ``remove``
    operation; unknown ids there are logged and ignored.
    """
    from grablink.dispatcher import Dispatcher

    if apps is None:
        apps = get_registry()
    for app_id in settings.disabled_apps:
        if app_id in apps:
            apps.remove(app_id)
        else:
            logger.warning("Cannot disable unknown application '%s'", app_id)

    selector = Selector(
        apps,
        default_formatters(),
        prompter,
        preferred_app=settings.preferred_app,
        preferred_link_type=settings.preferred_link_type,
        context_rules=settings.context_rules,
    )
    return Dispatcher(selector, surface)
