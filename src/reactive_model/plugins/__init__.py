"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from reactive_model.plugins.bridge import HookBridge
from reactive_model.plugins.hookspecs import hookimpl
from reactive_model.plugins.manager import PluginManager

__all__ = ["HookBridge", "PluginManager", "hookimpl"]
