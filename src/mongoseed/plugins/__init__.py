"""Extension layer — lifecycle hooks via pluggy.

Discovery: entry_points (pip-installed) in the ``mongoseed.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from mongoseed.plugins.manager import PluginManager, hookimpl

__all__ = ["PluginManager", "hookimpl"]
