"""Hook loading for acmewell.

Public API::

    from acmewell.hooks import load_callable

    on_challenge = load_callable("myapp.acme.challenge_finished")
"""

from acmewell.hooks.loader import HookLoadError, load_callable

__all__ = ["HookLoadError", "load_callable"]
