"""Per-application link providers.

Only macOS ships providers; each one is an opaque automation call behind
the same zero-argument interface.
"""

from grablink.providers._osascript import run_applescript

__all__ = ["run_applescript"]
