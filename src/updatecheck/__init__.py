"""
updatecheck: background update notifications for command-line tools.

- Once-per-day debounce persisted under the user's config directory
- Fire-and-forget check, joined when the host is ready to print
- Never fails the host program
"""

__version__ = "0.1.0"

from updatecheck.coordinator import Coordinator  # noqa: E402

__all__ = ["Coordinator", "__version__"]
