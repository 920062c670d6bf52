"""Dashboard state and console presentation."""

from debt_tracker.ui.render import ConsoleRenderer
from debt_tracker.ui.state import AppState, Modal

__all__ = ["AppState", "ConsoleRenderer", "Modal"]
