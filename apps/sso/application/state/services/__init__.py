"""State Services."""

from apps.sso.application.state.services.state_manager import StateManager

__all__ = ["StateManager"]
