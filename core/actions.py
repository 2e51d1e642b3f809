import logging
from enum import Enum
from typing import Callable, Dict

logger = logging.getLogger(__name__)


class ClientAction(str, Enum):
    EDIT = "edit"
    PAUSE = "pause"
    RESUME = "resume"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"


ActionHandler = Callable[[int], None]


class ActionDispatcher:
    """
    Routes a row button (action + client id) to the handler registered for it.
    Every table button goes through dispatch(), so there is exactly one place
    that decides what an action does.
    """
    def __init__(self):
        self._handlers: Dict[ClientAction, ActionHandler] = {}

    def register(self, action: ClientAction, handler: ActionHandler) -> None:
        self._handlers[ClientAction(action)] = handler

    def dispatch(self, action: ClientAction, client_id: int) -> None:
        """
        Raises:
            KeyError: If no handler was registered for the action.
        """
        action = ClientAction(action)
        handler = self._handlers.get(action)
        if handler is None:
            raise KeyError(f"No handler registered for action '{action.value}'")
        logger.debug("Dispatching %s for client %s", action.value, client_id)
        handler(client_id)


def actions_for(active: bool) -> tuple:
    """Buttons shown on a client row: deactivate for active clients, activate otherwise."""
    toggle = ClientAction.DEACTIVATE if active else ClientAction.ACTIVATE
    return (ClientAction.EDIT, toggle, ClientAction.PAUSE, ClientAction.RESUME)
