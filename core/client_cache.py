from typing import Iterable, Iterator, List, Optional

from models.client import Client


class ClientCache:
    """
    Session-scoped copy of the last successfully loaded client list.

    Only used for local lookups (name -> id, id -> display name). It is at most
    as fresh as the last successful load and is never authoritative.
    The only mutation is replace(): the whole collection is swapped at once.
    """
    def __init__(self, clients: Optional[Iterable[Client]] = None):
        self._clients: List[Client] = list(clients or [])

    def replace(self, clients: Iterable[Client]) -> None:
        self._clients = list(clients)

    def get(self, client_id: Optional[int]) -> Optional[Client]:
        if client_id is None:
            return None
        for c in self._clients:
            if c.id == client_id:
                return c
        return None

    def display_name(self, client_id: Optional[int]) -> str:
        """Full name for a client id, falling back to '#<id>' when it isn't cached."""
        c = self.get(client_id)
        if c and c.full_name:
            return c.full_name
        return f"#{client_id}" if client_id is not None else "-"

    def __iter__(self) -> Iterator[Client]:
        return iter(list(self._clients))

    def __len__(self) -> int:
        return len(self._clients)
