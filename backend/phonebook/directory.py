"""
Phonebook Backend — Contact Directory (In-Memory State)
========================================================

What:  The single owned collection of contacts, plus the FastAPI dependency
       that hands it to route handlers.
How:   ContactDirectory wraps an ordered list guarded by a lock. The app
       factory creates one instance and stores it on `app.state.directory`;
       `get_directory` reads it back per request.
Who:   Used by the service layer (through route handlers).
When:  Created once per application instance; lives until process exit.

Ordering:
    The list preserves insertion order. Deletion removes elements in place,
    so the remaining contacts keep their relative order.

Locking:
    Every operation runs under one threading.Lock. Handlers are async and run
    on a single event loop, but the lock also keeps the directory safe when
    it is used from sync code in a thread pool.
"""

import threading
from typing import Iterable, List, Optional

from starlette.requests import Request

from phonebook.models.contact import Contact, seed_contacts


class ContactDirectory:
    """
    Ordered, process-local collection of Contact records.

    Methods return copies of the underlying list so callers can iterate
    without holding the lock.
    """

    def __init__(self, contacts: Optional[Iterable[Contact]] = None):
        self._contacts: List[Contact] = list(contacts) if contacts is not None else []
        self._lock = threading.Lock()

    @classmethod
    def seeded(cls) -> "ContactDirectory":
        """Directory pre-populated with the startup seed entries."""
        return cls(seed_contacts())

    def __len__(self) -> int:
        with self._lock:
            return len(self._contacts)

    def all(self) -> List[Contact]:
        with self._lock:
            return list(self._contacts)

    def find(self, contact_id: int) -> Optional[Contact]:
        """First contact whose id equals `contact_id`, or None."""
        with self._lock:
            for contact in self._contacts:
                if contact.id == contact_id:
                    return contact
        return None

    def add_unique(self, contact: Contact) -> Optional[int]:
        """
        Append `contact` unless another contact already has its name.

        The name check, the id check and the append happen under one lock
        acquisition.

        Returns:
            None on a name clash (the directory is left unchanged), otherwise
            how many contacts already held `contact.id` before the append.
        """
        with self._lock:
            if any(existing.name == contact.name for existing in self._contacts):
                return None
            shared = sum(1 for existing in self._contacts if existing.id == contact.id)
            self._contacts.append(contact)
            return shared

    def remove(self, contact_id: int) -> int:
        """Removes every contact with `contact_id`; returns how many were removed."""
        with self._lock:
            before = len(self._contacts)
            self._contacts = [c for c in self._contacts if c.id != contact_id]
            return before - len(self._contacts)


# ── Directory Dependency ──────────────────────────────────────────────────
def get_directory(request: Request) -> ContactDirectory:
    """
    FastAPI dependency that provides the application's contact directory.

    Example usage in a route:
        @router.get("/persons")
        async def list_persons(directory: ContactDirectory = Depends(get_directory)):
            return directory.all()
    """
    return request.app.state.directory
