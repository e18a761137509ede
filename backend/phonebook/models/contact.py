"""
Phonebook Backend — Contact Record
===================================

What:  The in-memory representation of a phone book entry.
How:   A plain dataclass held by ContactDirectory. Schemas in
       phonebook.schemas.contact define how it is exposed over HTTP.

Fields:
    id:      Server-assigned integer, drawn at random on creation
    name:    Display name, unique among contacts at creation time
    number:  Phone number, stored as given (no format validation)
"""

from dataclasses import dataclass
from typing import List


@dataclass
class Contact:
    id: int
    name: str
    number: str

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, name='{self.name}')>"


def seed_contacts() -> List[Contact]:
    """Returns fresh copies of the four entries present at startup."""
    return [
        Contact(id=1, name="Arto Hellas", number="040-123456"),
        Contact(id=2, name="Ada Lovelace", number="39-44-5323523"),
        Contact(id=3, name="Dan Abramov", number="12-43-234345"),
        Contact(id=4, name="Mary Poppendieck", number="39-23-6423122"),
    ]
