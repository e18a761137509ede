"""
Phonebook Backend — Contact Service (Business Logic)
=====================================================

What:  Presence/uniqueness validation, id assignment, and the read/delete
       operations behind the /api/persons routes, plus the /info summary.
How:   Stateless service; every call receives the ContactDirectory to act on.
Who:   Called by route handlers; operates on phonebook.directory.
When:  For every contact request.

Create Flow (POST /api/persons):
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │  Body    │───▶│ name/number  │───▶│  Draw id in  │───▶│  Append  │
    │  (Route) │    │  present?    │    │  [0, range)  │    │ if unique│
    └──────────┘    └──────────────┘    └──────────────┘    └──────────┘

Id Assignment:
    Ids are drawn uniformly at random from [0, settings.id_range) and are not
    checked against existing ids, so two contacts can end up sharing one.
    A collision is logged as a warning and the contact is stored anyway.
"""

import logging
import random
import re
from datetime import datetime
from typing import Any, Callable, List, Optional

from phonebook.config import settings
from phonebook.directory import ContactDirectory
from phonebook.exceptions import NotFoundError, ValidationError
from phonebook.models.contact import Contact

logger = logging.getLogger(__name__)


# Numeric literal forms accepted in a path id
_DECIMAL_ID = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_PREFIXED_ID = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def parse_contact_id(raw: str) -> Optional[int]:
    """
    Parse a path segment into a contact id.

    Accepted forms:
        - decimals with optional sign and exponent ("2", " 2 ", "2.0", "1e3")
        - unsigned hex/octal/binary literals ("0x1A", "0o17", "0b10")
        - blank text, which reads as 0

    Non-integral values and anything else ("1_0", "abc", "3.5") return
    None, which matches no contact.
    """
    text = raw.strip()
    if not text:
        return 0
    if _PREFIXED_ID.fullmatch(text):
        return int(text, 0)
    if not _DECIMAL_ID.fullmatch(text):
        return None
    value = float(text)
    if value.is_integer():
        return int(value)
    return None


def stringify_field(value: Any) -> str:
    """
    Text form of a JSON scalar from a create request.

    Booleans render as "true"/"false" and integral floats drop the
    fractional part, so 5.0 is stored as "5".
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_timestamp(moment: datetime) -> str:
    """
    Render `moment` as "<date string> <time string>".

    Example: "Sat Oct 17 2026 14:03:05 GMT+0200 (CEST)"
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    date_part = moment.strftime("%a %b %d %Y")
    time_part = moment.strftime("%H:%M:%S GMT%z (%Z)")
    return f"{date_part} {time_part}"


class ContactService:
    """
    Business logic layer for contact operations.

    Responsibilities:
        - list_contacts(): Whole collection in order
        - get_contact(): Single lookup with not-found handling
        - create_contact(): Validation and random id assignment
        - delete_contact(): Idempotent removal
        - render_info(): HTML summary for the diagnostics page

    Args:
        id_factory: Callable taking the exclusive upper bound and returning
                    an id. Defaults to random.randrange.
    """

    def __init__(self, id_factory: Optional[Callable[[int], int]] = None):
        self._id_factory = id_factory or random.randrange

    def generate_id(self) -> int:
        return self._id_factory(settings.id_range)

    async def list_contacts(self, directory: ContactDirectory) -> List[Contact]:
        return directory.all()

    async def get_contact(self, directory: ContactDirectory, raw_id: str) -> Contact:
        """
        Retrieve a single contact by its path id.

        Raises:
            NotFoundError: No contact has that id (→ 404, empty body)
        """
        contact_id = parse_contact_id(raw_id)
        contact = directory.find(contact_id) if contact_id is not None else None
        if contact is None:
            shown = contact_id if contact_id is not None else raw_id
            raise NotFoundError(
                resource="contact",
                resource_id=str(raw_id),
                message=f"ID: {shown} is not a valid phone book entry",
            )
        return contact

    async def delete_contact(self, directory: ContactDirectory, raw_id: str) -> int:
        """
        Remove every contact matching the path id.

        Never fails: an unknown or unparseable id removes nothing.
        Returns the number of contacts removed.
        """
        contact_id = parse_contact_id(raw_id)
        if contact_id is None:
            logger.info("Ignoring delete for non-numeric ID: %s", raw_id)
            return 0
        removed = directory.remove(contact_id)
        logger.info("Removed entry with ID: %d (%d removed)", contact_id, removed)
        return removed

    async def create_contact(
        self,
        directory: ContactDirectory,
        payload: Any,
    ) -> Contact:
        """
        Validate a create request and append the new contact.

        Validation order:
            1. name present  → else "name is missing"
            2. number present → else "number is missing"
            3. name unused   → else "name must be unique"

        Args:
            directory: Collection to append to
            payload:   Decoded JSON body; anything but an object counts as {}

        Returns:
            The stored Contact

        Raises:
            ValidationError: Any of the checks above failed (→ 400)
        """
        body = payload if isinstance(payload, dict) else {}
        name = body.get("name")
        number = body.get("number")

        if not name:
            raise ValidationError(message="name is missing", field="name")
        if not number:
            raise ValidationError(message="number is missing", field="number")

        contact = Contact(
            id=self.generate_id(),
            name=stringify_field(name),
            number=stringify_field(number),
        )

        shared = directory.add_unique(contact)
        if shared is None:
            raise ValidationError(
                message="name must be unique",
                field="name",
                context={"name": contact.name},
            )

        if shared:
            logger.warning(
                "Generated ID %d is already in use; %d contacts now share it",
                contact.id,
                shared + 1,
            )
        logger.info("Created contact %r", contact)
        return contact

    async def render_info(
        self,
        directory: ContactDirectory,
        now: Optional[datetime] = None,
    ) -> str:
        """HTML fragment with the contact count and the current server time."""
        moment = now or datetime.now().astimezone()
        return (
            f"\n    <div>Phonebook has info for {len(directory)}</div>"
            f"\n    <div>{format_timestamp(moment)}</div>\n  "
        )


# ── Singleton Instance ────────────────────────────────────────────────────
contact_service = ContactService()
