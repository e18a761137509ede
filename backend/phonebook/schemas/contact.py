"""
Phonebook Backend — Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract between frontend and backend.
How:   FastAPI uses these to serialize responses and generate OpenAPI docs.

The create endpoint deliberately accepts a free-form JSON object instead of a
request model: missing fields must produce the documented 400 messages, not
FastAPI's automatic 422.
"""

from pydantic import BaseModel, Field


class ContactResponse(BaseModel):
    """
    What:  Wire representation of a contact.
    Who:   Returned by GET /api/persons, GET /api/persons/{id} and POST /api/persons.
    """
    id: int = Field(description="Server-assigned contact identifier")
    name: str = Field(description="Contact name, unique at creation time")
    number: str = Field(description="Phone number, stored as given")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    What:  Error body for rejected create requests.

    Example:
        {"error": "name must be unique"}
    """
    error: str = Field(description="Human-readable error message")
