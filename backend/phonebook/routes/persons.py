"""
Phonebook Backend — Persons Route Handlers
===========================================

What:  CRUD-style access to the contact directory under /api/persons.
How:   Extracts path/body data, delegates to ContactService, returns JSON.
Who:   Called by the phonebook frontend.

Status codes:
    GET    /api/persons        → 200
    GET    /api/persons/{id}   → 200, or 404 with an empty body
    POST   /api/persons        → 200 (not 201), or 400 {"error": ...}
    DELETE /api/persons/{id}   → 204 whether or not the id existed
"""

import json
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, Request, Response
from fastapi.exceptions import RequestValidationError

from phonebook.directory import ContactDirectory, get_directory
from phonebook.schemas.contact import ContactResponse, ErrorResponse
from phonebook.services.contact_service import contact_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Persons"])


def is_json_media_type(content_type: str) -> bool:
    """True for application/json and structured +json types, ignoring parameters."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body the way the create endpoint expects it.

    Bodies that are empty or not declared as JSON decode to {}. A JSON body
    that fails to parse raises RequestValidationError, which FastAPI answers
    with its default 422.
    """
    if not is_json_media_type(request.headers.get("content-type", "")):
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise RequestValidationError(
            [
                {
                    "type": "json_invalid",
                    "loc": ("body", getattr(exc, "pos", 0)),
                    "msg": "JSON decode error",
                    "input": {},
                    "ctx": {"error": getattr(exc, "msg", str(exc))},
                }
            ],
            body=raw.decode("utf-8", errors="replace"),
        ) from exc


@router.get(
    "/persons",
    response_model=List[ContactResponse],
    summary="List all contacts",
)
async def list_persons(
    directory: ContactDirectory = Depends(get_directory),
) -> List[ContactResponse]:
    contacts = await contact_service.list_contacts(directory)
    return [ContactResponse.model_validate(contact) for contact in contacts]


@router.get(
    "/persons/{person_id}",
    response_model=ContactResponse,
    responses={
        200: {"description": "The matching contact", "model": ContactResponse},
        404: {"description": "No contact has this id (empty body)"},
    },
    summary="Get a single contact by ID",
)
async def get_person(
    person_id: str,
    directory: ContactDirectory = Depends(get_directory),
) -> ContactResponse:
    """
    Get one contact.

    The id is taken as a raw string and parsed by the service, so a
    non-numeric id is a plain 404 rather than FastAPI's 422.
    """
    contact = await contact_service.get_contact(directory, person_id)
    return ContactResponse.model_validate(contact)


@router.delete(
    "/persons/{person_id}",
    status_code=204,
    response_class=Response,
    responses={204: {"description": "Contact removed, or nothing to remove"}},
    summary="Delete a contact by ID",
)
async def delete_person(
    person_id: str,
    directory: ContactDirectory = Depends(get_directory),
) -> Response:
    await contact_service.delete_contact(directory, person_id)
    return Response(status_code=204)


@router.post(
    "/persons",
    response_model=ContactResponse,
    responses={
        200: {"description": "Contact created", "model": ContactResponse},
        400: {"description": "Missing field or duplicate name", "model": ErrorResponse},
    },
    summary="Create a contact",
    description=(
        "Creates a contact from a JSON body with `name` and `number`. "
        "The server assigns a random id. Names must be unique."
    ),
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {
                    "schema": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "number": {"type": "string"},
                        },
                    }
                }
            }
        }
    },
)
async def create_person(
    request: Request,
    directory: ContactDirectory = Depends(get_directory),
) -> ContactResponse:
    """
    Create a contact.

    The body is decoded by hand: arrays, non-JSON content types and empty
    bodies all reach the service as {} and fail the name check with a 400.

    Error responses (handled by global exception handlers):
        HTTP 400: name is missing / number is missing / name must be unique
        HTTP 422: body declared as JSON but not parseable
    """
    payload = await read_json_body(request)
    contact = await contact_service.create_contact(directory, payload)
    return ContactResponse.model_validate(contact)
