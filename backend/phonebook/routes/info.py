"""
Phonebook Backend — Info Route
===============================

What:  Human-readable diagnostics page.
How:   Returns an HTML fragment with the contact count and server time.
Who:   Opened in a browser during development.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from phonebook.directory import ContactDirectory, get_directory
from phonebook.services.contact_service import contact_service

router = APIRouter(tags=["Info"])


@router.get(
    "/info",
    response_class=HTMLResponse,
    summary="Phonebook summary",
    description="Reports how many contacts the phonebook holds and the current server time.",
)
async def info(directory: ContactDirectory = Depends(get_directory)) -> HTMLResponse:
    return HTMLResponse(await contact_service.render_info(directory))
