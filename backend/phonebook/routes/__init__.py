# Routes package init
"""
Phonebook Backend — API Routes Package
=======================================

Route Inventory:
    - persons.py: GET    /api/persons        (list contacts)
                  GET    /api/persons/{id}   (single contact)
                  POST   /api/persons        (create contact)
                  DELETE /api/persons/{id}   (delete contact)
    - info.py:    GET    /info               (HTML summary)

Routes are THIN: they pull the directory and request data, call
ContactService, and pick the status code. Rules live in the service.
"""
