# Services package init
"""
Phonebook Backend — Services Layer
===================================

What:  Business logic layer sitting between routes (HTTP) and the contact
       directory (state).
How:   Services receive the directory on every call, apply business rules,
       and return domain objects. Routes inject the directory through
       FastAPI's dependency system.

Service Inventory:
    - ContactService: presence/uniqueness checks, id assignment, lookups,
      deletion and the /info summary
"""
