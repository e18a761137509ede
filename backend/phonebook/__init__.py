"""
Phonebook Backend — Application Package Initializer
====================================================

Architecture Note:
    The backend follows the same layered shape at a smaller scale:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, id assignment
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Contact record + Pydantic
    ├─────────────────────────────────────┤
    │        Directory (State)            │  ← In-memory contact collection
    └─────────────────────────────────────┘

    Nothing is persisted: the directory lives on `app.state` and is lost when
    the process exits.
"""

__version__ = "1.0.0"
