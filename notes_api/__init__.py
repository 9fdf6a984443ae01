"""
Notes API — Application Package Initializer
============================================

What: Marks the `notes_api` directory as a Python package.
Who:  Used by Alembic, pytest, and uvicorn (`uvicorn notes_api.main:app`).

Architecture Note:
    The backend is split into layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, existence and duplicate checks
    ├─────────────────────────────────────┤
    │        Stores (Persistence Access)  │  ← NoteStore, UserStore over one session
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Connections)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Services receive their stores as constructor arguments, so each layer
    can be exercised on its own in tests.
"""

__version__ = "1.0.0"
