# Stores package init
"""
Notes API — Stores Layer
=========================

What:  Persistence access for the two resources, one class per table.
How:   Each store wraps the request's AsyncSession and exposes the handful
       of lookups and writes the service needs. Stores return ORM objects
       (or None for missing records) and never raise HTTP-flavoured errors,
       with one exception: a unique-title violation surfaces as ConflictError.

Store Inventory:
    - NoteStore: find_all, find_by_id, find_by_title, create, save, delete
    - UserStore: find_by_id, find_by_ids (read-only)
"""

from notes_api.stores.note_store import NoteStore
from notes_api.stores.user_store import UserStore

__all__ = ["NoteStore", "UserStore"]
