# Services package init
"""
Notes API — Services Layer
===========================

What:  Business logic between routes (HTTP) and stores (persistence).

Service Inventory:
    - NoteService: list / create / update / delete notes, with the
      field, owner and duplicate-title checks that guard each write

Services receive their stores through the constructor; routes build them
per request with the request's database session.
"""
