# Routes package init
"""
Notes API — Routes Package
===========================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   GET    /notes   (list notes with usernames)
                  POST   /notes   (create note)
                  PATCH  /notes   (replace note fields)
                  DELETE /notes   (delete note)
    - health.py:  GET    /health  (service health check)

Routes stay thin: they pull fields out of the body, call NoteService and
return its result. Business rules and error mapping live elsewhere.
"""
