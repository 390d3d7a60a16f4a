# Services package init
"""
Notes API — Services Layer
============================

Business logic between routes (HTTP) and repositories (persistence).

Service Inventory:
    - NoteService: create / get / list / update / delete notes
"""
