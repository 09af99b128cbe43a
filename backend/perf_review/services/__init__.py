"""Services Layer — async use-cases orchestrating repositories around the pure core.

Invariants:
    - Services load, call core rules/transitions, then save; no business rule lives here
    - Repositories are passed in (protocols), never constructed here
"""
