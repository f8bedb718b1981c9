"""Core Layer — pure domain logic and storage contracts; no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Every projection is a pure function of an ordered event sequence

Design Decisions:
    - Functional core separated from imperative shell: handlers load a stream,
      fold it here, and append the single fact a command produces
"""
