"""
TurtleWatch Backend - Application Package
==========================================

What: Record-keeping API for a sea-turtle conservation program.
Who:  Imported by uvicorn (`turtlewatch.main:app`), pytest and the console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Validation + SQL)       │  ← required fields, enums, defaults
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Records: users, turtles, turtle survey events, nests, nest events.
"""

__version__ = "1.0.0"
