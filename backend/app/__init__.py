"""
Showcase Backend — Application Package Initializer
==================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is a thin layered service:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Upload + Persist flow)  │  ← Orchestration
    ├─────────────────────────────────────┤
    │       Schemas (Pydantic models)     │  ← API contracts
    ├─────────────────────────────────────┤
    │   Cloudinary (media) │ MongoDB      │  ← External collaborators
    └─────────────────────────────────────┘

    Routes never talk to Cloudinary or MongoDB directly. They receive a
    SubmissionService through FastAPI dependencies, which composes a
    MediaUploader and a RecordStore created during application startup.
"""

__version__ = "1.0.0"
