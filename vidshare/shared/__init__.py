"""
Shared Module

Everything below the HTTP layer:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Views: Graph view pipeline, compiler and pagination
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- Adapters: External service integrations

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── views/          ← ViewPipeline, ViewCompiler, pagination
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← Blob store
    ├── migrations/     ← Alembic environment
    └── utils/          ← Security, identifiers

Usage:
======
    from vidshare.shared.models import User, Video
    from vidshare.shared.repositories import UserRepository
    from vidshare.shared.services import AuthService
    from vidshare.shared.schemas import UserLogin, AuthResponse
    from vidshare.shared.core import logger, VidShareException
"""
