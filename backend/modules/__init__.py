"""
Feature modules for the Finance Tracker backend.

Domain modules (auth, transactions, categories, savings_goals, ai) share
one layout:
- interfaces.py: Protocols for the repository and service
- models.py: Stored records and camelCase request/response models
- repository.py: Document store access
- service.py: Business rules and ownership checks
- schemas.py: Request validation schemas
- routes.py: FastAPI routes, each bound to a request pipeline

Two cross-cutting modules have no routes of their own: validation
(request schemas) and ratelimit (fixed-window counters). The API layer
composes them into route pipelines.
"""
