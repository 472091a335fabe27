"""
Feature modules for the AIGate backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for requests, responses and storage
- service.py: Business logic implementation
- routes.py: FastAPI route handlers, where the module has an HTTP surface
- exceptions.py: Module-specific exceptions

auth, subscriptions and ai expose routes; audit is used by the others.
Modules communicate through interfaces, not concrete implementations.
"""
