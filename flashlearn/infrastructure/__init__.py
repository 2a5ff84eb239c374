"""
Infrastructure layer.

The infrastructure layer contains implementations of the protocols
defined in the application layer:

- Persistence (SQLAlchemy repositories and mappers)
- Timers (asyncio scheduler)

This layer depends on domain and application layers,
but they do not depend on it.
"""
