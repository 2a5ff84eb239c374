"""
Domain layer.

The domain layer contains the core learning rules of the engine.
It has no dependencies on persistence or scheduling infrastructure.

This layer contains:
- Entities: Cards and learner streaks
- Value Objects: Questions, proficiency levels, identifiers
- Aggregate Roots: Study queues and quiz sessions
- Domain Services: Scoring, question generation, answer validation
"""
