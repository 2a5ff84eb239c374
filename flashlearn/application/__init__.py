"""
Application layer.

The application layer orchestrates domain objects over the external
collaborators (card source, proficiency store, enrichment service, timers).

This layer contains:
- Protocols: Interfaces for external dependencies
- Services: Proficiency read/write policy
- Use Cases: Study queue and quiz controllers, streak update
- DTOs: Quiz configuration and summary
"""
