"""
Learning bounded context - Domain layer.

This context handles vocabulary mastery:
- Retry-queue study sessions with one-level undo
- Adaptive quiz questions in six formats
- Per-card proficiency scoring and day streaks

Aggregates:
- StudyQueue: flip-and-judge session over a topic
- QuizSession: sequential adaptive quiz
"""
