"""
Learning bounded context - Application layer.

Contains the session controllers:
- StudyQueueController: flip, judge, undo, lazy enrichment
- QuizSessionController: question loop with countdown and feedback delay
"""
