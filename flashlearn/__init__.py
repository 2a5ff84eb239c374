"""FlashLearn mastery engine: study queue, adaptive quiz and proficiency tracking."""
