import random

from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from flashlearn.application.learning.services.proficiency_model import ProficiencyModel
from flashlearn.application.learning.use_cases.quiz_session_controller import (
    QuizSessionController,
)
from flashlearn.application.learning.use_cases.study_queue_controller import (
    StudyQueueController,
)
from flashlearn.application.learning.use_cases.update_streak_use_case import (
    UpdateStreakOnSessionCompleteUseCase,
)
from flashlearn.config import get_settings
from flashlearn.domain.learning.services.answer_validator import AnswerValidator
from flashlearn.domain.learning.services.distractor_strategy import SmartDistractorGenerator
from flashlearn.domain.learning.services.proficiency_rule import ProficiencyRule
from flashlearn.domain.learning.services.question_generator import QuestionGenerator
from flashlearn.domain.learning.services.question_policy import QuestionPolicy
from flashlearn.infrastructure.learning.repositories import (
    CardRepository,
    ProficiencyRepository,
    StreakRepository,
)
from flashlearn.infrastructure.learning.services import AsyncioTimerScheduler


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Singleton(get_settings)

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # External content enrichment; no implementation ships with the engine
    enrichment_service = providers.Object(None)

    # Repositories
    card_repository = providers.Factory(CardRepository, db=db)
    proficiency_repository = providers.Factory(ProficiencyRepository, db=db)
    streak_repository = providers.Factory(StreakRepository, db=db)

    # Infrastructure services
    rng = providers.Singleton(random.Random, settings.provided.RANDOM_SEED)
    timer_scheduler = providers.Singleton(AsyncioTimerScheduler)

    # Domain services (pure domain logic, no db)
    proficiency_rule = providers.Factory(ProficiencyRule)
    answer_validator = providers.Factory(AnswerValidator)
    distractor_generator = providers.Factory(SmartDistractorGenerator)
    question_policy = providers.Factory(
        QuestionPolicy,
        familiar_min=settings.provided.FAMILIAR_MIN_SCORE,
        mastered_min=settings.provided.MASTERED_MIN_SCORE,
        scramble_max_word_length=settings.provided.SCRAMBLE_MAX_WORD_LENGTH,
    )
    question_generator = providers.Factory(
        QuestionGenerator,
        rng=rng,
        policy=question_policy,
        distractor_generator=distractor_generator,
        exact_typing_hint=settings.provided.EXACT_TYPING_HINT,
    )

    # Learning module, application services and use cases
    proficiency_model = providers.Factory(
        ProficiencyModel,
        store=proficiency_repository,
        rule=proficiency_rule,
    )

    update_streak_use_case = providers.Factory(
        UpdateStreakOnSessionCompleteUseCase,
        streak_repository=streak_repository,
    )

    # Controllers take the learner at call time: container.quiz_session_controller(learner_id=...)
    study_queue_controller = providers.Factory(
        StudyQueueController,
        card_source=card_repository,
        enrichment_service=enrichment_service,
        update_streak_use_case=update_streak_use_case,
    )

    quiz_session_controller = providers.Factory(
        QuizSessionController,
        proficiency_model=proficiency_model,
        question_generator=question_generator,
        answer_validator=answer_validator,
        timer_scheduler=timer_scheduler,
        rng=rng,
        card_source=card_repository,
        time_limit_seconds=settings.provided.QUIZ_TIME_LIMIT_SECONDS,
        feedback_delay_seconds=settings.provided.QUIZ_FEEDBACK_DELAY_SECONDS,
        sprint_size=settings.provided.QUIZ_SPRINT_SIZE,
    )


# Initialize container
container = Container()
