# Area: Demo
"""
party_core.demo_module — Demo quiz module
=========================================

A ready-to-use three-phase game that works out of the box:

    intro   (ADVANCE)        -> play
    play    (ADVANCE, BACK)  -> next question ... -> summary
    summary (RESTART)        -> GAME/COMPLETE

Usage:
    from party_core import DemoQuizModule, DEMO_QUIZ_CONFIG, GameHost, ModuleRegistry
    host = GameHost(ModuleRegistry([DemoQuizModule()]), ConfigCatalog([DEMO_QUIZ_CONFIG]))
"""

import logging
import random
from typing import Any, Dict, List, Optional, Sequence

from .module import GameModule, ModuleContext, PhaseController
from .providers import StaticListProvider, describe_item
from .types import ActionType, EventType, GameAction, complete, goto, stay

logger = logging.getLogger("party_core.demo")

DEMO_QUIZ_ID = "demo-quiz"

DEMO_QUIZ_CONFIG: Dict[str, Any] = {
    "id": DEMO_QUIZ_ID,
    "title": "Demo Quiz",
    "description": "Who would most likely...?",
    "version": "1.0.0",
    "minPlayers": 2,
    "maxPlayers": 12,
    "tags": ["party", "demo"],
    "screens": {
        "intro": "IntroScreen",
        "play": "QuestionScreen",
        "summary": "SummaryScreen",
    },
    "phases": [
        {"id": "intro", "screenId": "intro", "allowedActions": ["ADVANCE"]},
        {"id": "play", "screenId": "play", "allowedActions": ["ADVANCE", "BACK"]},
        {"id": "summary", "screenId": "summary", "allowedActions": ["RESTART"]},
    ],
    "contentProvider": {"type": "static", "shuffle": False},
    "gameSettings": {"shuffleQuestions": False, "maxQuestionsTotal": 10},
}

DEFAULT_QUESTIONS: List[Dict[str, str]] = [
    {"id": "q1", "text": "Who would most likely forget their own birthday?"},
    {"id": "q2", "text": "Who would most likely survive a zombie apocalypse?"},
    {"id": "q3", "text": "Who would most likely become famous?"},
]


class IntroController(PhaseController):
    def transition(self, action: GameAction, ctx: ModuleContext, payload: Any = None):
        if action.type == ActionType.ADVANCE:
            return goto("play")
        return stay()


class PlayController(PhaseController):
    """Steps through the questions; leaves for the summary after the last one."""

    def __init__(self, module: "DemoQuizModule"):
        self.module = module

    def on_enter(self, ctx: ModuleContext) -> None:
        provider = self.module.provider
        provider.reset()
        self._announce(ctx)

    def transition(self, action: GameAction, ctx: ModuleContext, payload: Any = None):
        if action.type == ActionType.BACK:
            return goto("intro")
        if action.type == ActionType.ADVANCE:
            if self.module.provider.next() is None:
                return goto("summary")
            self._announce(ctx)
            return stay()
        return stay()

    def _announce(self, ctx: ModuleContext) -> None:
        item = self.module.provider.current()
        if item is None:
            return
        index, total = self.module.provider.progress()
        ctx.event_bus.publish(
            EventType.CONTENT_NEXT, index=index, total=total, text=describe_item(item)
        )


class SummaryController(PhaseController):
    def __init__(self, module: "DemoQuizModule"):
        self.module = module

    def transition(self, action: GameAction, ctx: ModuleContext, payload: Any = None):
        if action.type == ActionType.RESTART:
            return complete({"questions": len(self.module.provider)})
        return stay()


class DemoQuizModule(GameModule):
    """
    Demo implementation of GameModule over a static question list.

    Questions are shuffled when the config's ``shuffleQuestions``
    setting is on, and capped at ``maxQuestionsTotal``.

    ``module_id`` lets the same quiz serve another config id, as long as
    that config declares the ``intro``/``play``/``summary`` phases.
    """

    id = DEMO_QUIZ_ID

    def __init__(
        self,
        questions: Optional[Sequence[Dict[str, str]]] = None,
        rng: Optional[random.Random] = None,
        module_id: str = DEMO_QUIZ_ID,
    ):
        self.id = module_id
        self._questions = list(questions if questions is not None else DEFAULT_QUESTIONS)
        self._rng = rng
        self.provider: StaticListProvider = StaticListProvider([])

    async def init(self, ctx: ModuleContext) -> None:
        settings = ctx.config.game_settings
        questions = self._questions[: settings.max_questions_total]
        self.provider = StaticListProvider(
            questions, shuffle=settings.shuffle_questions, rng=self._rng
        )
        await self.provider.preload()
        logger.info(f"Demo quiz ready with {len(self.provider)} questions")

    def register_screens(self) -> Dict[str, str]:
        return {
            "intro": "IntroScreen",
            "play": "QuestionScreen",
            "summary": "SummaryScreen",
        }

    def get_phase_controllers(self) -> Dict[str, PhaseController]:
        return {
            "intro": IntroController(),
            "play": PlayController(self),
            "summary": SummaryController(self),
        }

    def get_translations(self) -> List[Dict[str, Any]]:
        return [{
            "namespace": self.id,
            "resources": {
                "intro.title": "Demo Quiz",
                "summary.title": "That's all!",
            },
        }]
