from roundscore.routers.templates import router as templates_router
from roundscore.routers.interviews import router as interviews_router
from roundscore.routers.question_banks import router as question_banks_router
from roundscore.routers.scoring import router as scoring_router

__all__ = ["templates_router", "interviews_router", "question_banks_router", "scoring_router"]
