"""Round scoring and cumulative feedback aggregation.

Pure functions over already validated records. Nothing here touches the
database or any remote grader; route handlers load the inputs and call in.
"""

import math
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Optional, Union

from roundscore.config import DEFAULT_PASSING_SCORE
from roundscore.schemas.feedback import CumulativeFeedback, RoundFeedback, RoundScore
from roundscore.schemas.question import Question, UserAnswer


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def _is_structured(item) -> bool:
    if isinstance(item, Question):
        return True
    return isinstance(item, Mapping) and "id" in item


def normalize_questions(questions: Sequence[Union[Question, str]]) -> Sequence[Question]:
    """Bring legacy plain-text question lists into the structured shape.

    The first element decides the format of the whole list. Structured lists
    are returned as they are; legacy lists get synthesized ``q-<index>`` ids,
    ``text`` type and one point each, in their original order.
    """
    if len(questions) > 0 and _is_structured(questions[0]):
        return questions
    return [
        Question(id=f"q-{index}", text=str(text), type="text", points=1)
        for index, text in enumerate(questions)
    ]


def _is_index(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def correct_option_index(question: Question) -> Optional[int]:
    """Resolve the answer key of an mcq question to an option index."""
    key = question.correct_answer
    if _is_index(key):
        return key
    if key is None or not question.options:
        return None
    try:
        return question.options.index(key)
    except ValueError:
        return None


def _points_awarded(question: Question, answer: UserAnswer) -> float:
    if question.type == "mcq":
        index = correct_option_index(question)
        if index is not None and _is_index(answer.answer) and answer.answer == index:
            return question.points
        return 0
    if question.type == "text":
        # Graded later by the language-model pass; full credit here.
        return question.points
    if question.type == "code":
        # The execution judge attaches the earned points to the answer.
        return min(max(answer.score or 0, 0), question.points)
    return 0


def score_answers(answers: Sequence[UserAnswer], questions: Sequence[Question]) -> int:
    """Score submitted answers as a whole percentage in ``[0, 100]``.

    Questions without an answer are skipped entirely, they count toward
    neither the earned nor the available points. When several answers share a
    ``question_id`` the first one is used.
    """
    answers_by_question: dict[str, UserAnswer] = {}
    for answer in answers:
        answers_by_question.setdefault(answer.question_id, answer)

    total_score = 0.0
    max_score = 0
    for question in questions:
        answer = answers_by_question.get(question.id)
        if answer is None:
            continue
        max_score += question.points
        total_score += _points_awarded(question, answer)

    if max_score <= 0:
        return 0
    return round_half_up(total_score / max_score * 100)


def _attempt_order(feedback: RoundFeedback):
    return (feedback.attempt, feedback.created_at or datetime.min)


def latest_attempts(round_feedbacks: Sequence[RoundFeedback]) -> list[RoundFeedback]:
    """Keep the most recent attempt of every round, ordered by round id.

    Most recent means the highest attempt number; equal attempt numbers fall
    back to the latest ``created_at``.
    """
    latest: dict[str, RoundFeedback] = {}
    for feedback in round_feedbacks:
        current = latest.get(feedback.round_id)
        if current is None or _attempt_order(feedback) > _attempt_order(current):
            latest[feedback.round_id] = feedback
    return [latest[round_id] for round_id in sorted(latest)]


def _final_assessment(completed: int, average: int, strengths: list[str], areas: list[str]) -> str:
    parts = [f"Completed {completed} rounds with an average score of {average}/100."]
    if strengths:
        parts.append(f"Key strengths include: {', '.join(strengths[:3])}.")
    if areas:
        parts.append(f"Areas for improvement: {', '.join(areas[:3])}.")
    return " ".join(parts)


def aggregate_cumulative_feedback(
    round_feedbacks: Sequence[RoundFeedback],
    total_rounds_in_template: int,
) -> CumulativeFeedback:
    """Roll the latest attempt of every round up into one summary.

    The result is a read-time view and is recomputed on every call.
    """
    rounds = latest_attempts(round_feedbacks)
    if not rounds:
        return CumulativeFeedback(
            total_rounds=total_rounds_in_template,
            completed_rounds=0,
            average_score=0,
            round_scores=[],
            overall_strengths=[],
            overall_areas_for_improvement=[],
            final_assessment="No feedback available yet",
        )

    average_score = round_half_up(sum(r.total_score for r in rounds) / len(rounds))

    # dict.fromkeys keeps first-seen order
    strengths = list(dict.fromkeys(s for r in rounds for s in r.strengths))
    areas = list(dict.fromkeys(a for r in rounds for a in r.areas_for_improvement))

    round_scores = [
        RoundScore(
            round_id=r.round_id,
            round_name=r.round_name,
            round_type=r.round_type,
            score=r.total_score,
            attempt=r.attempt,
            passed=r.passed,
        )
        for r in rounds
    ]

    return CumulativeFeedback(
        total_rounds=total_rounds_in_template,
        completed_rounds=len(rounds),
        average_score=average_score,
        round_scores=round_scores,
        overall_strengths=strengths,
        overall_areas_for_improvement=areas,
        final_assessment=_final_assessment(len(rounds), average_score, strengths, areas),
    )


def is_passing(score: int, passing_score: Optional[int] = None) -> bool:
    threshold = DEFAULT_PASSING_SCORE if passing_score is None else passing_score
    return score >= threshold


# Round types that are scored on submission, with their strength/improvement lines
_AUTO_SCORED_SUMMARIES = {
    "aptitude": (
        "Strong aptitude skills demonstrated",
        "Focus on improving aptitude fundamentals",
    ),
    "code": (
        "Strong coding skills demonstrated",
        "Practice coding problems to improve implementation skills",
    ),
}


def summarize_round(round_type: str, score: int, passed: bool) -> tuple[list[str], list[str]]:
    """Strengths and improvement areas for a round scored on submission."""
    strengths: list[str] = []
    areas: list[str] = []

    if passed:
        strengths.append(f"Met the passing score for {round_type} round")
    else:
        areas.append("Review the material covered in this round and try again")

    summary = _AUTO_SCORED_SUMMARIES.get(round_type)
    if summary:
        strong, weak = summary
        if score >= 80:
            strengths.append(strong)
        elif score < 60:
            areas.append(weak)

    return strengths, areas
