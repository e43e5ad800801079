"""Quiz state machine.

A play-through is an immutable `GameSession`; every transition is a plain
function that takes a session and returns a new one. The bot keeps the
session in its FSM data via `to_dict` / `from_dict`.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import StrEnum

import lifelines
from config import LAST_INDEX, NO_WINNINGS, prize, safe_payout, walkaway_amount
from questions import LETTERS, Question, get_question

log = logging.getLogger(__name__)


class Phase(StrEnum):
    MENU = "menu"
    PLAYING = "playing"
    FINISHED = "finished"


class Result(StrEnum):
    WON = "won"
    LOST = "lost"
    WALKED_AWAY = "walked_away"


class Lifeline(StrEnum):
    FIFTY_FIFTY = "fifty_fifty"
    ASK_AUDIENCE = "ask_audience"
    PHONE_A_FRIEND = "phone_a_friend"


class GameError(Exception):
    pass


class InvalidTransition(GameError):
    pass


@dataclass(frozen=True)
class GameSession:
    phase: Phase = Phase.MENU
    current_index: int = 0
    selected_answer: int | None = None
    final_answer: int | None = None
    won_amount: str = NO_WINNINGS
    lifelines_used: frozenset[Lifeline] = field(default_factory=frozenset)
    hidden_options: frozenset[int] = field(default_factory=frozenset)
    audience_results: tuple[int, ...] | None = None
    friend_suggestion: int | None = None
    result: Result | None = None

    @property
    def question(self) -> Question:
        return get_question(self.current_index)

    def has_lifeline(self, lifeline: Lifeline) -> bool:
        return lifeline not in self.lifelines_used

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "current_index": self.current_index,
            "selected_answer": self.selected_answer,
            "final_answer": self.final_answer,
            "won_amount": self.won_amount,
            "lifelines_used": sorted(ll.value for ll in self.lifelines_used),
            "hidden_options": sorted(self.hidden_options),
            "audience_results": list(self.audience_results) if self.audience_results else None,
            "friend_suggestion": self.friend_suggestion,
            "result": self.result.value if self.result else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameSession":
        audience = data.get("audience_results")
        result = data.get("result")
        return cls(
            phase=Phase(data.get("phase", Phase.MENU)),
            current_index=data.get("current_index", 0),
            selected_answer=data.get("selected_answer"),
            final_answer=data.get("final_answer"),
            won_amount=data.get("won_amount", NO_WINNINGS),
            lifelines_used=frozenset(Lifeline(v) for v in data.get("lifelines_used", [])),
            hidden_options=frozenset(data.get("hidden_options", [])),
            audience_results=tuple(audience) if audience else None,
            friend_suggestion=data.get("friend_suggestion"),
            result=Result(result) if result else None,
        )


@dataclass(frozen=True)
class Outcome:
    """What grading a final answer produced."""
    correct: bool
    question: Question
    chosen: int
    won_amount: str
    finished: bool


# ── Guards ────────────────────────────────────────────────────────────────────
def _require_playing(session: GameSession, action: str) -> None:
    if session.phase is not Phase.PLAYING:
        raise InvalidTransition(f"Cannot {action} while {session.phase.value}")


def _require_unlocked(session: GameSession, action: str) -> None:
    _require_playing(session, action)
    if session.final_answer is not None:
        raise InvalidTransition(f"Cannot {action} after locking in a final answer")


# ── Transitions ───────────────────────────────────────────────────────────────
def start_game() -> GameSession:
    """Fresh play-through at question 1."""
    return GameSession(phase=Phase.PLAYING)


def return_to_menu(session: GameSession) -> GameSession:
    if session.phase is Phase.PLAYING:
        raise InvalidTransition("Cannot return to menu in the middle of a game")
    return GameSession()


def select_answer(session: GameSession, index: int) -> GameSession:
    _require_unlocked(session, "select an answer")
    if not 0 <= index < len(LETTERS):
        raise InvalidTransition(f"No option {index}")
    if index in session.hidden_options:
        return session
    return replace(session, selected_answer=index)


def confirm_answer(session: GameSession) -> GameSession:
    _require_unlocked(session, "confirm")
    if session.selected_answer is None:
        raise InvalidTransition("No answer selected")
    return replace(session, final_answer=session.selected_answer)


def cancel_confirmation(session: GameSession) -> GameSession:
    _require_playing(session, "change the answer")
    return replace(session, final_answer=None)


def submit_final_answer(session: GameSession) -> tuple[GameSession, Outcome]:
    _require_playing(session, "submit")
    if session.final_answer is None:
        raise InvalidTransition("No final answer locked in")

    index = session.current_index
    question = session.question
    chosen = session.final_answer

    if chosen == question.correct_answer:
        won = prize(index)
        if index == LAST_INDEX:
            new = replace(session, won_amount=won, phase=Phase.FINISHED, result=Result.WON)
            log.info("Game won: %s", won)
        else:
            new = replace(
                session,
                won_amount=won,
                current_index=index + 1,
                selected_answer=None,
                final_answer=None,
                hidden_options=frozenset(),
                audience_results=None,
                friend_suggestion=None,
            )
        return new, Outcome(True, question, chosen, won, new.phase is Phase.FINISHED)

    won = safe_payout(index)
    new = replace(session, won_amount=won, phase=Phase.FINISHED, result=Result.LOST)
    log.info("Game lost at question %d, leaving with %s", index + 1, won)
    return new, Outcome(False, question, chosen, won, True)


def walk_away(session: GameSession) -> GameSession:
    _require_playing(session, "walk away")
    won = walkaway_amount(session.current_index)
    log.info("Walked away before question %d with %s", session.current_index + 1, won)
    return replace(
        session,
        won_amount=won,
        phase=Phase.FINISHED,
        result=Result.WALKED_AWAY,
        final_answer=None,
    )


# ── Lifelines ─────────────────────────────────────────────────────────────────
def _use(session: GameSession, lifeline: Lifeline) -> frozenset[Lifeline]:
    log.info("Lifeline %s used on question %d", lifeline.value, session.current_index + 1)
    return session.lifelines_used | {lifeline}


def use_fifty_fifty(session: GameSession) -> GameSession:
    _require_unlocked(session, "use 50/50")
    if not session.has_lifeline(Lifeline.FIFTY_FIFTY):
        return session
    hidden = lifelines.fifty_fifty(session.question)
    return replace(
        session,
        lifelines_used=_use(session, Lifeline.FIFTY_FIFTY),
        hidden_options=session.hidden_options | set(hidden),
    )


def use_ask_audience(session: GameSession, rng=None) -> GameSession:
    _require_unlocked(session, "ask the audience")
    if not session.has_lifeline(Lifeline.ASK_AUDIENCE):
        return session
    return replace(
        session,
        lifelines_used=_use(session, Lifeline.ASK_AUDIENCE),
        audience_results=lifelines.ask_audience(session.question, rng),
    )


def use_phone_a_friend(session: GameSession, rng=None) -> GameSession:
    _require_unlocked(session, "phone a friend")
    if not session.has_lifeline(Lifeline.PHONE_A_FRIEND):
        return session
    return replace(
        session,
        lifelines_used=_use(session, Lifeline.PHONE_A_FRIEND),
        friend_suggestion=lifelines.phone_a_friend(session.question, rng),
    )
