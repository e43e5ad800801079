"""Fixed 15-question bank, ordered from easiest to hardest."""

from dataclasses import dataclass

from config import TOTAL_QUESTIONS

LETTERS = ("A", "B", "C", "D")


@dataclass(frozen=True)
class Question:
    id: int
    category: str
    prompt: str
    options: tuple[str, str, str, str]
    correct_answer: int   # index into options
    difficulty: int       # 1 (easy) … 5 (hard)

    @property
    def correct_text(self) -> str:
        return self.options[self.correct_answer]


QUESTION_BANK: tuple[Question, ...] = (
    # ── Easy (1–5) ───────────────────────────────────────
    Question(1, "Geography", "What is the capital of France?",
             ("London", "Berlin", "Paris", "Madrid"), 2, 1),
    Question(2, "Science", "How many legs does a spider have?",
             ("6", "8", "10", "12"), 1, 1),
    Question(3, "History", "In which year did World War II end?",
             ("1944", "1945", "1946", "1947"), 1, 2),
    Question(4, "Literature", "Who wrote 'Romeo and Juliet'?",
             ("Charles Dickens", "William Shakespeare", "Jane Austen", "Mark Twain"), 1, 2),
    Question(5, "Sports", "How many players are on a basketball team on court at one time?",
             ("4", "5", "6", "7"), 1, 2),
    # ── Medium (6–10) ────────────────────────────────────
    Question(6, "Science", "What is the chemical symbol for Gold?",
             ("Go", "Gd", "Au", "Ag"), 2, 3),
    Question(7, "Geography", "Which river is the longest in the world?",
             ("Amazon", "Nile", "Mississippi", "Yangtze"), 1, 3),
    Question(8, "History", "Who was the first person to walk on the moon?",
             ("Buzz Aldrin", "Neil Armstrong", "John Glenn", "Alan Shepard"), 1, 3),
    Question(9, "Art", "Which artist painted 'The Starry Night'?",
             ("Pablo Picasso", "Leonardo da Vinci", "Vincent van Gogh", "Claude Monet"), 2, 4),
    Question(10, "Science", "What is the speed of light in vacuum?",
             ("299,792,458 m/s", "300,000,000 m/s", "299,000,000 m/s", "301,000,000 m/s"), 0, 4),
    # ── Hard (11–15) ─────────────────────────────────────
    Question(11, "History", "In which year was the Berlin Wall torn down?",
             ("1987", "1988", "1989", "1990"), 2, 5),
    Question(12, "Literature", "Who wrote 'One Hundred Years of Solitude'?",
             ("Mario Vargas Llosa", "Gabriel García Márquez", "Jorge Luis Borges", "Octavio Paz"), 1, 5),
    Question(13, "Science", "What is the most abundant gas in Earth's atmosphere?",
             ("Oxygen", "Carbon Dioxide", "Nitrogen", "Argon"), 2, 5),
    Question(14, "Geography", "What is the smallest country in the world?",
             ("Monaco", "Nauru", "Vatican City", "San Marino"), 2, 5),
    Question(15, "Physics", "What is the name of the theoretical boundary around a black hole?",
             ("Event Horizon", "Photon Sphere", "Ergosphere", "Singularity"), 0, 5),
)


def get_question(index: int) -> Question:
    return QUESTION_BANK[index]


def _validate(bank: tuple[Question, ...]) -> None:
    if len(bank) != TOTAL_QUESTIONS:
        raise ValueError(f"Expected {TOTAL_QUESTIONS} questions, got {len(bank)}")
    for q in bank:
        if len(q.options) != len(LETTERS):
            raise ValueError(f"Question {q.id}: expected 4 options")
        if not 0 <= q.correct_answer < len(LETTERS):
            raise ValueError(f"Question {q.id}: bad correct_answer {q.correct_answer}")
    difficulties = [q.difficulty for q in bank]
    if difficulties != sorted(difficulties):
        raise ValueError("Questions must be ordered by difficulty")


_validate(QUESTION_BANK)
