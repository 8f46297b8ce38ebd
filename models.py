from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

OPTION_LETTERS = ["A", "B", "C", "D"]
NOT_ANSWERED = "Not Answered"


@dataclass
class QuizQuestion:
    question: str
    options: List[str]
    correct_answer: str  # letter "A".."D"
    question_id: str | None = None

    @property
    def correct_index(self) -> int:
        try:
            return OPTION_LETTERS.index(self.correct_answer)
        except ValueError:
            return -1


@dataclass
class Quiz:
    title: str
    duration: int  # minutes
    total_marks: float
    questions: List[QuizQuestion]
    category: str = "General"
    quiz_id: str | None = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Quiz":
        questions = [
            QuizQuestion(
                question=str(item.get("question", "")),
                options=[str(option) for option in item.get("options", [])],
                correct_answer=str(item.get("correctAnswer", "")),
                question_id=item.get("_id") or item.get("id"),
            )
            for item in payload.get("questions", [])
        ]
        return cls(
            title=str(payload.get("title", "")),
            duration=int(payload.get("duration") or 0),
            total_marks=float(payload.get("totalMarks") or 0),
            questions=questions,
            category=payload.get("category") or "General",
            quiz_id=payload.get("_id") or payload.get("id"),
        )


@dataclass
class QuestionResult:
    question_text: str
    options: List[str]
    user_answer: str
    user_answer_text: str
    correct_answer: str
    correct_answer_text: str
    answer_time: float = 0.0

    @property
    def is_correct(self) -> bool:
        return self.user_answer == self.correct_answer

    def to_payload(self) -> Dict[str, Any]:
        return {
            "questionText": self.question_text,
            "options": self.options,
            "userAnswer": self.user_answer,
            "userAnswerText": self.user_answer_text,
            "correctAnswer": self.correct_answer,
            "correctAnswerText": self.correct_answer_text,
            "answerTime": self.answer_time,
        }


@dataclass
class QuizResult:
    score: float
    total: float
    correct_count: int
    performance_level: str  # "high" | "medium" | "low"
    questions: List[QuestionResult] = field(default_factory=list)


@dataclass
class Submission:
    quiz_id: str
    username: str | None
    quiz_name: str
    category: str
    difficulty: str
    result: QuizResult
    time_spent: float
    auto_submitted: bool = False
    reason: str | None = None

    def report_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "username": self.username,
            "quizName": self.quiz_name,
            "score": self.result.score,
            "total": self.result.total,
            "questions": [q.to_payload() for q in self.result.questions],
        }
        if self.auto_submitted:
            payload["autoSubmitted"] = True
            payload["reason"] = self.reason
        return payload

    def stats_payload(self) -> Dict[str, Any]:
        return {
            "quizId": self.quiz_id,
            "score": self.result.score,
            "totalQuestions": len(self.result.questions),
            "timeSpent": self.time_spent,
        }
