import json, re
from typing import Any, Dict, List, Optional


def relax_load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    txt = re.sub(r",\s*([\]\}])", r"\1", txt)
    return json.loads(txt)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def normalize_session_block(data: dict) -> Dict[str, Any]:
    """Flatten a session file into parallel question / answer / ideal-answer lists.

    ``questions`` may hold plain strings or objects carrying their own
    ``answer`` and ``ideal_answer``; top-level ``answers`` and
    ``ideal_answers`` lists take precedence when present.
    """
    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        raise ValueError("Top-level 'questions' list not found.")

    questions: List[str] = []
    answers: List[Optional[str]] = []
    ideals: List[Optional[str]] = []
    for i, d in enumerate(data["questions"], 1):
        if isinstance(d, dict):
            questions.append(str(d.get("question", "")))
            answers.append(_text(d.get("answer")))
            ideals.append(_text(d.get("ideal_answer")))
        else:
            questions.append(str(d))
            answers.append(None)
            ideals.append(None)

    if isinstance(data.get("answers"), list):
        answers = [_text(a) for a in data["answers"]]
    if isinstance(data.get("ideal_answers"), list):
        ideals = [_text(a) for a in data["ideal_answers"]]

    return {
        "id": data.get("id"),
        "interview_type": data.get("interview_type", "basic_hr_technical"),
        "questions": questions,
        "answers": answers,
        "ideal_answers": ideals,
        "context": data.get("context") or "",
    }
