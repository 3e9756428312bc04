EVALUATION_RUBRIC = {
    "rubric_name": "Interview Answer Rubric v1.0",
    "scale": [0, 10],
    "criteria": {
        "correctness":  {"weight": 0.25, "description": "How accurate compared to ideal answer"},
        "completeness": {"weight": 0.25, "description": "Coverage of ideal answer points"},
        "depth":        {"weight": 0.25, "description": "Detail level and insight compared to ideal"},
        "clarity":      {"weight": 0.25, "description": "Structure and communication quality"}
    }
}

DIMENSIONS = tuple(EVALUATION_RUBRIC["criteria"].keys())

NO_ANSWER = "No answer provided"
SKIPPED_ANSWER = "Question skipped"
PLACEHOLDER_ANSWERS = (NO_ANSWER, SKIPPED_ANSWER)

DEFAULT_IDEAL_ANSWER = "Professional response expected"
DEFAULT_REMARK = "No specific feedback provided"
DEFAULT_TIP = "Focus on providing more detailed and specific examples"

CONTEXT_LIMIT = 1000


def is_placeholder_answer(answer) -> bool:
    text = "" if answer is None else str(answer).strip()
    if not text:
        return True
    return text.lower() in {p.lower() for p in PLACEHOLDER_ANSWERS}
