import json
import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from .config import EvaluatorConfig
from .errors import InsufficientDataError
from .evaluator import Completion, call_openai
from .parsing import strip_code_fences
from .rubrics import CONTEXT_LIMIT
from .schemas import InterviewCategory, QuestionSet, ResumeAnalysis

logger = logging.getLogger(__name__)

HR_TECHNICAL_FALLBACK = [
    ("Tell me about a time when you had to work with a difficult team member. How did you handle it?",
     "A good answer uses the STAR method (Situation, Task, Action, Result) and shows conflict "
     "resolution skills and professionalism."),
    ("Describe a challenging problem you solved. What was your approach?",
     "A strong response outlines a clear problem-solving process, demonstrates analytical thinking, "
     "and shows persistence in finding solutions."),
    ("How do you prioritize tasks when you have multiple deadlines?",
     "An effective answer shows time management skills, the ability to assess urgency vs importance, "
     "and communication with stakeholders about priorities."),
    ("What programming languages or tools are you most comfortable with and why?",
     "A comprehensive response mentions specific technologies, explains comfort level, and connects "
     "tools to practical applications or projects."),
    ("Explain the difference between a database and a spreadsheet to a non-technical person.",
     "A clear answer uses simple analogies, avoids jargon, and demonstrates the ability to "
     "communicate technical concepts to non-technical audiences."),
]

ROLE_FALLBACK = [
    ("What specific experience do you have that makes you suitable for a {role} position?",
     "A strong answer highlights relevant experience, specific achievements, and transferable skills "
     "that directly apply to {role} responsibilities."),
    ("Describe the most challenging aspect of working as a {role} and how you would handle it.",
     "An effective response identifies realistic challenges, shows problem-solving approach, and "
     "demonstrates resilience and adaptability."),
    ("What tools, technologies, or methodologies are essential for success in {role}?",
     "A comprehensive answer lists current industry-standard tools, explains their importance, and "
     "shows awareness of evolving technologies."),
    ("How do you stay updated with the latest trends and developments in your field?",
     "A good response shows commitment to continuous learning through courses, publications, "
     "networking, and hands-on practice."),
    ("Walk me through your approach to a typical project or task in {role}.",
     "A detailed answer outlines a systematic approach, shows planning skills, and demonstrates "
     "understanding of {role} workflows and best practices."),
]

RESUME_FALLBACK = [
    ("Tell me about your professional background and key achievements.",
     "A comprehensive answer highlighting relevant experience and quantifiable achievements."),
    ("What are your core technical skills and how have you applied them?",
     "A detailed response with specific technical expertise examples and practical applications."),
    ("Describe the most challenging project you worked on and how you overcame obstacles.",
     "A structured STAR method answer with measurable results and lessons learned."),
    ("How do you handle working under pressure and tight deadlines?",
     "A thoughtful response showing stress management skills and prioritization strategies."),
    ("Where do you see yourself in 5 years and how does this role fit your goals?",
     "An ambitious yet realistic career growth plan aligned with industry trends."),
    ("What specific experience makes you a good fit for this type of role?",
     "A targeted response connecting past experience to future role requirements."),
    ("Describe a time when you had to learn a new technology or skill quickly.",
     "A story demonstrating adaptability, learning agility, and proactive skill development."),
    ("How do you approach problem-solving when facing complex technical issues?",
     "A systematic approach showing analytical thinking and methodical troubleshooting."),
    ("Tell me about a time you worked effectively in a team environment.",
     "An example demonstrating collaboration, communication, and collective success."),
    ("What motivates you most in your professional work and career development?",
     "A genuine response showing passion, purpose, and alignment with career trajectory."),
]

FALLBACK_ANALYSIS = ResumeAnalysis(
    skills=["Problem Solving", "Communication", "Technical Skills"],
    suggested_role="Professional",
    strengths=["Professional experience", "Diverse background"],
    areas_to_improve=["Quantifiable achievements", "Technical depth"],
    suggestions="Focus on highlighting specific achievements with measurable impact.",
)

_SET_FORMAT = """Return JSON in this EXACT format:
{
  "questions": ["Question 1 text", "Question 2 text"],
  "ideal_answers": ["Ideal answer for question 1", "Ideal answer for question 2"]
}"""


def _hr_technical_prompt(count: int) -> str:
    return f"""Generate {count} professional interview questions that combine HR behavioral questions and basic technical concepts.

{_SET_FORMAT}

Requirements:
- Mix of HR behavioral questions (teamwork, problem-solving, communication)
- Basic technical concepts questions (not too advanced)
- Questions should be suitable for any professional level
- Ideal answers should be comprehensive but realistic
- Total questions: {count}
- Each ideal answer should be 2-3 sentences showing what a good response includes"""


def _role_prompt(count: int, role: str) -> str:
    return f"""Generate {count} specialized interview questions for a {role} position.

{_SET_FORMAT}

Requirements:
- Questions must be specific to {role} responsibilities
- Include technical skills relevant to {role}
- Add behavioral questions suited for {role} environment
- Mix of experience-based and scenario-based questions
- Ideal answers should demonstrate expert-level knowledge
- Total questions: {count}
- Focus on real-world applications and problem-solving"""


def _resume_prompt(count: int, resume_text: str) -> str:
    return f"""Analyze the following resume and provide a comprehensive assessment.

RESUME CONTENT:
{resume_text[:CONTEXT_LIMIT * 4]}

Return JSON in this exact format:
{{
  "analysis": {{
    "skills": ["Array of technical and professional skills found"],
    "suggested_role": "Most suitable job role based on experience",
    "strengths": ["Key strengths from resume"],
    "areas_to_improve": ["Specific areas to enhance"],
    "suggestions": "Detailed actionable advice"
  }},
  "questions": ["{count} questions specific to resume content, skills, projects and experience"],
  "ideal_answers": ["One ideal answer per question based on the candidate's background"]
}}

Total questions: {count}"""


def fallback_question_set(category: InterviewCategory, count: int, job_role: Optional[str] = None) -> QuestionSet:
    if category == InterviewCategory.ROLE_BASED:
        role = job_role or "professional"
        pairs = [(q.format(role=role), a.format(role=role)) for q, a in ROLE_FALLBACK]
    elif category == InterviewCategory.RESUME_BASED:
        pairs = RESUME_FALLBACK
    else:
        pairs = HR_TECHNICAL_FALLBACK
    pairs = pairs[:count]
    return QuestionSet(
        questions=[q for q, _ in pairs],
        ideal_answers=[a for _, a in pairs],
        analysis=FALLBACK_ANALYSIS if category == InterviewCategory.RESUME_BASED else None,
    )


def parse_question_set(text: str, category: InterviewCategory) -> Optional[QuestionSet]:
    try:
        data: Any = json.loads(strip_code_fences(text))
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    questions, ideals = data.get("questions"), data.get("ideal_answers")
    if not isinstance(questions, list) or not isinstance(ideals, list) or not questions:
        return None
    if category == InterviewCategory.RESUME_BASED and not isinstance(data.get("analysis"), dict):
        return None
    try:
        return QuestionSet(
            questions=[str(q) for q in questions],
            ideal_answers=[str(a) for a in ideals],
            analysis=data.get("analysis"),
        )
    except ValidationError:
        return None


def generate_question_set(
    category: InterviewCategory,
    question_count: int,
    config: EvaluatorConfig,
    job_role: Optional[str] = None,
    resume_text: Optional[str] = None,
    complete: Optional[Completion] = None,
) -> QuestionSet:
    """Generate questions with ideal answers for one interview.

    Transport errors propagate as ``RemoteServiceError``; unusable content
    falls back to a fixed question set.
    """
    category = InterviewCategory(category)
    if question_count < 1:
        raise InsufficientDataError("question_count must be at least 1")
    if category == InterviewCategory.ROLE_BASED and not (job_role or "").strip():
        raise InsufficientDataError("A job role is required for role-based interviews")
    if category == InterviewCategory.RESUME_BASED and not (resume_text or "").strip():
        raise InsufficientDataError("No resume text provided for analysis")

    if config.mock_mode and complete is None:
        return fallback_question_set(category, question_count, job_role)

    if category == InterviewCategory.ROLE_BASED:
        prompt = _role_prompt(question_count, job_role)
    elif category == InterviewCategory.RESUME_BASED:
        prompt = _resume_prompt(question_count, resume_text)
    else:
        prompt = _hr_technical_prompt(question_count)

    if complete is None:
        raw = call_openai(prompt, config, temperature=config.question_temperature,
                          max_tokens=config.question_max_tokens)
    else:
        raw = complete(prompt, config)

    result = parse_question_set(raw, category)
    if result is None:
        logger.warning("Unusable %s question set from generator, using fallback questions", category.value)
        return fallback_question_set(category, question_count, job_role)
    return result
