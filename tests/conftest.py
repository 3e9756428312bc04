import random

import pytest

from mockinvi.config import EvaluatorConfig


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def offline_config():
    return EvaluatorConfig(api_key=None, mock_mode=False)


@pytest.fixture
def mock_config():
    return EvaluatorConfig(api_key=None, mock_mode=True)


@pytest.fixture
def interview():
    return {
        "questions": [
            "Tell me about yourself.",
            "What is a REST API?",
            "Describe a conflict you resolved.",
        ],
        "answers": [
            "I am a backend engineer with five years of experience building payment systems in Python.",
            "HTTP stuff",
            "Question skipped",
        ],
        "ideal_answers": [
            "A concise career summary tied to the role.",
            "An architectural style over HTTP using resources and verbs.",
            "A STAR story with a measurable outcome.",
        ],
    }
