import os

import pytest

# Set required environment variables BEFORE importing app code
os.environ["USE_MOCK_MODELS"] = "true"
os.environ["LANGFUSE_ENABLED"] = "false"
os.environ["GEMINI_API_KEY"] = ""
os.environ["GATEWAY_HOST"] = ""

from careercoach.core.call_monitor import CallMonitor
from careercoach.core.errors import TransientCallFailure
from careercoach.core.model_clients import MockModel
from careercoach.core.orchestrator import Orchestrator
from careercoach.core.result_cache import ResultCache
from careercoach.models.profile import JobRole, Profile


class FailingModel(MockModel):
    """A model whose every call fails like an unreachable endpoint."""

    def __init__(self, name: str = "Failing"):
        super().__init__(name)
        self.calls = 0

    async def invoke(self, prompt: str) -> str:
        self.calls += 1
        raise TransientCallFailure(self.name, "connection refused")


class ScriptedModel(MockModel):
    """Returns a fixed reply for every prompt."""

    def __init__(self, reply: str, name: str = "Scripted"):
        super().__init__(name)
        self.reply = reply

    async def invoke(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
def make_profile():
    def _make(**overrides) -> Profile:
        data = {
            "id": 1,
            "role": JobRole.BACKEND_DEVELOPER,
            "experience_years": 3,
            "summary": "Backend developer building payment APIs with Spring Boot.",
            "project_text": "Migrated a monolith billing service to Kubernetes.",
            "skills": ["Java", "Spring Boot", "PostgreSQL"],
        }
        data.update(overrides)
        return Profile(**data)
    return _make


@pytest.fixture
def profile(make_profile) -> Profile:
    return make_profile()


@pytest.fixture
def monitor() -> CallMonitor:
    return CallMonitor()


@pytest.fixture
def make_orchestrator(monitor):
    def _make(primary=None, analysis_model=None, drafting_model=None, cache=None, **kwargs):
        return Orchestrator(
            primary=primary or MockModel("Gemini"),
            analysis_model=analysis_model or MockModel("OpenAI"),
            drafting_model=drafting_model or MockModel("Claude"),
            monitor=monitor,
            cache=cache if cache is not None else ResultCache(),
            **kwargs,
        )
    return _make


@pytest.fixture
def failing_model():
    return FailingModel


@pytest.fixture
def scripted_model():
    return ScriptedModel
