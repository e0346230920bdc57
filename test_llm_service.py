from types import SimpleNamespace

import pytest

from dsabot.config import settings
from dsabot.errors import ExternalServiceError
from dsabot.services.llm_service import EVALUATION_PROMPT, PROBLEM_PROMPT, LLMService


pytestmark = pytest.mark.anyio


class FakeGroq:
	def __init__(self, content="🚀 HINT: sort first", error=None):
		self.requests = []
		self._content = content
		self._error = error
		self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

	def _create(self, **kwargs):
		self.requests.append(kwargs)
		if self._error is not None:
			raise self._error
		return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self._content))])


class FakeGemini:
	def __init__(self, text):
		self.models = []
		self.prompts = []
		self._text = text

	def GenerativeModel(self, name):
		self.models.append(name)
		return self

	def generate_content(self, prompt, generation_config=None):
		self.prompts.append((prompt, generation_config))
		return SimpleNamespace(text=self._text)


@pytest.fixture
def groq(monkeypatch):
	monkeypatch.setattr(settings, "llm_provider", "groq")
	monkeypatch.setattr(settings, "groq_api_key", "test-key")
	monkeypatch.setattr(settings, "groq_model", "test-model")
	monkeypatch.setattr(settings, "answer_temperature", 0.4)
	monkeypatch.setattr(settings, "groq_max_tokens", 512)


def _service_with(monkeypatch, client) -> LLMService:
	service = LLMService()
	monkeypatch.setattr(service, "_ensure_client", lambda: client)
	return service


async def test_groq_without_key_is_not_configured(monkeypatch):
	monkeypatch.setattr(settings, "llm_provider", "groq")
	monkeypatch.setattr(settings, "groq_api_key", None)
	service = LLMService()
	assert service.enabled is False
	with pytest.raises(ExternalServiceError):
		await service.generate("system", "prompt")


async def test_unknown_provider_is_not_configured(monkeypatch):
	monkeypatch.setattr(settings, "llm_provider", "openai")
	service = LLMService()
	assert service.enabled is False
	with pytest.raises(ExternalServiceError):
		await service.generate("system", "prompt")


async def test_groq_request_carries_messages_and_settings(groq, monkeypatch):
	client = FakeGroq(content="  Use two pointers.  ")
	service = _service_with(monkeypatch, client)

	answer = await service.generate("be terse", "two sum?")

	assert answer == "Use two pointers."
	request = client.requests[0]
	assert request["model"] == "test-model"
	assert request["max_tokens"] == 512
	assert request["temperature"] == 0.4
	assert request["messages"] == [
		{"role": "system", "content": "be terse"},
		{"role": "user", "content": "two sum?"},
	]


async def test_task_helpers_pick_prompt_and_temperature(groq, monkeypatch):
	client = FakeGroq()
	service = _service_with(monkeypatch, client)

	await service.generate_problem()
	await service.evaluate_solution("Two Sum", "return []")

	problem, evaluation = client.requests
	assert problem["temperature"] == 0.9
	assert problem["messages"][0]["content"] == PROBLEM_PROMPT
	assert evaluation["temperature"] == 0.2
	assert evaluation["messages"][0]["content"] == EVALUATION_PROMPT
	assert "return []" in evaluation["messages"][1]["content"]


async def test_provider_errors_become_external_service_error(groq, monkeypatch):
	service = _service_with(monkeypatch, FakeGroq(error=RuntimeError("rate limited")))
	with pytest.raises(ExternalServiceError) as exc_info:
		await service.generate("system", "prompt")
	assert exc_info.value.detail == "LLM request failed: rate limited"
	assert "rate limited" not in exc_info.value.render()


@pytest.mark.parametrize("content", ["", "   \n", None])
async def test_empty_completion_is_an_error(groq, monkeypatch, content):
	service = _service_with(monkeypatch, FakeGroq(content=content))
	with pytest.raises(ExternalServiceError):
		await service.generate("system", "prompt")


async def test_gemini_gets_system_instruction_in_prompt(monkeypatch):
	monkeypatch.setattr(settings, "llm_provider", "gemini")
	monkeypatch.setattr(settings, "gemini_model", "gemini-test")
	client = FakeGemini("🚀 TITLE: Two Sum")
	service = _service_with(monkeypatch, client)

	text = await service.generate("system rules", "make a problem", temperature=0.7)

	assert text == "🚀 TITLE: Two Sum"
	assert client.models == ["gemini-test"]
	prompt, config = client.prompts[0]
	assert prompt == "system rules\n\nUser:\nmake a problem"
	assert config == {"temperature": 0.7}
	assert service.model_name == "gemini-test"
