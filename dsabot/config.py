from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List
from dotenv import load_dotenv


# Ensure .env is loaded eagerly
load_dotenv(dotenv_path=".env")


class Settings(BaseSettings):
	# Server
	host: str = "0.0.0.0"
	port: int = 8000
	cors_allow_origins: List[str] = [
		"http://localhost:3000",
		"http://127.0.0.1:3000",
	]

	# Auth
	api_key: str | None = None  # bearer key shared with the chat gateway

	# LLM Provider Selection
	llm_provider: str = "gemini"  # options: gemini, groq

	# Google Gemini
	gemini_api_key: str | None = None
	gemini_model: str = "gemini-2.0-flash"

	# Groq
	groq_api_key: str | None = None
	groq_model: str = "openai/gpt-oss-120b"
	answer_temperature: float = 0.4
	groq_max_tokens: int = 2048

	# Code execution sandbox (Wandbox)
	wandbox_url: str = "https://wandbox.org"
	cpp_compiler: str = "gcc-13.2.0"
	java_compiler: str = "openjdk-jdk-21+35"
	python_compiler: str = "cpython-3.13.8"
	execution_timeout_seconds: float = 30.0

	# Commands
	command_prefix: str = "!"
	cooldown_seconds: float = 5.0
	max_code_length: int = 5000

	# Logging
	log_level: str = "INFO"
	analytics_path: str | None = None  # e.g., logs/commands.jsonl

	@field_validator("answer_temperature")
	@classmethod
	def clamp_temperature(cls, v: float) -> float:
		return max(0.0, min(1.0, v))

	@field_validator("cors_allow_origins", mode="before")
	@classmethod
	def parse_cors_origins(cls, v):
		# Allow environment variable override
		if isinstance(v, str):
			return [origin.strip() for origin in v.split(",")]
		return v

	@field_validator("llm_provider")
	@classmethod
	def normalize_provider(cls, v: str) -> str:
		return (v or "gemini").strip().lower()

	class Config:
		env_file = ".env"
		env_file_encoding = "utf-8"


settings = Settings()
