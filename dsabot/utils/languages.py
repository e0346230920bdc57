from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from dsabot.config import settings


@dataclass(frozen=True)
class LanguageConfig:
	name: str
	compiler: str


# Iteration order of this table is also the detector's tie-break order.
SUPPORTED_LANGUAGES = ("cpp", "java", "python")

LANGUAGE_MAP: Dict[str, LanguageConfig] = {
	"cpp": LanguageConfig(name="C++", compiler=settings.cpp_compiler),
	"java": LanguageConfig(name="Java", compiler=settings.java_compiler),
	"python": LanguageConfig(name="Python", compiler=settings.python_compiler),
}

LANGUAGE_ALIASES: Dict[str, str] = {
	"py": "python",
	"python": "python",
	"cpp": "cpp",
	"c++": "cpp",
	"java": "java",
}


def normalize_language(lang: Optional[str]) -> Optional[str]:
	"""Map a user-supplied tag (``py``, ``c++``, ...) onto a supported key, or None."""
	if not lang:
		return None
	return LANGUAGE_ALIASES.get(lang.strip().lower())


def is_supported(lang: Optional[str]) -> bool:
	return bool(lang) and lang.strip().lower() in LANGUAGE_MAP


def get_language_config(lang: str) -> Optional[LanguageConfig]:
	return LANGUAGE_MAP.get((lang or "").strip().lower())
