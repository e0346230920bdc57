from __future__ import annotations

import logging
import re
from typing import Dict, List, Tuple

from dsabot.utils.languages import SUPPORTED_LANGUAGES


logger = logging.getLogger(__name__)

PATTERN_WEIGHT = 2
DEFAULT_LANGUAGE = "python"

# (language, pattern, weight). Every matching row counts once.
_RULES: List[Tuple[str, re.Pattern[str], int]] = [
	# C++
	("cpp", re.compile(r"#include\s*<[a-z]+>", re.I), PATTERN_WEIGHT),
	("cpp", re.compile(r"std::[a-z]+", re.I), PATTERN_WEIGHT),
	("cpp", re.compile(r"cout\s*<<"), PATTERN_WEIGHT),
	("cpp", re.compile(r"cin\s*>>"), PATTERN_WEIGHT),
	("cpp", re.compile(r"int\s+main\s*\("), PATTERN_WEIGHT),
	("cpp", re.compile(r"using\s+namespace\s+std"), PATTERN_WEIGHT),
	("cpp", re.compile(r"vector\s*<[a-z0-9_&*]+>", re.I), PATTERN_WEIGHT),
	("cpp", re.compile(r"unordered_(map|set)\s*<", re.I), PATTERN_WEIGHT),
	("cpp", re.compile(r"Solution\s*\{", re.I), PATTERN_WEIGHT),
	("cpp", re.compile(r"public:\s*[a-z0-9_]+.*\(.*\) \{", re.I), PATTERN_WEIGHT),
	# Java
	("java", re.compile(r"public\s+class\s+[a-z0-9_]+", re.I), PATTERN_WEIGHT),
	("java", re.compile(r"static\s+void\s+main\s*\(", re.I), PATTERN_WEIGHT),
	("java", re.compile(r"System\.out\.print", re.I), PATTERN_WEIGHT),
	("java", re.compile(r"package\s+[a-z0-9_.]+", re.I), PATTERN_WEIGHT),
	("java", re.compile(r"import\s+java\.", re.I), PATTERN_WEIGHT),
	("java", re.compile(r"Solution\s*\{[\s\n]*public\s+[a-z0-9\[\]<>]+\s+[a-z0-9_]+\s*\(", re.I), PATTERN_WEIGHT),
	("java", re.compile(r"int\[\]\s+[a-z0-9_]+", re.I), PATTERN_WEIGHT),
	("java", re.compile(r"List<[A-Z][a-z]+>"), PATTERN_WEIGHT),
	# Python
	("python", re.compile(r"^def\s+[a-z0-9_]+\s*\(", re.M), PATTERN_WEIGHT),
	("python", re.compile(r"^elif\s+", re.M), PATTERN_WEIGHT),
	("python", re.compile(r"^import\s+[a-z0-9_]+", re.M), PATTERN_WEIGHT),
	("python", re.compile(r"^from\s+[a-z0-9_]+\s+import", re.M), PATTERN_WEIGHT),
	("python", re.compile(r"print\s*\("), PATTERN_WEIGHT),
	("python", re.compile(r"if\s+__name__\s*==\s*['\"]__main__['\"]:"), PATTERN_WEIGHT),
	("python", re.compile(r"class\s+Solution(:\s*|\([\s\S]*\):)", re.I), PATTERN_WEIGHT),
	("python", re.compile(r"self[,.]", re.I), PATTERN_WEIGHT),
	("python", re.compile(r"List\[[a-z0-9_]+\]", re.I), PATTERN_WEIGHT),
	("python", re.compile(r"Optional\[[a-z0-9_]+\]", re.I), PATTERN_WEIGHT),
	("python", re.compile(r"->\s+[a-z0-9\[\]]+", re.I), PATTERN_WEIGHT),
]


def score(code: str) -> Dict[str, int]:
	"""Score a snippet against every supported language.

	Pattern matches add their weight; the punctuation heuristics below add 1
	regardless of which patterns matched.
	"""
	content = (code or "").strip()
	scores: Dict[str, int] = {lang: 0 for lang in SUPPORTED_LANGUAGES}

	for lang, pattern, weight in _RULES:
		if pattern.search(content):
			scores[lang] += weight

	# Statement terminators lean towards C++/Java
	semicolons = content.count(";")
	if semicolons > 2:
		scores["cpp"] += 1
		scores["java"] += 1
	elif semicolons == 0 and len(content) > 20:
		scores["python"] += 1

	# Block syntax
	if "{" in content and "}" in content:
		scores["cpp"] += 1
		scores["java"] += 1

	return scores


def detect(code: str) -> str:
	"""Return the best-guess language tag for ``code``; never raises.

	Languages are visited in ``SUPPORTED_LANGUAGES`` order and only a strictly
	higher score replaces the current pick, so ties go to the earlier language.
	All-zero scores fall back to ``python``.
	"""
	scores = score(code)
	best_score = 0
	detected = DEFAULT_LANGUAGE
	for lang in SUPPORTED_LANGUAGES:
		if scores[lang] > best_score:
			best_score = scores[lang]
			detected = lang
	logger.debug("detection scores=%s winner=%s", scores, detected)
	return detected
