from __future__ import annotations

import re
from typing import List, Optional, Tuple

from dsabot.utils.languages import normalize_language


_FENCE_TAG = re.compile(r"^[a-z0-9+#]*$", re.I)

CPP_PRELUDE = (
	"#include <iostream>\n#include <vector>\n#include <string>\n#include <algorithm>\n"
	"#include <unordered_map>\n#include <unordered_set>\n#include <queue>\n#include <stack>\n"
	"#include <map>\n#include <set>\nusing namespace std;\n\n"
)
JAVA_PRELUDE = "import java.util.*;\nimport java.util.stream.*;\n\n"
PYTHON_PRELUDE = "from typing import *\n\n"


def strip_code_fences(text: str) -> Tuple[Optional[str], str]:
	"""Remove a surrounding ``` fence.

	Returns ``(language, code)`` where language is the fence tag normalized to a
	supported key, or None when the tag is missing or unknown.
	"""
	code = (text or "").strip()
	if not code.startswith("```"):
		return None, code
	first_line, newline, rest = code[3:].partition("\n")
	if newline and _FENCE_TAG.match(first_line.strip()):
		tag, body = first_line.strip(), rest
	else:
		# ```print(1)``` or a fence whose first line is already code
		tag, body = "", code[3:]
	body = body.rstrip()
	if body.endswith("```"):
		body = body[:-3]
	return normalize_language(tag), body.strip()


def strip_all_fences(text: str) -> str:
	"""Drop every fence marker, for code pasted mid-message."""
	cleaned = re.sub(r"```[a-z]*\n?", "", text or "", flags=re.I)
	return cleaned.replace("```", "").strip()


def prepare_source(language: str, code: str) -> str:
	"""Add the boilerplate that snippet-style submissions usually leave out."""
	if language == "cpp":
		if "#include" not in code:
			code = CPP_PRELUDE + code
		if "main(" not in code and "main  (" not in code:
			code += "\n\nint main() { return 0; }"
	elif language == "java":
		# Wandbox compiles into a fixed file name, so public classes would not match it
		code = re.sub(r"public\s+class", "class", code)
		if "import " not in code:
			code = JAVA_PRELUDE + code
		if "static void main" not in code:
			if "class Solution" in code:
				code = re.sub(r"}\s*$", "\n    public static void main(String[] args) {}\n}", code, count=1)
			else:
				code += "\nclass Main { public static void main(String[] args) {} }"
	elif language == "python":
		if "import " not in code and "from " not in code:
			code = PYTHON_PRELUDE + code
	return code


def truncate(text: Optional[str], limit: int) -> str:
	if not text:
		return ""
	return text[:limit] + "..." if len(text) > limit else text


def split_message(text: str, limit: int = 1900) -> List[str]:
	"""Split into chunks of at most ``limit`` characters, preferring newline boundaries."""
	chunks: List[str] = []
	pos = 0
	while pos < len(text):
		end = pos + limit
		if end < len(text):
			newline = text.rfind("\n", pos, end)
			if newline > pos:
				end = newline
		chunk = text[pos:end].strip()
		if chunk:
			chunks.append(chunk)
		pos = end
	return chunks
