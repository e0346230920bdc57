from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from dsabot.schemas import FeedbackFields, ProblemFields


MARKER = "🚀"

# label -> (field name, single line)
_PROBLEM_LABELS: Dict[str, Tuple[str, bool]] = {
	"TITLE": ("title", True),
	"DIFFICULTY": ("difficulty", True),
	"STATEMENT": ("statement", False),
	"CONSTRAINTS": ("constraints", False),
	"SAMPLE I/O": ("sample_io", False),
}

# Longest names first so "Time Complexity" is never shadowed by a shorter prefix.
_FEEDBACK_HEADERS: Tuple[Tuple[str, str], ...] = (
	("optimization suggestions", "optimization"),
	("space complexity", "space_complexity"),
	("time complexity", "time_complexity"),
	("final verdict", "verdict"),
	("correctness", "correctness"),
	("edge cases", "edge_cases"),
)


def _segments(text: str) -> Iterator[Tuple[str, str, str]]:
	"""Yield ``(LABEL, rest_of_label_line, following_lines)`` per marker segment.

	Segments without a ``LABEL:`` on their first line are skipped, as is any
	text before the first marker.
	"""
	parts = (text or "").split(MARKER)
	for part in parts[1:]:
		first_line, _, body = part.partition("\n")
		label, colon, rest = first_line.partition(":")
		if not colon:
			continue
		yield label.strip().upper(), rest, body


def _clean(value: str) -> Optional[str]:
	value = value.strip()
	return value or None


def parse_problem(text: str) -> ProblemFields:
	found: Dict[str, str] = {}
	for label, rest, body in _segments(text):
		entry = _PROBLEM_LABELS.get(label)
		if entry is None:
			continue
		field, single_line = entry
		if field in found:
			continue
		value = _clean(rest if single_line else f"{rest}\n{body}")
		if value is not None:
			found[field] = value
	return ProblemFields(**found)


def parse_feedback(text: str) -> FeedbackFields:
	found: Dict[str, str] = {}
	for label, rest, body in _segments(text):
		if label != "HEADER":
			continue
		heading = rest.lstrip()
		lowered = heading.lower()
		for name, field in _FEEDBACK_HEADERS:
			if lowered.startswith(name):
				if field not in found:
					# "Final Verdict: PASS" on one line keeps only "PASS"
					remainder = heading[len(name):].lstrip().removeprefix(":")
					value = _clean(f"{remainder}\n{body}")
					if value is not None:
						found[field] = value
				break
	return FeedbackFields(**found)


def parse_hint(text: str) -> str:
	"""Body of the ``HINT:`` section, or the whole reply when the model skipped the marker."""
	for label, rest, body in _segments(text):
		if label == "HINT":
			value = _clean(f"{rest}\n{body}")
			if value is not None:
				return value
	return (text or "").strip()


def is_passing(text: str, fields: FeedbackFields | None = None) -> bool:
	if "final verdict: pass" in (text or "").lower():
		return True
	if fields is None:
		fields = parse_feedback(text)
	return bool(fields.verdict) and "pass" in fields.verdict.lower()
