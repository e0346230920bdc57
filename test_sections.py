from conftest import PASSING_FEEDBACK, PROBLEM_TEXT
from dsabot.utils.sections import is_passing, parse_feedback, parse_hint, parse_problem


def test_parse_full_problem():
	fields = parse_problem(PROBLEM_TEXT)
	assert fields.title == "Two Sum"
	assert fields.difficulty == "Easy"
	assert fields.statement.startswith("Given an array of integers")
	assert fields.constraints == "- 2 <= nums.length <= 10^4"
	assert fields.sample_io == "Input: nums = [2,7,11,15], target = 9\nOutput: [0,1]"


def test_missing_section_is_absent_not_empty():
	fields = parse_problem("🚀 TITLE: Two Sum\n🚀 STATEMENT: find pairs")
	assert fields.title == "Two Sum"
	assert fields.statement == "find pairs"
	assert fields.constraints is None
	assert fields.sample_io is None


def test_title_is_single_line_and_statement_spans_lines():
	text = "🚀 STATEMENT: line one\nline two\n\n🚀 TITLE: Merge Intervals\nnot part of the title"
	fields = parse_problem(text)
	assert fields.title == "Merge Intervals"
	assert fields.statement == "line one\nline two"


def test_first_label_wins_and_noise_is_ignored():
	text = (
		"Here is your problem!\n"
		"🚀 INTUITION & APPROACH\nno colon, skipped\n"
		"🚀 TITLE: First\n"
		"🚀 TITLE: Second\n"
	)
	fields = parse_problem(text)
	assert fields.title == "First"
	assert fields.statement is None


def test_empty_section_counts_as_absent():
	fields = parse_problem("🚀 TITLE:   \n🚀 CONSTRAINTS:\n🚀 DIFFICULTY: Hard")
	assert fields.title is None
	assert fields.constraints is None
	assert fields.difficulty == "Hard"


def test_parse_problem_without_markers():
	fields = parse_problem("The model forgot the format.")
	assert fields.model_dump() == {
		"title": None,
		"difficulty": None,
		"statement": None,
		"constraints": None,
		"sample_io": None,
	}
	assert parse_problem("").title is None


def test_parse_feedback_sections():
	fields = parse_feedback(PASSING_FEEDBACK)
	assert fields.correctness == "Handles all inputs."
	assert fields.time_complexity == "O(n)"
	assert fields.space_complexity == "O(n)"
	assert fields.edge_cases == "Duplicates are handled."
	assert fields.optimization == "None needed."
	assert fields.verdict == "PASS - clean hash map solution."


def test_feedback_headers_are_case_insensitive_and_unordered():
	text = "🚀 HEADER: final verdict\nPASS\n🚀 header: CORRECTNESS\nok"
	fields = parse_feedback(text)
	assert fields.verdict == "PASS"
	assert fields.correctness == "ok"
	assert fields.edge_cases is None


def test_verdict_pass():
	text = "🚀 HEADER: Correctness\nfine\n🚀 HEADER: Final Verdict\nPASS"
	assert is_passing(text, parse_feedback(text))
	assert is_passing(text)


def test_verdict_needs_improvement():
	text = "🚀 HEADER: Correctness\nfails on empty input\n🚀 HEADER: Final Verdict\nNEEDS IMPROVEMENT"
	assert not is_passing(text, parse_feedback(text))


def test_inline_final_verdict_passes_on_raw_text():
	text = "Overall... Final Verdict: Pass"
	assert parse_feedback(text).verdict is None
	assert is_passing(text)


def test_unstructured_feedback_is_not_pass():
	assert not is_passing("Looks good to me.")
	assert not is_passing("")


def test_parse_hint():
	assert parse_hint("🚀 HINT: Use a hash map.\nStore complements.") == "Use a hash map.\nStore complements."
	assert parse_hint("  Just a plain hint.  ") == "Just a plain hint."
