from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime


class ProblemFields(BaseModel):
	"""Sections extracted from a generated DSA problem; absent sections stay None."""
	title: Optional[str] = None
	difficulty: Optional[str] = None
	statement: Optional[str] = None
	constraints: Optional[str] = None
	sample_io: Optional[str] = None


class FeedbackFields(BaseModel):
	correctness: Optional[str] = None
	time_complexity: Optional[str] = None
	space_complexity: Optional[str] = None
	edge_cases: Optional[str] = None
	optimization: Optional[str] = None
	verdict: Optional[str] = None


class ExecutionResult(BaseModel):
	stdout: str = ""
	stderr: str = ""
	compile_output: str = ""
	status: str = ""
	time: str = "N/A"
	memory: str = "N/A"


class EmbedField(BaseModel):
	name: str
	value: str
	inline: bool = False


class Embed(BaseModel):
	title: Optional[str] = None
	description: Optional[str] = None
	color: Optional[int] = None
	fields: List[EmbedField] = Field(default_factory=list)
	footer: Optional[str] = None
	timestamp: Optional[datetime] = None


class CommandReply(BaseModel):
	"""What the chat gateway should post back, in order: messages first, then embeds."""
	messages: List[str] = Field(default_factory=list)
	embeds: List[Embed] = Field(default_factory=list)


class CommandIn(BaseModel):
	user_id: str = Field(..., min_length=1, description="Chat platform author id")
	content: str = Field(..., description="Raw message text, including the command prefix")


class AskIn(BaseModel):
	question: str = Field(..., min_length=1, description="The DSA problem or question to explain")


class AskOut(BaseModel):
	answer: str
	chunks: List[str]
	created_at: datetime


class RunIn(BaseModel):
	code: str = Field(..., min_length=1, description="Source code, optionally wrapped in a ``` fence")
	language: Optional[str] = Field(default=None, description="cpp|java|python (aliases: py, c++); detected when omitted")
	explain: bool = Field(default=True, description="Ask the LLM to explain the execution result")


class RunOut(BaseModel):
	language: str
	detected: bool
	result: ExecutionResult
	insight: Optional[str] = None


class DetectIn(BaseModel):
	code: str


class DetectOut(BaseModel):
	language: str
	scores: Dict[str, int]


class InterviewUserIn(BaseModel):
	user_id: str = Field(..., min_length=1)


class InterviewAnswerIn(BaseModel):
	user_id: str = Field(..., min_length=1)
	code: str = Field(..., min_length=1, description="Candidate's solution source code")


class InterviewOut(BaseModel):
	user_id: str
	problem: ProblemFields
	problem_text: str
	hints_used: int
	attempts: int
	started_at: datetime


class HintOut(BaseModel):
	user_id: str
	hint: str
	hints_used: int


class FeedbackOut(BaseModel):
	user_id: str
	feedback: FeedbackFields
	passed: bool
	raw: str
	attempts: int


class InterviewSummaryOut(BaseModel):
	user_id: str
	duration_minutes: int
	hints_used: int
	attempts: int
