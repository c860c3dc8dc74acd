"""System instructions sent to the text-generation gateway."""

CONTEXT_FOCUS = {
    "hackathon": "You are structuring an idea for a hackathon pitch. Focus on innovation, technical feasibility, and impact.",
    "startup": "You are structuring an idea for a startup investor pitch. Focus on market opportunity, scalability, and business model.",
    "presentation": "You are structuring an idea for a class presentation. Focus on clarity, educational value, and engagement.",
    "innovation": "You are structuring an idea for an innovation challenge. Focus on creativity, uniqueness, and potential impact.",
}

PITCH_DURATIONS = {
    "hackathon": "2-3 minutes",
    "startup": "5-10 minutes",
    "presentation": "5-7 minutes",
    "innovation": "3-5 minutes",
}

# Keys of the structured idea document, in pitch order.
STRUCTURE_SECTIONS = {
    "problem_statement": ["problem", "challenge", "issue"],
    "solution": ["solution", "approach", "product"],
    "target_audience": ["audience", "users", "customers", "target"],
    "value_proposition": ["value", "unique", "proposition", "advantage"],
    "market_fit": ["market", "fit", "opportunity", "timing"],
    "execution_plan": ["execution", "implementation", "plan", "roadmap"],
    "call_to_action": ["action", "next", "call"],
}


def idea_structuring_prompt(context: str, tone: str) -> str:
    focus = CONTEXT_FOCUS.get(context, CONTEXT_FOCUS["startup"])
    return f"""{focus}

Transform the raw idea into a structured format with these components:
1. problem_statement - What specific problem does this solve?
2. solution - What is the proposed solution/product?
3. target_audience - Who are the primary users/beneficiaries?
4. value_proposition - What makes this unique and valuable?
5. market_fit - Why is this relevant now? What market need does it address?
6. execution_plan - How would this be implemented? (optional)
7. call_to_action - How to engage judges/investors/audience?

Tone: {tone}
Return ONLY a JSON object with the keys above and clear, concise string content for each."""


IDEA_EVALUATION_PROMPT = """Evaluate the structured idea on these criteria (1-10 scale):

1. clarity - How clear and understandable is the idea?
2. persuasiveness - How convincing is the value proposition?
3. creativity - How unique and innovative is the solution?
4. market_potential - How viable is the market opportunity?
5. feasibility - How realistic is the execution plan?

Return ONLY a JSON object:
{
  "clarity": {"score": int, "suggestions": [string], "strengths": [string]},
  "persuasiveness": {...},
  "creativity": {...},
  "market_potential": {...},
  "feasibility": {...},
  "overall_score": int,
  "summary": string,
  "strengths": [string, string, string],
  "improvements": [string, string, string],
  "recommendations": [string]
}"""


def pitch_script_prompt(context: str) -> str:
    duration = PITCH_DURATIONS.get(context, "5 minutes")
    return f"""Create a compelling pitch script based on the structured content provided.

Context: {context}
Target duration: {duration}

The script should:
- Start with a hook that grabs attention
- Clearly articulate the problem and solution
- Include a compelling story or use case
- Highlight the unique value proposition
- End with a strong call to action
- Include natural speaking cues and pauses

Format as a readable script with clear sections and speaking notes."""


SLIDE_CONTENT_PROMPT = """Create slide content based on the structured idea. Generate 6-10 slides that tell a compelling story:
title, problem, solution, market opportunity, competitive advantage, business model,
team/implementation, impact/vision, call to action.

Each slide has a clear title, 3-5 bullet points and speaker notes.
Return ONLY a JSON array: [{"title": string, "content": [string], "notes": string}]"""


SUMMARY_PROMPT = """Create a concise one-page summary based on the structured idea content.

The summary should:
- Be 2-3 paragraphs maximum
- Highlight the key problem and solution
- Include the target audience and value proposition
- Be professional and compelling

Format as clean, readable text without bullet points."""


def question_generation_prompt(configuration: dict) -> str:
    duration = int(configuration.get("duration") or 30)
    count = max(1, duration // 5)  # ~5 minutes per question
    company = configuration.get("company")
    at_company = f" at {company}" if company else ""
    question_types = ", ".join(configuration.get("question_types") or ["behavioral", "technical"])
    return f"""Generate {count} interview questions for a {configuration.get("experience_level", "mid")}-level {configuration.get("role")} position{at_company}.

Question types to include: {question_types}
Overall difficulty: {configuration.get("difficulty", "medium")}

Questions must be relevant to the role and experience level, progressive in
difficulty and realistic for a {duration} minute interview.

Return ONLY a JSON array:
[{{"id": "q1", "question_text": string, "question_type": string, "difficulty": "easy|medium|hard",
   "expected_keywords": [string], "evaluation_criteria": [string], "follow_ups": [string]}}]"""


INTERVIEW_FEEDBACK_PROMPT = """Provide comprehensive interview feedback based on the questions, the candidate's responses and the interview configuration.

Be constructive, specific, encouraging but honest. Unanswered questions count against the candidate.

Return ONLY a JSON object:
{
  "overall_score": int (0-100),
  "summary": string,
  "strengths": [string],
  "improvements": [string],
  "detailed_analysis": {
    "communication_skills": string,
    "technical_knowledge": string,
    "problem_solving_ability": string,
    "industry_knowledge": string
  },
  "recommendations": [string],
  "practice_suggestions": [string],
  "next_steps": [string]
}"""
