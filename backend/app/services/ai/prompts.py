"""
Prompt templates for case brief generation and brief-grounded chat
"""

BRIEF_SECTIONS = ("Facts", "Issues", "Holding", "Ratio/Reasoning", "Short Analysis")

BRIEF_SYSTEM_PROMPT = "You produce concise legal briefs."

BRIEF_PROMPT_TEMPLATE = (
    "You are a legal assistant that writes concise law-school-ready case briefs. "
    "Structure the brief with headings: {sections}. "
    "Be concise and use plain English. \n\n"
    "Text:\n{text}"
)

REFERENCE_SYSTEM_PROMPT = "You are a concise law-school assistant."

REFERENCE_PROMPT_TEMPLATE = (
    "You are a concise law-school assistant. Summarize the judgment available at: {file_url}\n"
    "Produce a student-ready brief with headings: Facts; Issues; Holding; Ratio/Reasoning; "
    "Disposition; Key Points (3 bullets). Keep each heading concise."
)

NO_ANSWER_REPLY = "I don't know based on the provided brief; check the judgment."

CHAT_SYSTEM_PROMPT = (
    'You are "TYC Assistant" that answers ONLY using the provided case brief. \n'
    f'If the answer cannot be confidently determined from the brief, reply "{NO_ANSWER_REPLY}" \n'
    "Always cite the brief section used (FACTS/ISSUES/HOLDING/RATIO/REASONING/ANALYSIS) when possible."
)

CHAT_PROMPT_TEMPLATE = (
    "Brief:\n{brief}\n\n"
    "User question: {question}\n\n"
    "Answer concisely and cite the brief section you used."
)


def build_brief_prompt(text: str, max_chars: int) -> str:
    """Embed at most max_chars characters of the extracted judgment text"""
    return BRIEF_PROMPT_TEMPLATE.format(
        sections=", ".join(BRIEF_SECTIONS),
        text=text[:max_chars]
    )


def build_reference_prompt(file_url: str) -> str:
    return REFERENCE_PROMPT_TEMPLATE.format(file_url=file_url)


def build_chat_prompt(brief: str, question: str) -> str:
    return CHAT_PROMPT_TEMPLATE.format(brief=brief, question=question)
