BASE_SYSTEM_PROMPT = (
    "You are an expert content creator. Generate high-quality {content_type} content."
)
TONE_CLAUSE = " Use a {tone} tone."
LENGTH_CLAUSE = " Keep it {length}."


def build_system_prompt(
    content_type: str, tone: str | None = None, length: str | None = None
) -> str:
    """Base instruction for the content type, then the tone clause, then the length clause."""
    prompt = BASE_SYSTEM_PROMPT.format(content_type=content_type)
    if tone:
        prompt += TONE_CLAUSE.format(tone=tone)
    if length:
        prompt += LENGTH_CLAUSE.format(length=length)
    return prompt
