# foreverr/prompts/writing_prompts.py
"""
Prompt templates for memorial writing (obituary, biography, tribute)
"""


class WritingPrompts:
    """System and user prompts per generation type"""

    OBITUARY_SYSTEM = (
        "You are a compassionate obituary writer. Write respectful, dignified obituaries "
        "based on the information provided. Never fabricate details."
    )

    OBITUARY = """
Write an obituary for {full_name}.
Born: {date_of_birth}
Died: {date_of_death}
Place of birth: {place_of_birth}
Place of death: {place_of_death}
{context}

Style: {style_instruction}

Write 200-400 words. Be respectful and compassionate. Do not make up specific details not provided.
"""

    OBITUARY_STYLES = {
        "formal": "Write in a formal, traditional obituary style with dignified language.",
        "warm": "Write in a warm, heartfelt style that celebrates the person's life and relationships.",
        "celebratory": "Write in an uplifting, celebratory tone focusing on the joy this person brought to others.",
    }

    BIOGRAPHY_SYSTEM = (
        "You are a compassionate biographer specializing in memorial tributes. Write beautiful, "
        "respectful biographies that celebrate the person's life. Never fabricate details."
    )

    BIOGRAPHY = """
Write a biography for {full_name}.

Key facts:
- Born: {date_of_birth}
- Died: {date_of_death}
- Place of birth: {place_of_birth}
- Place of death: {place_of_death}
{context}

Structure: {style_instruction}

Write 400-800 words. Be respectful and celebratory of their life. Do not fabricate specific details not provided; use graceful language to fill gaps.
"""

    BIOGRAPHY_STYLES = {
        "chronological": "Organize the biography chronologically from birth through life milestones to death. Use time-based sections.",
        "thematic": "Organize the biography thematically around the person's roles, passions, relationships, and legacy. Use themed sections.",
    }

    TRIBUTE_SYSTEM = (
        "You write heartfelt, personal tributes for memorial pages. Keep them genuine and warm "
        "without being generic. Write in first person."
    )

    TRIBUTE = """
Write a heartfelt tribute for {full_name}.

{context}

Write a 50-150 word tribute that feels personal and genuine. Use first person perspective as if from someone who knew {called_name}. Be warm but not overly sentimental.
"""
