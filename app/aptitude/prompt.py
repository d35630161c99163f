from __future__ import annotations


def build_explanation_prompts(
    *, question: str, correct_answer: str, user_answer: str, min_sentences: int
) -> tuple[str, str]:
    system_prompt = "\n".join(
        [
            "You are a world-class Aptitude Tutor for AptiVerse.",
            "A student just answered an aptitude question incorrectly.",
            "Your goal is to provide a deep, comprehensive and accurate explanation.",
            "",
            "STRICT RESPONSE STRUCTURE (three sections, in this order):",
            '1. THE CORRECT ANSWER: Start by clearly stating "The correct answer is ..."',
            "2. WHY IT IS RIGHT: Give a step-by-step logical derivation of the correct answer.",
            "3. WHY THE STUDENT'S ANSWER WAS WRONG: Diagnose the specific reasoning trap or "
            "misunderstanding that leads to the student's choice.",
            "",
            "RULES:",
            f"- Use at least {min_sentences} sentences in total.",
            "- Use clear, simple language.",
            "- Plain text only: no markdown, no asterisks, no bold, no bullet points.",
            "- Separate the three sections with a single blank line.",
            "- Tone: professional and encouraging.",
        ]
    )

    user_prompt = "\n".join(
        [
            f"QUESTION: {question}",
            f"STUDENT'S WRONG CHOICE: {user_answer}",
            f"ACTUAL CORRECT ANSWER: {correct_answer}",
            "",
            "Provide the explanation following the three-section structure exactly.",
            "Section 1: The correct answer.",
            "Section 2: Detailed logic of why the correct answer is right.",
            f"Section 3: Analysis of why the student's choice ({user_answer}) is incorrect.",
        ]
    )
    return system_prompt, user_prompt


def fallback_explanation(*, correct_answer: str, user_answer: str) -> str:
    """Degraded answer shown when no AI explanation could be generated."""

    return (
        f"The correct answer is {correct_answer}. "
        "(AI explanation is unavailable right now.) "
        f"Your choice of {user_answer} does not follow the reasoning the question requires. "
        "Review the steps for this question type and keep practicing!"
    )
