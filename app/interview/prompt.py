from __future__ import annotations

from app.interview.schemas import TechnicalQuestion

OPTION_LABELS = ("A", "B", "C", "D")

FALLBACK_PARAGRAPH = (
    "I am a highly motivated professional with a strong background in technical "
    "problem-solving and cross-functional collaboration. Throughout my career, I have "
    "consistently demonstrated a commitment to excellence and a proactive approach to "
    "challenges. My ability to adapt to new environments and master complex systems has "
    "allowed me to deliver high-quality results consistently. I am eager to bring my "
    "expertise and passion for innovation to your team, contributing to the continued "
    "success and growth of the organization while further developing my professional skills."
)

FALLBACK_GREETING = (
    "Hello! I am your AI Technical Interviewer. I will be evaluating your skills for this "
    "position today. To begin our session, may I have your name?"
)

NOT_CONFIGURED_STEP = (
    "FEEDBACK: I'm currently unable to provide real-time feedback because the AI service "
    "is not configured. However, please continue your practice!\n"
    "NEXT_QUESTION: Let's move to the next part of our assessment."
)

STEP_APOLOGY = (
    "FEEDBACK: I apologize, but I encountered a technical interruption.\n"
    "NEXT_QUESTION: Could you please repeat your last response so we can continue?"
)

CODE_REVIEW_APOLOGY = (
    "FEEDBACK: I encountered an error while reviewing your code. Please try submitting again."
)

NO_MORE_QUESTIONS = "NONE - The interview is complete."

DEFAULT_CONFIDENCE = 0.80


def build_start_prompts(*, role: str, wants_paragraph: bool) -> tuple[str, str]:
    if wants_paragraph:
        system_prompt = "\n".join(
            [
                "You are an expert Professional Communication Coach.",
                f"Generate a professional, high-level interview response paragraph for a {role} position.",
                "The paragraph should be between 60 and 100 words.",
                "It should sound professional and confident, and include some industry-specific terminology.",
                "STRICT RULE: no markdown, no bold, no asterisks. Plain text only.",
            ]
        )
        user_prompt = (
            f"Provide a professional interview response paragraph that a candidate for a {role} "
            "role would read out loud to practice their delivery."
        )
        return system_prompt, user_prompt

    system_prompt = "\n".join(
        [
            f"You are a sophisticated, elite technical interviewer for {role} positions.",
            "Your persona: professional, highly intelligent, encouraging, but rigorous.",
            "Your goal: conduct a structured technical assessment that feels like a real conversation.",
            "CRITICAL RULES:",
            "1. NO MARKDOWN: never use asterisks, bold, or special formatting. Plain text only.",
            "2. FLOW: start by introducing yourself and asking for the candidate's name.",
            "3. ADAPTIVE: be warm and welcoming. Use the candidate's name once you have it.",
        ]
    )
    user_prompt = (
        f"Initiate a high-level technical interview for a {role} position. Begin with a "
        "professional greeting, introduce your role as an AI evaluator, and ask for the "
        "candidate's name to begin the session."
    )
    return system_prompt, user_prompt


STEP_SYSTEM_PROMPT = "\n".join(
    [
        "You are an elite Technical AI Interviewer conducting a structured assessment that "
        "analyzes both technical accuracy and candidate confidence.",
        "",
        "CONFIDENCE ANALYSIS RULES:",
        "1. You will receive a Speech Confidence Score (0.0 to 1.0) with each candidate response.",
        "2. High confidence (above 0.85): acknowledge their clarity and directness.",
        "3. Moderate confidence (0.70 to 0.85): note they sound a bit hesitant.",
        "4. Low confidence (below 0.70): encourage them and suggest they speak more firmly.",
        "",
        "INTERVIEW ARCHITECTURE:",
        "Phase 1: Rapport. Greet the candidate by name and explain the process.",
        "Phase 2: Technical evaluation. Ask multiple-choice questions one by one.",
        "",
        "EVALUATION PROTOCOL:",
        "- Grade the answer against the correct option and explanation provided.",
        "- Comment on delivery using the confidence score.",
        "- Combine technical accuracy and communication style in the feedback.",
        "",
        "OUTPUT FORMAT (plain text only, no markdown):",
        "FEEDBACK: [analysis of the technical answer and of the voice confidence/delivery]",
        "NEXT_QUESTION: [next question with its options, or a closing message]",
    ]
)


def format_question(question: TechnicalQuestion) -> str:
    options = "\n".join(
        f"{label}) {option}" for label, option in zip(OPTION_LABELS, question.options)
    )
    return f"{question.question}\n\n{options}"


def build_first_turn_prompt(*, candidate_name: str, first: TechnicalQuestion | None) -> str:
    if first is not None:
        question_block = f"Question: {format_question(first)}"
        next_question = format_question(first)
    else:
        question_block = "Ask a foundational technical question related to the role."
        next_question = "Could you explain the core concepts of your primary programming language?"

    return "\n".join(
        [
            f'The candidate\'s name is "{candidate_name}".',
            "1. Acknowledge them warmly.",
            "2. Explain that you will be evaluating their technical skills and communication confidence.",
            "3. Transition immediately to the first technical question from the bank.",
            "",
            "FIRST QUESTION:",
            question_block,
            "",
            "Format:",
            f"FEEDBACK: It is a pleasure to meet you, {candidate_name}. I will be assessing your "
            "technical expertise and delivery today. Let's begin.",
            f"NEXT_QUESTION: {next_question}",
        ]
    )


def build_followup_prompt(
    *,
    candidate_response: str,
    confidence: float,
    previous: TechnicalQuestion | None,
    upcoming: TechnicalQuestion | None,
) -> str:
    if previous is not None:
        label = OPTION_LABELS[previous.correct_answer]
        previous_block = "\n".join(
            [
                f'Question: "{previous.question}"',
                f"Correct Option: {label}",
                f'Correct Text: "{previous.options[previous.correct_answer]}"',
                f'Explanation: "{previous.explanation}"',
            ]
        )
    else:
        previous_block = "N/A"

    upcoming_block = f"Question: {format_question(upcoming)}" if upcoming else NO_MORE_QUESTIONS

    return "\n".join(
        [
            f'Candidate\'s Response: "{candidate_response}"',
            f"Speech Confidence Score: {confidence:.2f}",
            "",
            "PREVIOUS QUESTION CONTEXT:",
            previous_block,
            "",
            "NEXT QUESTION TO ASK:",
            upcoming_block,
            "",
            "Task:",
            "- Evaluate the candidate's response against the previous question.",
            "- Provide FEEDBACK following the protocol (correction if wrong, insight if right).",
            "- Provide NEXT_QUESTION from the bank, or a closing message if there is none.",
        ]
    )


def build_code_review_prompts(
    *, challenge_title: str, problem_statement: str, code: str
) -> tuple[str, str]:
    system_prompt = "\n".join(
        [
            "You are an expert Go developer and technical interviewer.",
            "Review the candidate's code for a specific challenge.",
            "Provide constructive feedback on:",
            "1. Correctness: does it solve the problem?",
            "2. Efficiency: time and space complexity.",
            "3. Idioms: does it follow the language's best practices?",
            "4. Quality: readability and structure.",
            "Write plain text without markdown or asterisks.",
            'Start with "FEEDBACK:" followed by your analysis.',
            "End with a score out of 100.",
        ]
    )
    user_prompt = "\n".join(
        [
            f"Challenge: {challenge_title}",
            f"Problem: {problem_statement}",
            "Candidate's Code:",
            code,
        ]
    )
    return system_prompt, user_prompt
