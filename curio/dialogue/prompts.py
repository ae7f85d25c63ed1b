PREFERENCE_OPTIONS = """1. Just the basics
2. How to get started quickly
3. Core concepts"""

GREETING = "What do you want to learn about?"


def get_subject_identification_prompt(message: str) -> str:
    return f"""Analyze this user input for a learning subject.

Reply with exactly one line:
- If the subject is clear and unambiguous: "IDENTIFIED: [subject name] | [category]"
- If the subject could mean several different things: "CLARIFY: [ambiguous term] | [possible categories, comma separated]"
- If no learning subject can be found: "UNCLEAR"

Examples:
- "Swift" → "CLARIFY: Swift | Programming Language, Bird Species, Taylor Swift"
- "Python" → "CLARIFY: Python | Programming Language, Snake Species"
- "Machine Learning" → "IDENTIFIED: Machine Learning | Computer Science"
- "React" → "CLARIFY: React | JavaScript Library, Chemical Reaction"

User input: {message}"""


def get_clarification_prompt(candidate: str, candidate_categories: str, message: str) -> str:
    return f"""The user previously mentioned "{candidate}", which could refer to {candidate_categories}.

Based on their answer below, decide the final subject and its category.

Reply with exactly one line: "RESOLVED: [final subject] | [category]"

Examples:
- "PL", "programming" or "language" → "RESOLVED: {candidate} | Programming Language"
- "yes" or "the first one" → "RESOLVED: {candidate} | <first listed category>"
- "animal" or "snake" → "RESOLVED: {candidate} | Animal/Biology"

User clarification: {message}"""


def get_learning_preference_prompt(subject: str, message: str) -> str:
    return f"""The user is choosing what they want to learn about "{subject}".

The options are:
{PREFERENCE_OPTIONS}

Decide which option the user chose.
Reply with exactly one line: "PREFERENCE: [basics|getting_started|core_concepts]"

Examples:
- "1", "basics", "basic" or "the basics" → "PREFERENCE: basics"
- "2", "getting started", "quick", "start" or "how to get started" → "PREFERENCE: getting_started"
- "3", "core concepts", "concepts" or "core" → "PREFERENCE: core_concepts"

User input: {message}"""


def format_preference_question(subject: str, category: str, lead: str = "I identified") -> str:
    return (
        f"{lead} the subject: {subject} in the category: {category}\n\n"
        f"Now, what would you like to learn about {subject}?\n"
        f"{PREFERENCE_OPTIONS}\n\n"
        "Please choose 1, 2, or 3, or tell me which option you prefer."
    )


def format_clarification_question(term: str, candidate_categories: str) -> str:
    return (
        f'I see you mentioned "{term}". This could refer to {candidate_categories}. '
        "Could you clarify which one you're interested in?"
    )


def format_unclear_subject() -> str:
    return "I could not identify a clear subject from your input. Could you be more specific?"


def format_preference_retry() -> str:
    return (
        "I didn't quite understand your preference. Please choose:\n"
        f"{PREFERENCE_OPTIONS}\n\n"
        "You can respond with the number (1, 2, or 3) or describe which option you prefer."
    )


def format_confirmation(subject: str, category: str, preference_label: str) -> str:
    return (
        "Excellent! I have all the information I need:\n"
        f"- Subject: {subject}\n"
        f"- Category: {category}\n"
        f"- Learning focus: {preference_label}\n\n"
        f"I'm ready to help you learn about {subject} with a focus on {preference_label}!"
    )
