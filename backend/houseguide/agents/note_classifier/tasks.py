from collections.abc import Sequence

from crewai import Agent, Task

from houseguide.classification.categories import describe_categories


def create_note_classification_task(
    agent: Agent,
    text: str,
    categories: Sequence[str],
) -> Task:
    allowed = ", ".join(f'"{c}"' for c in categories)
    return Task(
        description=(
            "Classify this redacted case-management text.\n\n"
            f"Text: {text[:2000]}\n\n"
            "CATEGORIES (use these exact values):\n"
            f"{describe_categories(categories)}\n\n"
            "Return a JSON object with exactly three keys:\n"
            f'- "category": one of {allowed}\n'
            '- "confidence": a number between 0 and 1\n'
            '- "reason": one short sentence explaining the choice\n\n'
            "Guidelines:\n"
            "- Classify by meaning, not by isolated keywords. 'Works at Target' is "
            "work/school even without the word job.\n"
            "- Frustration about a work schedule is demeanor, not work/school.\n"
            "- Use a confidence below 0.5 when the text is too vague to place."
        ),
        expected_output=(
            'A JSON object: {"category": "...", "confidence": 0.0, "reason": "..."}'
        ),
        agent=agent,
    )
