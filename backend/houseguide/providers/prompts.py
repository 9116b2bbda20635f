import json
from collections.abc import Sequence

from houseguide.classification.categories import describe_categories

REPORT_SYSTEM_PROMPT = (
    "You are a professional residential care facility staff member writing "
    "weekly progress reports.\n\n"
    "STRICT REQUIREMENTS:\n"
    "1. Follow the provided template structure EXACTLY, keeping the underscored "
    "section headers in the same order.\n"
    "2. Use professional, clinical language appropriate for sober living "
    "facility documentation.\n"
    '3. For empty sections, write "No updates this week."\n'
    "4. Be factual and objective. Only report on the data provided; do not "
    "invent or infer events.\n"
    "5. Maintain resident confidentiality: first name and last initial only, "
    "and keep placeholders such as [PHONE] or [REDACTED_NAME] as they are.\n\n"
    "Return ONLY the completed report with no additional headers or commentary."
)


def build_report_prompt(structured_input: dict, template: str) -> str:
    resident = structured_input.get("resident", {}).get("name", "")
    period = structured_input.get("period", {})
    return (
        f"Generate a weekly report for {resident} for the week of "
        f"{period.get('week_start', '')} to {period.get('week_end', '')}.\n\n"
        f"TEMPLATE TO FOLLOW EXACTLY:\n{template}\n\n"
        f"DATA AVAILABLE (JSON):\n{json.dumps(structured_input, indent=2, sort_keys=True)}\n\n"
        "IMPORTANT:\n"
        "- Fill the header fields from the resident, house and period data\n"
        "- Fill each section from the matching records only\n"
        '- Use "No updates this week." for sections without relevant data'
    )


def build_classification_prompt(text: str, categories: Sequence[str]) -> str:
    allowed = ", ".join(f'"{c}"' for c in categories)
    return (
        "You are a case management assistant for sober living facilities. "
        "Classify the following redacted text into exactly one category.\n\n"
        f"CATEGORIES (use these exact values):\n{describe_categories(categories)}\n\n"
        f'Text: "{text[:2000]}"\n\n'
        'Respond with JSON only: {"category": one of ' + allowed + ', '
        '"confidence": number between 0 and 1, "reason": short sentence}'
    )
