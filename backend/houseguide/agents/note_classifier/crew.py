from collections.abc import Sequence

import structlog
from crewai import Crew, Process

from houseguide.agents.note_classifier.agent import create_note_classifier_agent
from houseguide.agents.note_classifier.tasks import create_note_classification_task
from houseguide.providers.base import parse_json_object

logger = structlog.get_logger()


class NoteClassifierCrew:
    """Single-agent crew for classifying one redacted text."""

    def __init__(self, text: str, categories: Sequence[str]):
        self.text = text
        self.categories = tuple(categories)

    async def run(self) -> dict:
        """Run the classification crew.

        Returns the parsed ``{"category", "confidence", "reason"}`` mapping,
        or ``{}`` when the output holds no JSON object. Validation against the
        category set is left to the caller.
        """
        agent = create_note_classifier_agent()
        task = create_note_classification_task(agent, self.text, self.categories)

        crew = Crew(
            agents=[agent],
            tasks=[task],
            process=Process.sequential,
            verbose=False,
        )

        result = await crew.kickoff_async()
        raw = result.raw if hasattr(result, "raw") else str(result)
        parsed = parse_json_object(raw)
        logger.info(
            "note_classifier_crew_completed",
            category=parsed.get("category"),
            confidence=parsed.get("confidence"),
        )
        return parsed
