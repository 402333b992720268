"""
Offline fallback for the text-generation endpoint.

The endpoint call produces a GenerationResult; resolve_response turns it
into the reply text. Failures map to one of four fixed paragraphs chosen
from the user's original message, so the mapping can be tested without a
network call.
"""

from dataclasses import dataclass
from typing import Optional

from .intents import FallbackTopic, classify_fallback_topic


APOLOGY_RESPONSE = (
    "I apologize, but I'm having trouble processing your request right now. "
    "Please try again or ask me something else about movie budgeting."
)

TEMPLATE_ADVICE_RESPONSE = "I'd be happy to help you create a budget template! \n" + """
For a feature film, I recommend starting with these categories:
• Above the Line (Director, Producer, Cast)
• Production (Equipment, Location, Props)
• Post-Production (Editing, VFX, Sound)
• Other (Insurance, Legal, Marketing)
• Contingency (Emergency Fund)

Would you like me to create a detailed template for your specific project type?"""

ANALYSIS_REQUEST_RESPONSE = "I can help you analyze your budget! \n" + """
To provide the best analysis, I'll need to know:
• Your total budget vs. actual spending
• Which categories are over/under budget
• Your project timeline and scope

Would you like me to analyze your current budget data?"""

RECOMMENDATIONS_RESPONSE = """Here are some general movie budgeting recommendations:

1. **Always include a contingency fund** (10-15% of total budget)
2. **Track actual vs. budgeted amounts** regularly
3. **Break down large expenses** into smaller, manageable items
4. **Consider post-production costs** early in planning
5. **Plan for unexpected expenses** in each category

What specific aspect would you like advice on?"""

GENERAL_RESPONSE_TEMPLATE = "I understand you're asking about \"{user_input}\". \n" + """
As a movie budgeting assistant, I can help you with:
• Creating budget templates
• Analyzing spending patterns
• Providing industry recommendations
• Organizing categories and subcategories
• Tracking variances and trends

What specific aspect of movie budgeting would you like to explore?"""

PROMPT_TEMPLATE = """You are an expert movie budgeting assistant. You help filmmakers create and manage budgets for their projects.

Context: You have access to industry-standard movie budgeting categories and can provide intelligent recommendations.

User input: {user_input}

Please provide a helpful, professional response that includes:
- Clear explanations
- Industry best practices
- Specific recommendations when appropriate
- Professional tone

Response:"""


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one text-generation call: either text or a failure reason."""
    text: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "GenerationResult":
        return cls(text=text)

    @classmethod
    def failure(cls, reason: str) -> "GenerationResult":
        return cls(error=reason)

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


def build_prompt(user_input: str) -> str:
    """Wrap raw user input with the budgeting assistant preamble."""
    return PROMPT_TEMPLATE.format(user_input=user_input)


def fallback_response(user_input: str) -> str:
    """Pick the canned reply for a message when generation is unavailable."""
    topic = classify_fallback_topic(user_input)
    if topic == FallbackTopic.TEMPLATE:
        return TEMPLATE_ADVICE_RESPONSE
    if topic == FallbackTopic.ANALYSIS:
        return ANALYSIS_REQUEST_RESPONSE
    if topic == FallbackTopic.RECOMMENDATION:
        return RECOMMENDATIONS_RESPONSE
    return GENERAL_RESPONSE_TEMPLATE.format(user_input=user_input)


def resolve_response(user_input: str, result: GenerationResult) -> str:
    """Return generated text, or the offline reply when the call failed."""
    if result.ok:
        return result.text
    return fallback_response(user_input)
