"""
Chat dispatcher for the budgeting assistant.

Routes each message to one of four actions and records the exchange in
the session's chat log.

Dispatch mirrors the ledger contract in one respect: it never raises.
Every message produces a reply, falling back to canned text when the
generation endpoint fails and to an apology for anything unexpected.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol

from .analysis import analyze_budget, render_analysis
from .fallback import (
    APOLOGY_RESPONSE,
    GenerationResult,
    build_prompt,
    resolve_response,
)
from .intents import Intent, classify_intent, classify_project_type
from .ledger import LedgerStore, new_item_id
from .templates import PendingTemplateSlot, generate_template, render_template

logger = logging.getLogger(__name__)

NO_TEMPLATE_RESPONSE = "❌ No template available to apply. Please create a template first."

WELCOME_MESSAGE = """🎬 **Welcome to Movie Magic Budgeting AI!**

I'm here to help you with your movie budgeting needs. I can:

• **Create budget templates** for different types of projects
• **Analyze your current budget** and provide recommendations
• **Suggest optimizations** based on industry standards
• **Help with category organization** and expense tracking
• **Generate reports** and insights

What would you like to work on today?"""


class ChatRole(Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """One turn of the conversation. Never modified once logged."""
    role: ChatRole
    content: str
    id: str = field(default_factory=new_item_id)
    timestamp: datetime = field(default_factory=datetime.now)


class TextGenerator(Protocol):
    """Anything that can turn a prompt into a GenerationResult."""

    def generate(self, prompt: str, model: Optional[str] = None) -> GenerationResult:
        ...


@dataclass
class BudgetSession:
    """State owned by one application session.

    Holds the ledger, the append-only chat log and the pending template
    slot. Nothing here is persisted.
    """
    ledger: LedgerStore = field(default_factory=LedgerStore)
    pending: PendingTemplateSlot = field(default_factory=PendingTemplateSlot)
    messages: List[ChatMessage] = field(default_factory=list)
    busy: bool = False

    @classmethod
    def start(cls, ledger: Optional[LedgerStore] = None) -> "BudgetSession":
        """Create a session whose log opens with the assistant greeting."""
        session = cls(ledger=ledger or LedgerStore())
        session.messages.append(ChatMessage(ChatRole.ASSISTANT, WELCOME_MESSAGE))
        return session


class ChatDispatcher:
    """Classifies chat messages and carries out the matching action."""

    def __init__(self, session: BudgetSession, generator: TextGenerator):
        self.session = session
        self.generator = generator
        self._handlers: Dict[Intent, Callable[[str], str]] = {
            Intent.GENERATE_TEMPLATE: self._generate_template,
            Intent.ANALYZE: self._analyze,
            Intent.APPLY_TEMPLATE: self._apply_template,
            Intent.DELEGATE: self._delegate,
        }

    def send(self, text: str) -> Optional[ChatMessage]:
        """Process a submitted message and log the exchange.

        Blank input and input arriving while a previous message is still
        being handled are ignored: nothing is logged and None is returned.

        Returns:
            The assistant's reply message
        """
        if not text.strip() or self.session.busy:
            return None

        self.session.messages.append(ChatMessage(ChatRole.USER, text))
        self.session.busy = True
        try:
            reply = self.handle(text)
        finally:
            self.session.busy = False

        message = ChatMessage(ChatRole.ASSISTANT, reply)
        self.session.messages.append(message)
        return message

    def handle(self, text: str) -> str:
        """Produce the reply for a message without touching the chat log."""
        try:
            intent = classify_intent(text)
            logger.debug("Classified message as %s", intent.name)
            return self._handlers[intent](text)
        except Exception:
            logger.exception("Unexpected failure handling message")
            return APOLOGY_RESPONSE

    def _generate_template(self, text: str) -> str:
        template = generate_template(classify_project_type(text))
        self.session.pending.store(template)
        return render_template(template)

    def _analyze(self, text: str) -> str:
        return render_analysis(analyze_budget(self.session.ledger.state))

    def _apply_template(self, text: str) -> str:
        template = self.session.pending.take()
        if template is None:
            return NO_TEMPLATE_RESPONSE

        items = template.to_line_items()
        for item in items:
            self.session.ledger.add_item(item)
        logger.info("Applied %s: %d items added", template.name, len(items))

        return (
            "✅ **Template Applied Successfully!**\n\n"
            f"I've added {len(items)} budget items to your project. "
            "You can now review and adjust them in the Budget section."
        )

    def _delegate(self, text: str) -> str:
        result = self.generator.generate(build_prompt(text))
        if not result.ok:
            logger.info("Using offline reply: %s", result.error)
        return resolve_response(text, result)
