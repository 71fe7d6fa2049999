"""Prompt templates and canned copy for the crisis assistant."""
from __future__ import annotations

from typing import List, Tuple

from .models import Classification
from .types import ChatCharity, ChatContext

CAUSE_LABELS = {
    "disaster_relief": "Disaster Relief",
    "health_crisis": "Health Crisis",
    "climate_events": "Climate Events",
    "humanitarian_crisis": "Humanitarian Crisis",
    "social_justice": "Social Justice",
}

GREETING_QUICK_REPLIES: Tuple[str, ...] = (
    "What happened?",
    "How bad is it?",
    "Who needs help?",
    "How can I help?",
)

GUIDELINES = """GUIDELINES:
1. ACCURACY: Answer ONLY based on the provided Article Content and your general knowledge of the crisis region. Do not make up facts.
2. EMPATHY: Use a compassionate, serious, but hopeful tone.
3. ACTION-ORIENTED: When appropriate, subtly mention how the matched charities can help with the specific needs mentioned in the article.
4. FORMAT: Use Markdown. Keep answers concise (under 150 words) unless asked for detail.
5. SAFETY: Do not answer questions unrelated to the crisis, charity, or humanitarian aid.
6. RELEVANCE: If a question is off-topic, politely redirect the user back to the crisis and how they can help.
"""


def get_cause_label(cause: str) -> str:
    """Human label for a cause category; unknown causes are prettified."""
    label = CAUSE_LABELS.get(cause)
    if label:
        return label
    return cause.replace("_", " ").strip().title() or "Crisis"


def build_greeting(classification: Classification) -> str:
    cause = get_cause_label(classification.cause).lower()
    return (
        f"I've analyzed the article about {cause} in {classification.geo_name}. "
        "I can help you understand the situation and make an informed decision about how to help. "
        "What would you like to know?"
    )


def _format_charities_block(charities: List[ChatCharity]) -> str:
    if not charities:
        return "No charities were matched for this crisis."
    return "\n".join(
        f"- {charity['name']}: {charity['description']} (Trust Score: {charity['trustScore']})"
        for charity in charities
    )


def build_system_prompt(context: ChatContext) -> str:
    """Create the system instruction that grounds the model on the article."""
    classification = context["classification"]
    needs = ", ".join(classification["identified_needs"]) or "not specified"
    groups = ", ".join(classification["affectedGroups"]) or "not specified"

    return (
        "ROLE:\n"
        'You are "Hope", an empathetic and knowledgeable crisis response assistant. '
        "Your goal is to help users understand the crisis described in the provided article "
        "and inspire them to donate to the suggested charities.\n\n"
        "CONTEXT:\n"
        f"Article Title: {context['articleTitle']}\n"
        f"Location: {classification['geoName']}\n"
        f"Severity: {classification['severity']}\n"
        f"Cause: {classification['cause']}\n"
        f"Identified Needs: {needs}\n"
        f"Affected Groups: {groups}\n\n"
        f"Article Summary: {context['articleSummary']}\n\n"
        "Full Article Content:\n"
        f'"""\n{context["articleText"]}\n"""\n\n'
        "MATCHED CHARITIES:\n"
        f"{_format_charities_block(context['matchedCharities'])}\n\n"
        f"{GUIDELINES}"
    )


def generate_suggestions(context: ChatContext) -> List[str]:
    """Context-aware follow-up questions, at most three."""
    suggestions: List[str] = []
    charities = context["matchedCharities"]
    if charities:
        suggestions.append(f"How can {charities[0]['name']} help with this crisis?")
    if context["classification"]["identified_needs"]:
        suggestions.append(f"What are the most urgent needs in {context['classification']['geoName']}?")
    suggestions.append("How can I make the biggest impact with my donation?")
    return suggestions[:3]
