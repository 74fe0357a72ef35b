"""
Prompt templates for the technician assistant.

Two templates exist: a grounded one that carries documentation snippets and an
ungrounded one used when retrieval produced nothing usable. Both share the
persona/style block and the equipment-focus branch.
"""

from __future__ import annotations

from typing import List, Sequence

from app.config import settings
from app.models.schemas import ConversationTurn

CONTEXT_SEPARATOR = "\n---\n"
WHICH_MACHINE_QUESTION = "Which machine are you having trouble with?"

PERSONA = (
    "You are an expert technician helping a colleague fix equipment over the phone. "
    "Be natural and conversational, like you're walking them through the repair step-by-step in real time."
)

STYLE_GUIDELINES = [
    "You are an expert technician helping a colleague over the phone - be direct and natural",
    "Talk like you're having a real phone conversation with another technician",
    "Once machine is identified, acknowledge it and ask about the specific problem",
    'Avoid formal language like "since", "please confirm", "I recommend", "would be to"',
    'Use natural phrases like "try this", "go ahead and", "see if", "check if", "next thing to do", "now try"',
    'Don\'t start responses with "since" or repeat the problem back to them',
    "If the user describes a specific problem with a known machine, jump straight to the solution",
    'CRITICAL: If user says "issue resolved", "it\'s working", "problem fixed", "printing properly", '
    '"everything is fine", or similar, acknowledge success and stop troubleshooting - do NOT suggest more steps',
    "Look at the full conversation context to understand what they're working on",
    "Keep responses to 1-2 lines maximum - give the next step and move on",
    "Don't ask for confirmation unless genuinely needed for safety",
    "Be concise but helpful, like talking to an experienced colleague",
    "No emojis or special symbols",
]


def _focus_guidelines(equipment_name: str | None, grounded: bool) -> List[str]:
    if equipment_name:
        next_step = "the specific problem or providing help" if grounded else "the specific problem"
        return [
            f'MACHINE ALREADY SELECTED: The user has already selected "{equipment_name}" - '
            f'DO NOT ask "{WHICH_MACHINE_QUESTION}" - move straight to asking about {next_step}',
            f'Acknowledge the machine and ask "What\'s going on with the {equipment_name}?" or similar',
        ]
    return [
        f'STRUCTURED FLOW: If no machine is specified, first ask "{WHICH_MACHINE_QUESTION}" '
        "Then confirm the machine before troubleshooting",
    ]


def _current_machine_line(equipment_name: str | None) -> str:
    if equipment_name:
        return f"CURRENT MACHINE: {equipment_name} (already selected - user is working on this specific machine)"
    return "No machine specified yet"


def _focus_reminder(equipment_name: str | None) -> str:
    if equipment_name:
        return (
            f'IMPORTANT: The user has already selected "{equipment_name}" as their machine. '
            "DO NOT ask which machine they're having trouble with. Instead, acknowledge the machine and ask "
            "about the specific problem, or provide troubleshooting help directly."
        )
    return f'IMPORTANT: No machine specified yet. Ask "{WHICH_MACHINE_QUESTION}" to identify the equipment before troubleshooting.'


def _guidelines_block(equipment_name: str | None, grounded: bool) -> str:
    lines = STYLE_GUIDELINES[:2] + _focus_guidelines(equipment_name, grounded) + STYLE_GUIDELINES[2:]
    return "IMPORTANT GUIDELINES:\n" + "\n".join(f"- {line}" for line in lines)


def _history_block(history: Sequence[ConversationTurn], limit: int) -> str | None:
    if not history or limit <= 0:
        return None
    recent = list(history)[-limit:]
    return "Recent conversation:\n" + "\n".join(f"{turn.role}: {turn.content}" for turn in recent)


def build_prompt(
    query: str,
    history: Sequence[ConversationTurn],
    contexts: Sequence[str],
    equipment_name: str | None = None,
    history_turns: int = settings.history_turns,
) -> str:
    sections: List[str] = [PERSONA, _guidelines_block(equipment_name, grounded=bool(contexts))]

    if contexts:
        sections.append("Context from documentation:\n" + CONTEXT_SEPARATOR.join(contexts))
    else:
        about = f" about {equipment_name}" if equipment_name else ""
        sections.append(
            f"Note: I don't have specific documentation for this question{about}, "
            "but I can help based on general equipment knowledge and the machine details available."
        )

    sections.append(_current_machine_line(equipment_name))

    history_block = _history_block(history, history_turns)
    if history_block:
        sections.append(history_block)

    sections.append(f"User input: {query}")
    sections.append(_focus_reminder(equipment_name))
    return "\n\n".join(sections)


__all__ = ["build_prompt", "CONTEXT_SEPARATOR", "WHICH_MACHINE_QUESTION"]
