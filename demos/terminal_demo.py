"""
Terminal Demo
=============
Plays a dialogue script in the terminal.

Usage:
    python demos/terminal_demo.py [script_id]

Scripts are loaded from demos/data/. NPC lines are printed, options are
picked by number. Custom verbs (e.g. !open_gate) are only logged.
"""

import sys
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from parley import Conversation, ScriptLibrary, Speaker, default_store

DATA_PATH = Path(__file__).parent / "data"


class DemoCampaign:
    """Stand-in for the game's campaign; logs custom verbs."""

    def __init__(self):
        self.logger = logging.getLogger("DemoCampaign")

    def run_action(self, verb: str, speaker: Speaker, args: list[str]) -> None:
        self.logger.info(f"{speaker.display_name} runs custom action {verb} {' '.join(args)}")


def choose(options) -> int:
    """Ask the player to pick an option."""
    for number, option in enumerate(options, start=1):
        print(f"  {number}) {option.line}")

    while True:
        answer = input("> ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return int(answer) - 1
        print(f"Pick a number between 1 and {len(options)}.")


def play(conversation: Conversation) -> None:
    """Run a conversation to the end."""
    speaker = conversation.speaker

    while True:
        interaction = conversation.get_next_interaction()
        if interaction is None:
            break

        npc_line = interaction.npc_line
        if npc_line:
            npc_line.execute_before_line()
            print(f"\n[{speaker.display_name}]")
            print(npc_line.line)
            npc_line.execute()

        if interaction.options:
            option = interaction.options[choose(interaction.options)]
            option.execute_before_line()
            option.execute()
        elif npc_line:
            input("(press enter)")

    print("\n-- conversation over --")


def main():
    logging.basicConfig(level=logging.INFO)

    library = ScriptLibrary(DATA_PATH)
    library.load_all()

    script_id = sys.argv[1] if len(sys.argv) > 1 else "bridge_keeper"
    if script_id not in library:
        print(f"Unknown script {script_id!r}. Available: {', '.join(library.ids())}")
        sys.exit(1)

    speaker = Speaker(id=script_id, name=script_id.replace("_", " ").title())
    conversation = library.create_conversation(
        script_id,
        handler=DemoCampaign(),
        speaker=speaker,
    )
    play(conversation)

    print(f"Global variables: {default_store().as_dict()}")
    print(f"Local variables: {conversation.local.as_dict()}")


if __name__ == "__main__":
    main()
