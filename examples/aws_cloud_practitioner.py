"""Example: check the AnkiConnect connection and list decks.

Run with Anki open and AnkiConnect installed:

    APPDATA=~/.local/share ANKI_PROFILE="User 1" python examples/aws_cloud_practitioner.py
"""

import asyncio

from anki_deck import CardSearch, DeckClient, load_config

DECK_NAME = "AWS Cloud Practitioner Cert"


async def main() -> None:
    deck_config = load_config().to_deck_config()

    async with DeckClient(deck_config) as deck:
        connection = await deck.check_connection()
        print(connection.value)

        decks = await deck.get_all_deck_names()
        print("Decks:", decks.value)

        card = await deck.get_specific_card_data(
            DECK_NAME, CardSearch(field_name="Question", search_val="What is Amazon EC2?")
        )
        print("Specific card:", card.value)


if __name__ == "__main__":
    asyncio.run(main())
