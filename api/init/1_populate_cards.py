"""
Script to populate the hebrew_card table with a starter vocabulary.
Creates a card for each word that doesn't already exist (matched on the Hebrew
word and category). Does not modify existing data.
"""
import sys
import logging
from pathlib import Path

# Add the api directory to Python path so we can import from ivrit
script_dir = Path(__file__).parent
api_dir = script_dir.parent
sys.path.insert(0, str(api_dir))

from sqlmodel import Session, select
from ivrit.core.database import engine, init_db
from ivrit.models.models import HebrewCard

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# (hebrew, english, transliteration, difficulty, category, gematria)
STARTER_CARDS = [
    ("שָׁלוֹם", "peace / hello", "shalom", 1, "vocabulary", 376),
    ("תּוֹדָה", "thank you", "todah", 1, "vocabulary", 415),
    ("כֵּן", "yes", "ken", 1, "vocabulary", 70),
    ("לֹא", "no", "lo", 1, "vocabulary", 31),
    ("בְּבַקָּשָׁה", "please", "bevakasha", 2, "vocabulary", None),
    ("אַבָּא", "father", "abba", 1, "family", 4),
    ("אִמָּא", "mother", "imma", 1, "family", 42),
    ("אָח", "brother", "ach", 1, "family", 9),
    ("אָחוֹת", "sister", "achot", 2, "family", 415),
    ("אֶחָד", "one", "echad", 1, "numbers", 13),
    ("שְׁנַיִם", "two", "shnayim", 1, "numbers", None),
    ("שָׁלוֹשׁ", "three", "shalosh", 2, "numbers", None),
    ("לָבָן", "white", "lavan", 2, "colors", 82),
    ("כָּחֹל", "blue", "kachol", 2, "colors", 58),
    ("יוֹם", "day", "yom", 1, "time", 56),
    ("לַיְלָה", "night", "laylah", 2, "time", 75),
    ("שַׁבָּת", "Sabbath", "shabbat", 2, "holidays", 702),
    ("פֶּסַח", "Passover", "pesach", 3, "holidays", 148),
    ("לֶחֶם", "bread", "lechem", 2, "food", 78),
    ("מַיִם", "water", "mayim", 1, "food", 90),
    ("בְּרֵאשִׁית", "in the beginning", "bereshit", 4, "biblical", 913),
    ("תּוֹרָה", "teaching / Torah", "torah", 3, "biblical", 611),
    ("אָמֵן", "amen", "amen", 2, "prayers", 91),
    ("בָּרוּךְ", "blessed", "baruch", 3, "prayers", 228),
    ("מַחְשֵׁב", "computer", "machshev", 4, "modern", None),
]


def populate_cards(session: Session) -> int:
    """Insert the starter cards that are missing. Returns the number created."""
    created = 0
    for word_hebrew, word_english, transliteration, difficulty, category, gematria in STARTER_CARDS:
        existing = session.exec(
            select(HebrewCard).where(
                HebrewCard.word_hebrew == word_hebrew,
                HebrewCard.category == category
            )
        ).first()
        if existing:
            continue

        session.add(HebrewCard(
            word_hebrew=word_hebrew,
            word_english=word_english,
            transliteration=transliteration,
            difficulty_level=difficulty,
            category=category,
            gematria_value=gematria
        ))
        created += 1

    session.commit()
    return created


def main():
    init_db()
    with Session(engine) as session:
        created = populate_cards(session)
    logger.info(f"Created {created} cards ({len(STARTER_CARDS) - created} already present)")


if __name__ == "__main__":
    main()
