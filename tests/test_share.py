"""
Testing the clipboard summary.
"""

from datetime import date

from busdle.game import GuessEntry
from busdle.share import build_share_text, format_template_date, performance_rating

def test_share_text_layout():
    history = [
        GuessEntry(guess=["10", "5", "5"], verdict=["displaced", "displaced", "exact"]),
        GuessEntry(guess=["5", "10", "5"], verdict=["exact", "exact", "exact"]),
    ]
    text = build_share_text(history, "2026-10-19", "hard")
    assert text.splitlines() == [
        "🎯 Busdle October 19, 2026 - 2 Guesses 🔥",
        "Normal Mode • 🏆 EXCELLENT!",
        "",
        "10-5-5 🟨🟨🟩",
        "5-10-5 🟩🟩🟩",
        "",
        "🚌 Play Busdle at your local bus stop!",
        "#Busdle #Wordle #BusGame",
    ]

def test_single_guess_easy_mode_header():
    history = [GuessEntry(guess=["1"], verdict=["exact"])]
    text = build_share_text(history, "current", "easy", today=date(2026, 1, 2))
    assert text.startswith("🎯 Busdle January 2, 2026 - 1 Guess 🌟\nWimpy Mode • 🎯 PERFECT!")

def test_unparseable_date_used_verbatim():
    assert format_template_date("someday") == "someday"

def test_performance_rating_bands():
    assert performance_rating(1) == "🎯 PERFECT!"
    assert performance_rating(3) == "🏆 EXCELLENT!"
    assert performance_rating(5) == "👍 GOOD!"
    assert performance_rating(6) == "💪 Keep trying!"
