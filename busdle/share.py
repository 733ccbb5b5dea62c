"""
Plain-text result summary the front-end copies to the clipboard.

Example:
  🎯 Busdle October 19, 2026 - 2 Guesses 🔥
  Normal Mode • 🏆 EXCELLENT!

  10-5-10 🟨🟨🟩
  5-10-10 🟩🟩🟩

  🚌 Play Busdle at your local bus stop!
  #Busdle #Wordle #BusGame
"""

from datetime import date, datetime
from typing import Iterable, Optional

from .types import GameMode

EMOJI = {"exact": "🟩", "displaced": "🟨", "absent": "⬛"}


def _long_date(d: date) -> str:
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def format_template_date(tag: str, today: Optional[date] = None) -> str:
    if tag == "current":
        return _long_date(today or date.today())
    try:
        return _long_date(datetime.fromisoformat(tag).date())
    except ValueError:
        return tag


def performance_rating(guess_count: int) -> str:
    if guess_count == 1:
        return "🎯 PERFECT!"
    if guess_count <= 3:
        return "🏆 EXCELLENT!"
    if guess_count <= 5:
        return "👍 GOOD!"
    return "💪 Keep trying!"


def build_share_text(history: Iterable, template_date: str, mode: GameMode,
                     today: Optional[date] = None) -> str:
    """history: anything with .guess and .verdict (GuessEntry works)."""
    rows = list(history)
    count = len(rows)
    mode_emoji = "🌟" if mode == "easy" else "🔥"
    mode_text = "Wimpy Mode" if mode == "easy" else "Normal Mode"
    plural = "" if count == 1 else "es"

    lines = [
        f"🎯 Busdle {format_template_date(template_date, today)} - {count} Guess{plural} {mode_emoji}",
        f"{mode_text} • {performance_rating(count)}",
        "",
    ]
    for row in rows:
        lines.append("-".join(row.guess) + " " + "".join(EMOJI.get(v, "⬜") for v in row.verdict))
    lines.append("")
    lines.append("🚌 Play Busdle at your local bus stop!")
    lines.append("#Busdle #Wordle #BusGame")
    return "\n".join(lines)
