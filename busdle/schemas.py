"""
Explicit validation & Pydantic models
- Validate and serialize/deserialize data exchanged between client and server.
- Defines the structure of API requests and responses.
"""

from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator

# 1. Ride log
class BusEntryIn(BaseModel):
    bus_number: Optional[str] = Field(None, description="Bus number as typed, e.g. '10' or 'N5'")
    light_rail: Optional[Literal["1", "2"]] = Field(None, description="Shortcut for 'Line 1' / 'Line 2'")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"bus_number": "10"},
                {"light_rail": "1"},
            ]
        }
    }

class BusEntryOut(BaseModel):
    bus_number: str = Field(..., description="Bus or light-rail line")
    timestamp: str = Field(..., description="ISO timestamp of the ride")

class BusLogOut(BaseModel):
    date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    entries: List[BusEntryOut] = Field(..., description="Rides in the order they were logged")

# 2. Busdle template
class TemplateIn(BaseModel):
    bus_order: Union[str, List[str]] = Field(
        ..., description="Comma-separated string or list. Light rail is filtered out."
    )
    date: Optional[str] = Field(None, description="Game identity; defaults to today's date")
    bus_bank: Optional[List[str]] = Field(None, description="Buses allowed in easy mode for this game")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"bus_order": "10, 5, 10, N5"},
                {"bus_order": ["10", "5"], "date": "2026-10-19", "bus_bank": ["5", "10", "20"]},
            ]
        }
    }

class TemplateOut(BaseModel):
    date: Optional[str] = Field(None, description="Game identity")
    bus_order: List[str] = Field(..., description="Hidden target order")
    unique_bus_count: int = Field(..., description="How many distinct buses are in the order")
    bus_bank: Optional[List[str]] = Field(None, description="Template-specific bus bank")

# 3. Bus bank
class BusBankIn(BaseModel):
    buses: List[str] = Field(..., description="Buses allowed in easy mode")

class BusBankOut(BaseModel):
    buses: List[str] = Field(..., description="Effective bus bank in display order")

# 4. Game
class GuessRequest(BaseModel):
    buses: List[str] = Field(..., description="Ordered guess; length must match the hidden order")

    @field_validator("buses")
    @classmethod
    def validate_not_empty(cls, buses: List[str]) -> List[str]:
        """Length against the target is checked by the game, not here."""
        if len(buses) == 0:
            raise ValueError("Guess must contain at least one bus.")
        return buses

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"buses": ["10", "5", "10"]},
            ]
        }
    }

class PendingInputRequest(BaseModel):
    values: List[str] = Field(..., description="Half-typed inputs, one per slot")

class ModeRequest(BaseModel):
    mode: Literal["easy", "hard"] = Field(..., description="easy = pick from the bus bank")

class GuessEntryOut(BaseModel):
    guess: List[str] = Field(..., description="The player's guess")
    verdict: List[Literal["exact", "displaced", "absent"]] = Field(..., description="One verdict per position")
    animating: bool = Field(False, description="True for the row that was just submitted")

class GameStateOut(BaseModel):
    target_id: str = Field(..., description="Identity of the game being played")
    mode: Literal["easy", "hard"] = Field(..., description="Current input mode")
    game_won: bool = Field(..., description="True once a guess was all exact")
    target_length: int = Field(..., description="Buses per guess")
    unique_bus_count: int = Field(..., description="Distinct buses in the hidden order")
    pending_input: List[str] = Field(..., description="Saved half-typed inputs")
    history: List[GuessEntryOut] = Field(..., description="All guesses so far with verdicts")

class GuessResponse(BaseModel):
    feedback: GuessEntryOut = Field(..., description="Verdict for the submitted guess")
    game_won: bool = Field(..., description="Whether this guess won the game")
    guesses_made: int = Field(..., description="History length after this guess")
    secret: Optional[List[str]] = Field(None, description="Hidden order (only revealed once won)")

class ShareOut(BaseModel):
    text: str = Field(..., description="Emoji summary for the clipboard")
