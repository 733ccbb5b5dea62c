'''
Busdle API

Ride log:
GET    /logs/{date}                 -> rides logged that day
POST   /logs/{date}/entries         -> log a ride
POST   /logs/{date}/undo            -> remove the last ride
DELETE /logs/{date}/entries/{index} -> remove one ride
DELETE /logs/{date}                 -> clear the day

Admin:
PUT/GET/DELETE /busdle/template     -> the hidden bus order
PUT/GET        /busdle/bus-bank     -> buses offered in easy mode

Game (one per ?player_id=):
GET  /busdle/game                   -> state & history
POST /busdle/game/guess             -> submit a guess
POST /busdle/game/input             -> save half-typed input
POST /busdle/game/mode              -> easy/hard, before the first guess
POST /busdle/game/reset             -> start over
GET  /busdle/game/share             -> emoji summary
'''

from datetime import date

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware

from .config import APP_ENV, CORS_ORIGINS
from .db import get_db
from .repository import DBBusStore
from .state_store import DBGameStateStore
from .game import BusdleGame, GameRegistry, GuessEntry
from .engine import normalize_bus_id
from .ordering import order_bus_bank
from .share import build_share_text
from .bootstrap_db import create_all
from .logging_setup import configure_logging
from .errors import (
    GameAlreadyWon,
    IncompleteGuess,
    InvalidLength,
    ModeLocked,
    SubmissionInProgress,
    UnknownIdentifier,
)

from .schemas import (
    BusEntryIn,
    BusEntryOut,
    BusLogOut,
    TemplateIn,
    TemplateOut,
    BusBankIn,
    BusBankOut,
    GuessRequest,
    GuessResponse,
    GuessEntryOut,
    GameStateOut,
    PendingInputRequest,
    ModeRequest,
    ShareOut,
)


app = FastAPI(title="Busdle API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Live games, one per player
games = GameRegistry()


@app.on_event("startup")
def _startup():
    configure_logging()
    # Dev convenience: auto-create tables locally
    if APP_ENV == "local":
        create_all()


# Per-request repository bound to the current DB session
def get_repo(session = Depends(get_db)) -> DBBusStore:
    return DBBusStore(session)


# Per-request game-state store; games never keep it past the request
def get_state_store(session = Depends(get_db)) -> DBGameStateStore:
    return DBGameStateStore(session)


def get_game(
    player_id: str = "local",
    session = Depends(get_db),
    store: DBGameStateStore = Depends(get_state_store),
) -> BusdleGame:
    target = DBBusStore(session).get_current_target()
    if target is None:
        raise HTTPException(
            status_code=404,
            detail="No Busdle available. Ask the admin to set today's bus order.",
        )
    return games.get(player_id, target, store)


def _entry_out(entry: GuessEntry) -> GuessEntryOut:
    return GuessEntryOut(guess=entry.guess, verdict=entry.verdict, animating=entry.animating)


def _state_out(game: BusdleGame) -> GameStateOut:
    state = game.state
    return GameStateOut(
        target_id=state.target_id,
        mode=state.mode,
        game_won=state.game_won,
        target_length=len(game.target.sequence),
        unique_bus_count=len(set(game.target.sequence)),
        pending_input=state.pending_input,
        history=[_entry_out(e) for e in game.get_history()],
    )

# ---------------- Ride log ----------------

@app.get("/logs/{log_date}", response_model=BusLogOut, summary="Rides logged on a day")
def list_log(log_date: date, repo: DBBusStore = Depends(get_repo)) -> BusLogOut:
    return BusLogOut(date=log_date.isoformat(), entries=repo.list_log(log_date.isoformat()))

@app.post("/logs/{log_date}/entries", response_model=BusEntryOut, summary="Log a ride")
def add_entry(log_date: date, payload: BusEntryIn, repo: DBBusStore = Depends(get_repo)) -> BusEntryOut:
    if payload.light_rail:
        bus_number = f"Line {payload.light_rail}"
    else:
        bus_number = normalize_bus_id(payload.bus_number or "")
    if not bus_number:
        raise HTTPException(status_code=400, detail="Enter a bus number.")
    return repo.add_entry(log_date.isoformat(), bus_number)

@app.post("/logs/{log_date}/undo", response_model=BusEntryOut, summary="Remove the last ride")
def undo_entry(log_date: date, repo: DBBusStore = Depends(get_repo)) -> BusEntryOut:
    removed = repo.undo_last(log_date.isoformat())
    if removed is None:
        raise HTTPException(status_code=404, detail="Nothing to undo.")
    return removed

@app.delete("/logs/{log_date}/entries/{index}", response_model=BusEntryOut, summary="Remove one ride")
def remove_entry(log_date: date, index: int, repo: DBBusStore = Depends(get_repo)) -> BusEntryOut:
    removed = repo.remove_entry(log_date.isoformat(), index)
    if removed is None:
        raise HTTPException(status_code=404, detail="No ride at that index.")
    return removed

@app.delete("/logs/{log_date}", summary="Clear a day's rides")
def clear_log(log_date: date, repo: DBBusStore = Depends(get_repo)) -> dict:
    repo.clear_log(log_date.isoformat())
    return {"message": "Log cleared."}

# ---------------- Admin ----------------

@app.put("/busdle/template", response_model=TemplateOut, summary="Set the hidden bus order")
def set_template(payload: TemplateIn, repo: DBBusStore = Depends(get_repo)) -> TemplateOut:
    try:
        return repo.set_template(
            payload.bus_order,
            date=payload.date or date.today().isoformat(),
            bus_bank=payload.bus_bank,
        )
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))

@app.get("/busdle/template", response_model=TemplateOut, summary="Current template")
def get_template(repo: DBBusStore = Depends(get_repo)) -> TemplateOut:
    template = repo.get_template()
    if template is None:
        raise HTTPException(status_code=404, detail="No Busdle template set.")
    return template

@app.delete("/busdle/template", summary="Clear the current template")
def clear_template(repo: DBBusStore = Depends(get_repo)) -> dict:
    repo.clear_template()
    return {"message": "Template cleared."}

@app.put("/busdle/bus-bank", response_model=BusBankOut, summary="Set the active bus bank")
def set_bus_bank(payload: BusBankIn, repo: DBBusStore = Depends(get_repo)) -> BusBankOut:
    return BusBankOut(buses=repo.set_bus_bank(payload.buses))

@app.get("/busdle/bus-bank", response_model=BusBankOut, summary="Effective bus bank, display order")
def get_bus_bank(repo: DBBusStore = Depends(get_repo)) -> BusBankOut:
    return BusBankOut(buses=order_bus_bank(repo.effective_bus_bank()))

# ---------------- Game ----------------

@app.get("/busdle/game", response_model=GameStateOut, summary="Current game state")
def read_game(game: BusdleGame = Depends(get_game)) -> GameStateOut:
    return _state_out(game)

@app.post("/busdle/game/guess", response_model=GuessResponse, summary="Submit a guess")
def submit_guess(
    payload: GuessRequest,
    game: BusdleGame = Depends(get_game),
    store: DBGameStateStore = Depends(get_state_store),
) -> GuessResponse:
    # Free entry is typed text; easy mode picks exact ids from the bank
    buses = payload.buses
    if game.mode == "hard":
        buses = [normalize_bus_id(b) for b in buses]

    try:
        entry = game.submit_guess(buses, store)
    except UnknownIdentifier as ui:
        raise HTTPException(status_code=422, detail={"message": str(ui), "invalid": ui.invalid})
    except (IncompleteGuess, InvalidLength) as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except (GameAlreadyWon, SubmissionInProgress) as conflict:
        raise HTTPException(status_code=409, detail=str(conflict))

    won = game.is_won()
    return GuessResponse(
        feedback=_entry_out(entry),
        game_won=won,
        guesses_made=len(game.state.history),
        secret=list(game.target.sequence) if won else None,
    )

@app.post("/busdle/game/input", response_model=GameStateOut, summary="Save half-typed input")
def save_input(
    payload: PendingInputRequest,
    game: BusdleGame = Depends(get_game),
    store: DBGameStateStore = Depends(get_state_store),
) -> GameStateOut:
    values = payload.values
    if game.mode == "hard":
        values = [normalize_bus_id(v) for v in values]
    game.set_pending_input(values, store)
    return _state_out(game)

@app.post("/busdle/game/mode", response_model=GameStateOut, summary="Switch easy/hard mode")
def set_mode(
    payload: ModeRequest,
    game: BusdleGame = Depends(get_game),
    store: DBGameStateStore = Depends(get_state_store),
) -> GameStateOut:
    try:
        game.set_mode(payload.mode, store)
    except ModeLocked as ml:
        raise HTTPException(status_code=409, detail=str(ml))
    return _state_out(game)

@app.post("/busdle/game/reset", response_model=GameStateOut, summary="Start the game over")
def reset_game(
    game: BusdleGame = Depends(get_game),
    store: DBGameStateStore = Depends(get_state_store),
) -> GameStateOut:
    game.reset(store)
    return _state_out(game)

@app.get("/busdle/game/share", response_model=ShareOut, summary="Emoji summary to share")
def share_game(game: BusdleGame = Depends(get_game)) -> ShareOut:
    return ShareOut(text=build_share_text(game.get_history(), game.state.target_id, game.state.mode))
