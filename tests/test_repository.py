# tests/test_repository.py
import pytest

from busdle.game import BusdleGame
from busdle.repository import DBBusStore, parse_bus_order
from busdle.state_store import DBGameStateStore

def test_parse_bus_order_accepts_string_or_list():
    assert parse_bus_order("10, N5,,  5 ") == ["10", "N5", "5"]
    assert parse_bus_order(["10", " ", "5"]) == ["10", "5"]

def test_template_filters_light_rail_and_counts_unique(db_session):
    repo = DBBusStore(db_session)

    template = repo.set_template("10, Line 1, 5, 10, Line 2", date="2026-10-19")
    assert template.bus_order == ["10", "5", "10"]
    assert template.unique_bus_count == 2

    target = repo.get_current_target()
    assert target.id == "2026-10-19"
    assert target.sequence == ("10", "5", "10")

def test_template_of_only_light_rail_is_rejected(db_session):
    repo = DBBusStore(db_session)
    with pytest.raises(ValueError):
        repo.set_template("Line 1, Line 2", date="2026-10-19")
    assert repo.get_template() is None

def test_cleared_template_reads_as_none(db_session):
    repo = DBBusStore(db_session)
    repo.set_template(["5"], date="2026-10-19")
    repo.clear_template()
    assert repo.get_template() is None
    assert repo.get_current_target() is None

def test_template_bank_wins_over_active_bank(db_session):
    repo = DBBusStore(db_session)
    repo.set_bus_bank(["20", "Line 1", "5"])
    assert repo.get_bus_bank() == ["Line 1", "5", "20"]

    repo.set_template(["5"], date="2026-10-19")
    assert repo.get_current_target().bus_bank == ("Line 1", "5", "20")

    repo.set_template(["5"], date="2026-10-19", bus_bank=["5", "7"])
    assert repo.get_current_target().bus_bank == ("5", "7")

def test_ride_log_add_undo_remove_clear(db_session):
    repo = DBBusStore(db_session)
    day = "2026-10-19"

    for bus in ["10", "Line 1", "N5", "5"]:
        repo.add_entry(day, bus)
    assert [e.bus_number for e in repo.list_log(day)] == ["10", "Line 1", "N5", "5"]

    assert repo.undo_last(day).bus_number == "5"
    assert repo.remove_entry(day, 1).bus_number == "Line 1"
    assert repo.remove_entry(day, 7) is None
    assert [e.bus_number for e in repo.list_log(day)] == ["10", "N5"]

    # other days untouched
    repo.add_entry("2026-10-18", "99")
    repo.clear_log(day)
    assert repo.list_log(day) == []
    assert repo.undo_last(day) is None
    assert len(repo.list_log("2026-10-18")) == 1

def test_game_state_round_trip_through_db(db_session):
    repo = DBBusStore(db_session)
    repo.set_template("5, 10, 5", date="2026-10-19")
    target = repo.get_current_target()

    store = DBGameStateStore(db_session)
    game = BusdleGame(target, store, key="busdle_game_state:me")
    game.submit_guess(["10", "5", "5"], store)
    game.submit_guess(["5", "10", "5"], store)

    reloaded = BusdleGame(target, DBGameStateStore(db_session), key="busdle_game_state:me")
    assert [(e.guess, e.verdict) for e in reloaded.get_history()] == [
        (e.guess, e.verdict) for e in game.get_history()
    ]
    assert reloaded.is_won() is True

    # reset removes progress for the next reload too
    reloaded.reset(store)
    again = BusdleGame(target, DBGameStateStore(db_session), key="busdle_game_state:me")
    assert again.get_history() == []
