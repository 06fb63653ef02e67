"""
local_game.py — Drive a Flip 6 session WITHOUT a network
========================================================

Feeds raw command payloads through ``GameEngine.dispatch`` the way a
websocket adapter would, and prints each broadcast snapshot.

Run with:  python local_game.py
"""

from flip6 import GameEngine, EngineConfig, setup_logging


def show(code, snapshot):
    hands = {}
    for card in snapshot["hands"]:
        hands.setdefault(card["playerId"], []).append(card["cardValue"])
    pending = snapshot["pendingAction"]
    print(f"  [{code}] {snapshot['phase']:<17} turn={snapshot['currentTurn']} "
          f"draw={snapshot['drawCount']} discard={snapshot['discardCount']} "
          f"pending={pending['type'] if pending else '-'} hands={hands}")


def main():
    setup_logging(log_file_path=None, level="WARNING")
    engine = GameEngine(EngineConfig(seed=2026, preview_count=3))
    engine.subscribe(show)

    print("Join two players")
    alice = engine.dispatch({"command": "join", "session_code": "demo",
                             "name": "Alice", "connection_id": "ws-1"}).player_id
    bob = engine.dispatch({"command": "join", "session_code": "demo",
                           "name": "Bob", "connection_id": "ws-2"}).player_id

    print("Alice draws twice, then stays")
    for _ in range(2):
        result = engine.dispatch({"command": "draw", "session_code": "DEMO",
                                  "player_id": alice})
        pending = result.snapshot["pendingAction"]
        if pending and pending["type"] == "SecondChance":
            engine.dispatch({"command": "resolve_action", "session_code": "DEMO",
                             "player_id": alice, "action": "SecondChance",
                             "accept": True})
        elif pending:
            engine.dispatch({"command": "resolve_action", "session_code": "DEMO",
                             "player_id": alice, "action": pending["type"],
                             "target_id": bob})
    engine.dispatch({"command": "stay", "session_code": "DEMO", "player_id": alice})

    print("Bob drops off, the session pauses")
    engine.dispatch({"command": "disconnect", "connection_id": "ws-2"})

    print("Bob comes back from another tab")
    engine.dispatch({"command": "join", "session_code": "DEMO",
                     "name": "bob", "connection_id": "ws-3"})

    snapshot = engine.get_snapshot("DEMO")
    if snapshot["currentTurn"] == bob:
        engine.dispatch({"command": "stay", "session_code": "DEMO", "player_id": bob})

    snapshot = engine.get_snapshot("DEMO")
    if snapshot["roundOver"]:
        print("End the round")
        engine.dispatch({"command": "end_round", "session_code": "DEMO",
                         "player_id": alice})
        for score in engine.round_history("DEMO"):
            print(f"  round {score.round_number}: player {score.player_id} "
                  f"scored {score.score}")


if __name__ == "__main__":
    main()
