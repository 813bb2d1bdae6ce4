from flask import Flask, request, jsonify
from flask_socketio import SocketIO, emit

import config
from game_session import GameState, Outcome, OutcomeKind, WELCOME_MESSAGE, status_message
from hourly_game import HourlyGame, HourlyResetWorker
from word_repository import default_repository

NEW_WORD_MESSAGE = "New hour, new word. Good luck!"


# Flask app setup
def create_app():
    """Factory function to create and configure Flask app."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.SECRET_KEY
    return app

app = create_app()

# SocketIO pushes the hourly new_word notice to the open board
socketio = SocketIO(app, cors_allowed_origins=[f"http://{config.HOST}:{config.PORT}"])

repository = default_repository()
game = HourlyGame(repository.words(), repository.word_set())

# Track the background worker so it is only started once
reset_worker = None


def board_state():
    """Snapshot of the board for the client."""
    session = game.session
    state = {
        "status": session.state.value,
        "guesses": [
            {"guess": record.word, "colors": [v.value for v in record.verdicts]}
            for record in session.guesses
        ],
        "remaining": session.remaining,
        "max_guesses": config.MAX_GUESSES,
        "word_length": config.WORD_LENGTH,
        "bucket": game.bucket,
        "seconds_until_next_word": int(game.seconds_until_next_word()),
        "message": WELCOME_MESSAGE,
    }
    if session.is_over:
        kind = OutcomeKind.WON if session.state == GameState.WON else OutcomeKind.LOST
        state["message"] = status_message(Outcome(kind, target=session.target))
        state["target"] = session.target
    return state


def guess_response(raw):
    """Run a guess and build the (body, status code) pair for it."""
    outcome = game.submit_guess(raw)
    message = status_message(outcome)

    if outcome.kind == OutcomeKind.LOCKED:
        return {"success": False, "outcome": outcome.kind.value, "error": message}, 409
    if not outcome.accepted:
        return {"success": False, "outcome": outcome.kind.value, "error": message}, 400

    body = {
        "success": True,
        "outcome": outcome.kind.value,
        "colors": [v.value for v in outcome.verdicts],
        "status": game.session.state.value,
        "remaining": game.session.remaining,
        "message": message,
    }
    if outcome.target is not None:
        body["target"] = outcome.target
    return body, 200


# --------------------
# Basic routes
# --------------------
@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok", "words_loaded": len(repository.words())})


@app.route("/api/state")
def get_state():
    """Current board, rotating to the new word first if the hour changed."""
    game.refresh()
    return jsonify(board_state())


@app.route("/api/guess", methods=["POST"])
def make_guess():
    """Submit a guess for the current board."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({
            "success": False,
            "error": "No JSON data provided",
            "help": "Send a POST request with Content-Type: application/json"
        }), 400

    body, status = guess_response(data.get("guess"))
    return jsonify(body), status


# --------------------
# SocketIO events
# --------------------
@socketio.on("connect")
def on_connect():
    """Send the board to a newly opened client."""
    game.refresh()
    emit("state", board_state())


@socketio.on("submit_guess")
def on_submit_guess(data):
    """Process a guess sent over the socket."""
    guess = data.get("guess") if isinstance(data, dict) else None
    body, status = guess_response(guess)
    if status == 200:
        emit("guess_feedback", body)
    else:
        emit("guess_error", body)


def on_new_bucket(bucket):
    """Called by the reset worker at every hour boundary."""
    game.refresh()
    print(f"New word for bucket {bucket}")
    socketio.emit("new_word", {"bucket": bucket, "message": NEW_WORD_MESSAGE})


def start_reset_worker():
    global reset_worker
    if reset_worker is None:
        reset_worker = HourlyResetWorker(on_new_bucket, clock=game.clock)
        reset_worker.start()
    return reset_worker


if __name__ == "__main__":
    start_reset_worker()
    print(f"Serving hourly Wordle on http://{config.HOST}:{config.PORT}")
    try:
        socketio.run(app, host=config.HOST, port=config.PORT, allow_unsafe_werkzeug=True)
    finally:
        reset_worker.stop()
