from state.ledger import InMemoryLedger

from . import transitions
from .errors import MastermindError
from .game_logger import game_logger
from .guess import Guess
from .ruleset import load_rules
from .secret_code import Code


class Board:
    """
    Game board: runs the turn-state machine against a ledger.

    The guess history is kept per board. Guesses and hints published by
    other boards on the same ledger are folded in from the latest state
    whenever the history is read or extended, as long as turn parity is
    enforced (the parity of the turn tells whether the last guess has been
    answered). Rounds completed elsewhere between two reads only leave the
    latest one visible.
    """

    def __init__(self, game_id, ledger=None, rules=None, logger=None):
        """Initialize the board for one game id with a given ruleset."""
        self.game_id = game_id
        self.ledger = ledger if ledger is not None else InMemoryLedger()
        self.rules = rules or load_rules()
        self.logger = logger or game_logger
        self.guesses = []

    @property
    def state(self):
        """The current GameState from the ledger (None before initialize)."""
        return self.ledger.read_state(self.game_id)

    @property
    def phase(self):
        return transitions.phase_of(self.state)

    @property
    def is_won(self):
        return self.phase is transitions.Phase.WON

    def _apply(self, method, step, expected):
        """Run one transition; write the result only if every guard passed."""
        current = self.state
        try:
            if expected is not None:
                transitions.expect_state(current, expected)
            new_state = step(current)
        except MastermindError as e:
            self.logger.log_rejection(self.game_id, method, e)
            raise

        if new_state != current:
            self.ledger.write_state(self.game_id, new_state)
        self.logger.log_transition(self.game_id, method, new_state)
        return new_state

    def initialize(self, solution, blind):
        """Commit to a solution and start the game."""
        new_state = self._apply(
            "initialize",
            lambda current: transitions.initialize(solution, blind, current),
            None,
        )
        self.guesses = []
        return new_state

    def _sync(self):
        """Fold the ledger's latest guess and hint into the history."""
        state = self.state
        if (
            not self.rules["enforce_turn_parity"]
            or state is None
            or state.last_guess == Code.zero()
        ):
            return

        answered = state.turn_number % 2 == 0
        turn = state.turn_number - 1 if answered else state.turn_number
        if not self.guesses or self.guesses[-1].turn_number != turn:
            self.guesses.append(Guess(state.last_guess, turn))
        if answered and not self.guesses[-1].answered:
            self.guesses[-1].apply_feedback((state.black_pegs, state.white_pegs))

    def publish_guess(self, guess, expected=None):
        """Publish the guesser's next guess.

        If expected is given, the step is rejected unless it equals the
        current state.
        """
        self._sync()
        new_state = self._apply(
            "publish_guess",
            lambda current: transitions.publish_guess(
                current, guess, self.rules["enforce_turn_parity"]
            ),
            expected,
        )
        self.guesses.append(Guess(new_state.last_guess, new_state.turn_number))
        return new_state

    def publish_hint(self, solution, blind, expected=None):
        """Open the solution and publish feedback for the last guess."""
        self._sync()
        before = self.state
        new_state = self._apply(
            "publish_hint",
            lambda current: transitions.publish_hint(
                current, solution, blind, self.rules["enforce_turn_parity"]
            ),
            expected,
        )
        if new_state != before and self.guesses:
            self.guesses[-1].apply_feedback((new_state.black_pegs, new_state.white_pegs))
        return new_state

    def get_feedback_history(self):
        """Return the history of guesses and feedback seen by this board."""
        self._sync()
        result = []
        for guess in self.guesses:
            result.append((guess.get_guess(), guess.get_feedback()))

        return result

    def render(self):
        """Return a text representation of the board."""
        self._sync()

        colors = self.rules["display"]["emoji_map"]
        length = self.rules["code_length"]
        title = "| +++++++++++++ Mastermind ++++++++++++ |"
        colums = "| ++++ Guesses ++++ | ++++ Feedback +++ |"
        line = "+----" * (2 * length) + "+"

        rows = [line, title, line, colums, line]
        for guess in self.guesses:
            attempt_line = ""
            for c in guess.get_guess():
                attempt_line += "| " + colors[c] + " "
            black, white = guess.get_feedback()
            black, white = black or 0, white or 0
            for i in range(black):
                attempt_line += "| " + colors["BK"] + " "
            for i in range(white):
                attempt_line += "| " + colors["W"] + " "
            for i in range(max(0, length - black - white)):
                attempt_line += "|    "
            rows.append(attempt_line + "|")
            rows.append(line)
        return "\n".join(rows)
