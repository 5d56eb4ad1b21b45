from __future__ import annotations

from statemachine import State, StateMachine

from .state import MatchState, Phase


class MatchFSM(StateMachine):
    """Phase guard around a MatchState.

    instructions -> playing -> victory | gameOver -> instructions.
    A finished match may also be restarted straight into playing; any
    other phase can return to instructions. The FSM only validates edges;
    the game object does the setup and driver work around each transition.
    """

    instructions = State("Instructions", value=Phase.INSTRUCTIONS.value, initial=True)
    playing = State("Playing", value=Phase.PLAYING.value)
    victory = State("Victory", value=Phase.VICTORY.value)
    game_over = State("Game over", value=Phase.GAME_OVER.value)

    begin = instructions.to(playing) | victory.to(playing) | game_over.to(playing)
    win = playing.to(victory)
    lose = playing.to(game_over)
    back_to_instructions = (
        playing.to(instructions)
        | victory.to(instructions)
        | game_over.to(instructions)
    )

    def __init__(self, match: MatchState):
        self.match = match
        super().__init__(start_value=match.phase.value)

    def sync_phase_to_model(self) -> None:
        self.match.phase = Phase(str(self.current_state.value))
