"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure from the caller's view: (state, action) -> new state
- Works on a deep copy, so a rejected action leaves the input untouched
- Validates before applying; handlers validate fully before mutating
- Returns ActionResult with success/failure and an ErrorCode
- Runs auto-advance after every successful action
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable
import logging

from ..config import EngineSettings, get_settings
from ..game.cards import CardType, is_card_id, parse_card_type
from .state import GameState, PlayerState, TurnPhase
from .action import Action, ActionType, ActionResult, ErrorCode
from .payloads import Payload, parse_payload
from .pending import PendingKind, expected_action_name
from .turn import auto_advance
from . import handlers

logger = logging.getLogger(__name__)

Handler = Callable[[GameState, PlayerState, Any], "str | None"]

# Turn actions the current player may take in each input phase
PHASE_ACTIONS: dict[TurnPhase, set[ActionType]] = {
    TurnPhase.KINGDOM_ACTION: {
        ActionType.DRAW_CARD,
        ActionType.DRAFT_KINGDOM,
        ActionType.PLAY_STAG,
    },
    TurnPhase.TERRITORY_ACTION: {
        ActionType.PLAY_TERRITORY,
        ActionType.NO_TERRITORY,
    },
}

TURN_HANDLERS: dict[ActionType, Handler] = {
    ActionType.DRAW_CARD: handlers.handle_draw_card,
    ActionType.DRAFT_KINGDOM: handlers.handle_draft_kingdom,
    ActionType.PLAY_STAG: handlers.handle_play_stag,
    ActionType.NO_TERRITORY: handlers.handle_no_territory,
}

# playTerritory is routed by the type of the card played
TERRITORY_HANDLERS: dict[CardType, Handler] = {
    CardType.HEALING: handlers.handle_play_healing,
    CardType.HUNT: handlers.handle_play_hunt,
    CardType.MAGI: handlers.handle_play_magi,
    CardType.TITHE: handlers.handle_play_tithe,
    CardType.KINGS_COMMAND: handlers.handle_play_kings_command,
}

# Responses, keyed by the pending action they resolve
PENDING_HANDLERS: dict[PendingKind, Handler] = {
    PendingKind.DRAFT_KINGDOM: handlers.handle_draft_kingdom_pick,
    PendingKind.STAG_KINGDOM_DRAFT: handlers.handle_stag_kingdom_pick,
    PendingKind.STAG_KINGDOM_PICK_SELF: handlers.handle_stag_kingdom_pick,
    PendingKind.HUNT_RESPONSE: handlers.handle_hunt_response,
    PendingKind.HUNT_DISCARD: handlers.handle_hunt_discard,
    PendingKind.MAGI_CHOICE: handlers.handle_magi_choice,
    PendingKind.MAGI_PLACE_CARDS: handlers.handle_magi_place_cards,
    PendingKind.TITHE_DISCARD: handlers.handle_tithe_discard,
    PendingKind.TITHE_CONTRIBUTE: handlers.handle_tithe_contribute,
    PendingKind.KING_COMMAND_RESPONSE: handlers.handle_king_command_response,
    PendingKind.KING_COMMAND_COLLECT: handlers.handle_king_command_collect,
    PendingKind.DISCARD_TO_HAND_LIMIT: handlers.handle_discard_to_hand_limit,
}


class _Rejected(Exception):
    """Internal: carries a dispatch rejection to the single failure exit."""

    def __init__(self, message: str, code: ErrorCode):
        super().__init__(message)
        self.code = code


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    Settings bound the auto-advance loop.
    """
    settings: EngineSettings = field(default_factory=get_settings)

    def apply(
        self,
        state: GameState,
        player_id: str,
        action_name: str,
        payload: dict[str, Any] | None = None,
    ) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        logger.debug("Dispatch %s from %s", action_name, player_id)
        try:
            player = self._validate_actor(state, player_id)
            action_type = self._validate_action(state, player, action_name)
            parsed, error = parse_payload(action_type, payload)
            if error:
                raise _Rejected(error, ErrorCode.INVALID_PAYLOAD)
            handler = self._get_handler(state, action_type, parsed)
        except _Rejected as rejected:
            logger.debug("Rejected %s from %s: %s", action_name, player_id, rejected)
            return ActionResult.failure(str(rejected), error_code=rejected.code)

        new_state = state.clone()
        new_player = new_state.get_player(player_id)
        try:
            error = handler(new_state, new_player, parsed)
        except Exception as e:
            logger.exception("Handler for %s raised", action_name)
            return ActionResult.failure(str(e), error_code=ErrorCode.HANDLER_ERROR)
        if error:
            logger.debug("Rule violation in %s from %s: %s", action_name, player_id, error)
            return ActionResult.failure(error, error_code=ErrorCode.RULE_VIOLATION)

        auto_advance(new_state, self.settings.max_auto_advance_steps)
        changes = [entry.msg for entry in new_state.log[len(state.log):]]
        return ActionResult.success_with_state(new_state, changes=changes)

    def apply_action(self, state: GameState, action: Action) -> ActionResult:
        """Apply an Action request object."""
        return self.apply(state, action.player_id, action.name, action.payload)

    def _validate_actor(self, state: GameState, player_id: str) -> PlayerState:
        """Game-level checks that do not depend on the action."""
        if state.winner:
            raise _Rejected("Game is over", ErrorCode.GAME_OVER)
        player = state.get_player(player_id)
        if player is None:
            raise _Rejected(f"Player {player_id} not found", ErrorCode.PLAYER_NOT_FOUND)
        if player.eliminated:
            raise _Rejected("You have been eliminated", ErrorCode.PLAYER_ELIMINATED)
        return player

    def _validate_action(self, state: GameState, player: PlayerState, action_name: str) -> ActionType:
        """
        Check the action name is legal for this player right now.

        With a pending action only its response, from its responder, is
        accepted. Otherwise only the current player's phase actions are.
        """
        illegal = _Rejected(
            f"'{action_name}' is not a legal action right now", ErrorCode.ILLEGAL_ACTION
        )
        try:
            action_type = ActionType(action_name)
        except ValueError:
            raise illegal from None

        pending = state.pending_action
        if pending is not None:
            if action_name != expected_action_name(pending):
                raise illegal
            if player.seat_index != pending.responder_seat:
                raise _Rejected("Not your turn to respond", ErrorCode.NOT_YOUR_TURN)
            return action_type

        if player.seat_index != state.current_seat:
            raise _Rejected("Not your turn", ErrorCode.NOT_YOUR_TURN)
        if action_type not in PHASE_ACTIONS.get(state.turn_phase, set()):
            raise illegal
        return action_type

    def _get_handler(self, state: GameState, action_type: ActionType, payload: Payload) -> Handler:
        """Get the handler function for a validated action."""
        if state.pending_action is not None:
            return PENDING_HANDLERS[state.pending_action.kind]
        if action_type != ActionType.PLAY_TERRITORY:
            return TURN_HANDLERS[action_type]

        card_id = payload.card_id
        if not is_card_id(card_id):
            raise _Rejected(f"Invalid card id: {card_id}", ErrorCode.INVALID_PAYLOAD)
        card_type = parse_card_type(card_id)
        if card_type == CardType.STAG:
            raise _Rejected("Stags are played as a kingdom action", ErrorCode.RULE_VIOLATION)
        return TERRITORY_HANDLERS[card_type]


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer from the environment settings and applies the action.
    """
    return Reducer().apply_action(state, action)


def apply(
    state: GameState,
    player_id: str,
    action_name: str,
    payload: dict[str, Any] | None = None,
) -> tuple[GameState, str | None]:
    """
    Boundary function: apply one request.

    Returns (new_state, None) on success, or (the unchanged input state,
    error message) on failure.
    """
    result = Reducer().apply(state, player_id, action_name, payload)
    if not result.success:
        return state, result.error
    return result.new_state, None
