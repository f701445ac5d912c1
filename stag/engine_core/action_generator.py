"""
Action Generator - Enumerates what a player may do in a game state.

The action generator is used by:
1. The view projector, to list available action names
2. The hot-seat CLI, to suggest concrete moves
3. Random-play tests, to drive whole games through the reducer

Two levels:
- available_actions(): action NAMES the dispatcher will accept from a
  seat. Never lists a name the dispatcher would reject.
- ActionGenerator.generate(): fully specified Action objects. Selection
  actions (discards, placements) have combinatorially many variants, so
  only a bounded sample of them is generated. Every generated action is
  legal.
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import combinations

from ..game.cards import CardType, is_type, parse_card_value, stag_discard_cost
from .state import GameState, PlayerState, TurnPhase
from .action import Action, ActionType
from .pending import (
    PendingDraftKingdom,
    PendingStagKingdomDraft,
    PendingStagKingdomPickSelf,
    PendingHuntResponse,
    PendingHuntDiscard,
    PendingMagiChoice,
    PendingMagiPlaceCards,
    PendingTitheDiscard,
    PendingTitheContribute,
    PendingKingCommandResponse,
    PendingKingCommandCollect,
    PendingDiscardToHandLimit,
    expected_action_name,
)


def playable_stags(state: GameState, player: PlayerState) -> list[str]:
    """Stags in hand whose discard cost the rest of the hand can pay."""
    return [
        c for c in player.hand
        if is_type(c, CardType.STAG)
        and len(player.hand) - 1 >= stag_discard_cost(parse_card_value(c), state.rules)
    ]


def has_territory_card(player: PlayerState) -> bool:
    return any(not is_type(c, CardType.STAG) for c in player.hand)


def available_actions(state: GameState, seat: int) -> list[str]:
    """Action names the given seat can send right now."""
    if state.winner:
        return []
    try:
        player = state.get_player_by_seat(seat)
    except KeyError:
        return []
    if player.eliminated:
        return []

    pending = state.pending_action
    if pending is not None:
        if pending.responder_seat == seat:
            return [expected_action_name(pending)]
        return []

    if seat != state.current_seat:
        return []

    if state.turn_phase == TurnPhase.KINGDOM_ACTION:
        actions = [ActionType.DRAW_CARD.value]
        if state.kingdom:
            actions.append(ActionType.DRAFT_KINGDOM.value)
        if playable_stags(state, player):
            actions.append(ActionType.PLAY_STAG.value)
        return actions

    if state.turn_phase == TurnPhase.TERRITORY_ACTION:
        if has_territory_card(player):
            return [ActionType.PLAY_TERRITORY.value]
        return [ActionType.NO_TERRITORY.value]

    return []


@dataclass
class ActionGenerator:
    """
    Generates legal, fully specified actions.

    max_selections caps how many variants are produced for each
    choose-N-cards decision.
    """
    max_selections: int = 8

    def generate(self, state: GameState, seat: int) -> list[Action]:
        """Generate legal actions for one seat."""
        names = available_actions(state, seat)
        if not names:
            return []
        player = state.get_player_by_seat(seat)

        if state.pending_action is not None:
            return self._generate_responses(state, player)

        actions: list[Action] = []
        pid = player.id
        for name in names:
            if name == ActionType.DRAW_CARD.value:
                actions.append(Action.draw_card(pid))
            elif name == ActionType.DRAFT_KINGDOM.value:
                actions.extend(Action.draft_kingdom(pid, c) for c in state.kingdom)
            elif name == ActionType.PLAY_STAG.value:
                actions.extend(self._generate_stag_plays(state, player))
            elif name == ActionType.PLAY_TERRITORY.value:
                seen = set()
                for c in player.hand:
                    if not is_type(c, CardType.STAG) and c not in seen:
                        seen.add(c)
                        actions.append(Action.play_territory(pid, c))
            elif name == ActionType.NO_TERRITORY.value:
                actions.append(Action.no_territory(pid))
        return actions

    def _selections(self, pool: list[str], count: int) -> list[list[str]]:
        picks = []
        for combo in combinations(pool, count):
            picks.append(list(combo))
            if len(picks) >= self.max_selections:
                break
        return picks

    def _generate_stag_plays(self, state: GameState, player: PlayerState) -> list[Action]:
        actions = []
        for stag in playable_stags(state, player):
            cost = stag_discard_cost(parse_card_value(stag), state.rules)
            rest = [c for c in player.hand if c != stag]
            for discards in self._selections(rest, cost):
                actions.append(Action.play_stag(player.id, stag, discards))
        return actions

    def _generate_responses(self, state: GameState, player: PlayerState) -> list[Action]:
        """Generate responses to the pending action (caller checked the responder)."""
        pending = state.pending_action
        pid = player.id
        respond = Action.respond

        if isinstance(pending, (PendingDraftKingdom, PendingStagKingdomDraft, PendingStagKingdomPickSelf)):
            action_type = (
                ActionType.DRAFT_KINGDOM_PICK
                if isinstance(pending, PendingDraftKingdom)
                else ActionType.STAG_KINGDOM_PICK
            )
            return [respond(pid, action_type, cardId=c) for c in state.kingdom]

        if isinstance(pending, PendingHuntResponse):
            actions = [respond(pid, ActionType.HUNT_RESPONSE, avert=False)]
            avert = self._minimal_healing(player, pending.hunt_total_value)
            if avert is not None:
                healing_ids, magi_ids = avert
                actions.append(respond(
                    pid, ActionType.HUNT_RESPONSE,
                    avert=True, healingIds=healing_ids, magiIds=magi_ids,
                ))
            return actions

        if isinstance(pending, PendingHuntDiscard):
            count = min(pending.discards_per_player, len(player.hand))
            return [
                respond(pid, ActionType.HUNT_DISCARD, cardIds=ids)
                for ids in self._selections(player.hand, count)
            ]

        if isinstance(pending, PendingMagiChoice):
            total = state.rules.magi_split_total
            return [
                respond(pid, ActionType.MAGI_CHOICE, drawTop=top, drawBottom=bottom,
                        placeBottom=total - top - bottom)
                for top in range(total + 1)
                for bottom in range(total + 1 - top)
            ]

        if isinstance(pending, PendingMagiPlaceCards):
            return [
                respond(pid, ActionType.MAGI_PLACE_CARDS, cardIds=ids)
                for ids in self._selections(player.hand, pending.place_bottom_count)
            ]

        if isinstance(pending, PendingTitheDiscard):
            count = min(state.rules.tithe_cycle_size, len(player.hand))
            return [
                respond(pid, ActionType.TITHE_DISCARD, cardIds=ids)
                for ids in self._selections(player.hand, count)
            ]

        if isinstance(pending, PendingTitheContribute):
            return [
                respond(pid, ActionType.TITHE_CONTRIBUTE, contribute=True),
                respond(pid, ActionType.TITHE_CONTRIBUTE, contribute=False),
            ]

        if isinstance(pending, PendingKingCommandResponse):
            stags = player.hand_of_type(CardType.STAG)
            if not stags:
                return [respond(pid, ActionType.KING_COMMAND_RESPONSE)]
            return [respond(pid, ActionType.KING_COMMAND_RESPONSE, cardId=c) for c in stags]

        if isinstance(pending, PendingKingCommandCollect):
            available = [c for c in pending.discarded_stags if c in state.discard]
            options = [[], available]
            return [
                respond(pid, ActionType.KING_COMMAND_COLLECT, cardIds=ids)
                for ids in (options if available else [[]])
            ]

        if isinstance(pending, PendingDiscardToHandLimit):
            count = len(player.hand) - player.hand_limit(state.rules)
            return [
                respond(pid, ActionType.DISCARD_TO_HAND_LIMIT, cardIds=ids)
                for ids in self._selections(player.hand, max(count, 0))
            ]

        return []

    def _minimal_healing(
        self, player: PlayerState, threat: int
    ) -> tuple[list[str], list[str]] | None:
        """Fewest hand Healing and territory Magi that avert a threat, or None."""
        needed = threat - player.healing_value()
        healing_ids: list[str] = []
        magi_ids: list[str] = []
        for card_id in player.hand_of_type(CardType.HEALING):
            if needed <= 0:
                break
            healing_ids.append(card_id)
            needed -= 1
        for card_id in player.territory_of_type(CardType.MAGI):
            if needed <= 0:
                break
            if card_id not in player.territory_magi_as_healing:
                magi_ids.append(card_id)
                needed -= 1
        if needed > 0:
            return None
        return healing_ids, magi_ids


def legal_actions(state: GameState, seat: int) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    return ActionGenerator().generate(state, seat)
